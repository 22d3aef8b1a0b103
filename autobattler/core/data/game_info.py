"""Static unit data supplied to the combat core.

The combat queries only ever read ``speed`` (turn timing) and ``attack_range``
(whether to attack or move); the remaining fields feed damage and the HP/PP
bookkeeping in the combat manager.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Optional


@dataclass(frozen=True)
class UnitStats:
    """Base statistics for a unit template."""
    name: str
    hp_max: int
    attack: int
    defense: int
    speed: int
    attack_range: int = 1
    pp_max: Optional[int] = None

    def __post_init__(self):
        if self.hp_max <= 0:
            raise ValueError(f"{self.name}: hp_max must be positive, got {self.hp_max}")
        if self.speed <= 0:
            raise ValueError(f"{self.name}: speed must be positive, got {self.speed}")
        if self.attack_range < 1:
            raise ValueError(f"{self.name}: attack_range must be at least 1, got {self.attack_range}")

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "UnitStats":
        """Build stats from a YAML mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)} - {"name"}
        values = {key: value for key, value in data.items() if key in known}
        try:
            return cls(name=name, **values)
        except TypeError as e:
            raise ValueError(f"Invalid stats for {name}: {e}")

    def with_overrides(self, overrides: dict[str, Any]) -> "UnitStats":
        """Return a copy with selected fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown stat override(s) for {self.name}: {sorted(unknown)}")
        return replace(self, **overrides)

"""Combat configuration loader.

Tuning values (turn timing, step budget, log buffer size) live in
``assets/combat.yaml`` so that they can be adjusted without touching code.
Missing files fall back to built-in defaults; malformed values are rejected.
"""

import math
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml


@dataclass(frozen=True)
class CombatConfig:
    """Tuning values for the combat core and its reference tick loop."""

    # Turn delay in milliseconds is turn_delay_constant / speed
    turn_delay_constant: float = 100000.0
    # Fraction of the turn delay a move tween takes
    move_duration_ratio: float = 0.75
    # Cells a unit may advance along its path per turn
    step_budget: int = 1
    # Safety cap on turns processed by CombatManager.run()
    max_turns: int = 500
    # Messages kept by the LogManager ring buffer
    log_buffer_size: int = 1000

    def __post_init__(self):
        if self.turn_delay_constant <= 0:
            raise ValueError(f"turn_delay_constant must be positive, got {self.turn_delay_constant}")
        if not 0 < self.move_duration_ratio <= 1:
            raise ValueError(f"move_duration_ratio must be in (0, 1], got {self.move_duration_ratio}")
        if self.step_budget < 1:
            raise ValueError(f"step_budget must be at least 1, got {self.step_budget}")
        if self.max_turns < 1:
            raise ValueError(f"max_turns must be at least 1, got {self.max_turns}")
        if self.log_buffer_size < 1:
            raise ValueError(f"log_buffer_size must be at least 1, got {self.log_buffer_size}")

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "CombatConfig":
        """Create a config from a mapping, keeping defaults for absent keys.

        An empty section (None) yields the defaults.

        Raises:
            ValueError: For a non-mapping, unknown keys or values of the wrong kind
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Combat config must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown combat config keys: {sorted(unknown)}")

        values: dict[str, Any] = {}
        for key, value in data.items():
            values[key] = _coerce(key, value, getattr(cls, key))
        return cls(**values)


def _coerce(key: str, value: Any, default: Any) -> Any:
    """Cast a YAML value to the type of the field's default."""
    # bool is an int subclass; YAML true/false is never a valid number here
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Invalid value for {key}: {value!r}")
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"Invalid value for {key}: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"{key} must be finite, got {value!r}")

    if isinstance(default, int):
        if not number.is_integer():
            raise ValueError(f"{key} must be a whole number, got {value!r}")
        return int(number)
    return number


class CombatConfigLoader:
    """Loader for the combat configuration file with caching and fallbacks."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or self._find_default_config_path()
        self._cached_config: Optional[CombatConfig] = None

    def _find_default_config_path(self) -> str:
        """Find assets/combat.yaml by walking up from this file."""
        current_dir = Path(__file__).parent
        for _ in range(4):  # Limit search depth
            config_path = current_dir / "assets" / "combat.yaml"
            if config_path.exists():
                return str(config_path)
            current_dir = current_dir.parent

        return "assets/combat.yaml"

    def load_config(self, force_reload: bool = False) -> CombatConfig:
        """Load the configuration, using the cache if available.

        Raises:
            ValueError: If the file exists but cannot be parsed or validated
        """
        if self._cached_config is not None and not force_reload:
            return self._cached_config

        if not os.path.exists(self.config_path):
            self._cached_config = CombatConfig()
            return self._cached_config

        try:
            with open(self.config_path, "r", encoding="utf-8") as file:
                data = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse combat config {self.config_path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Combat config {self.config_path} must be a mapping")

        self._cached_config = CombatConfig.from_dict(data.get("combat", data))
        return self._cached_config


_default_loader = CombatConfigLoader()


def get_combat_config(force_reload: bool = False) -> CombatConfig:
    """Get the default combat configuration."""
    return _default_loader.load_config(force_reload)

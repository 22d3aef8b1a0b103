"""Combat state for a unit on the board.

CombatUnit is plain data owned by the simulation: HP, PP, side, position
and facing. It never drives presentation; the combat manager publishes
events describing each change instead.
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional

from ...core.data import Direction, Side, UnitStats, Vector2


def _pp_gain(amount: int) -> int:
    # Python's round() is banker's rounding; PP gain rounds halves up
    return min(2, int(amount / 10 + 0.5))


@dataclass(eq=False)
class CombatUnit:
    """A unit taking part in a battle.

    Equality is identity: two units with the same stats are still distinct.
    """
    stats: UnitStats
    side: Side
    position: Vector2
    unit_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    facing: Direction = Direction.DOWN
    hp_current: int = field(init=False)
    pp_current: int = field(init=False, default=0)

    def __post_init__(self):
        self.hp_current = self.stats.hp_max

    @property
    def name(self) -> str:
        return self.stats.name

    @property
    def speed(self) -> int:
        return self.stats.speed

    @property
    def attack_range(self) -> int:
        return self.stats.attack_range

    @property
    def hp_max(self) -> int:
        return self.stats.hp_max

    @property
    def pp_max(self) -> Optional[int]:
        return self.stats.pp_max

    @property
    def is_alive(self) -> bool:
        return self.hp_current > 0

    def _gain_pp(self, amount: int) -> None:
        if self.pp_max and self.pp_current < self.pp_max:
            self.pp_current = min(self.pp_max, self.pp_current + _pp_gain(amount))

    def deal_damage(self, amount: int) -> None:
        """Record that this unit dealt damage; attacking builds PP."""
        self._gain_pp(amount)

    def take_damage(self, amount: int) -> int:
        """Apply incoming damage.

        Negative amounts and hits on a defeated unit are ignored. Being hit
        also builds PP.

        Returns:
            HP actually lost
        """
        if amount < 0 or not self.is_alive:
            return 0
        self._gain_pp(amount)
        actual = min(self.hp_current, amount)
        self.hp_current -= actual
        return actual

    def __repr__(self) -> str:
        return (f"CombatUnit({self.name!r}, {self.side.value}, {self.position}, "
                f"hp={self.hp_current}/{self.hp_max})")

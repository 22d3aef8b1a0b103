"""Turn timing derived from unit speed.

Both functions are pure: the delay depends only on the unit's speed and the
configured constants, so the scheduler and the renderer always agree on how
long an action takes.
"""

from typing import Optional, Protocol

from ..config_loader import CombatConfig, get_combat_config


class HasSpeed(Protocol):
    speed: int


def get_turn_delay(unit: HasSpeed, config: Optional[CombatConfig] = None) -> int:
    """Milliseconds a unit waits between actions.

    Monotonically decreasing in speed: a faster unit acts more often.

    Args:
        unit: Anything exposing a ``speed`` stat (UnitStats or CombatUnit)
        config: Combat tuning values; the default configuration if None

    Returns:
        The delay in whole milliseconds, at least 1

    Raises:
        ValueError: If speed is not positive
    """
    config = config or get_combat_config()
    speed = unit.speed
    if speed <= 0:
        raise ValueError(f"Speed must be positive to derive a turn delay, got {speed}")
    return max(1, round(config.turn_delay_constant / speed))


def get_move_duration(unit: HasSpeed, config: Optional[CombatConfig] = None) -> int:
    """Length of a move tween, a fixed fraction of the turn delay."""
    config = config or get_combat_config()
    return max(1, round(get_turn_delay(unit, config) * config.move_duration_ratio))

"""Combat events and their types.

Unit state changes are published as discrete events so that a presentation
layer can subscribe to them instead of being driven inline by combat code.

Event Design Principles:
- Events are immutable dataclasses
- All events include the timeline_time at which they happened
- Events carry rich objects (CombatUnit, Vector2) rather than raw fields
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from abc import ABC
from enum import Enum, auto

if TYPE_CHECKING:
    from ..data.data_structures import Vector2
    from ..data.game_enums import Direction, Side
    from ...game.entities.unit import CombatUnit


class EventType(Enum):
    """Types of events that managers can subscribe to."""
    # Battle flow
    BATTLE_STARTED = auto()
    BATTLE_ENDED = auto()
    UNIT_TURN_STARTED = auto()

    # Unit state changes
    UNIT_MOVED = auto()
    UNIT_ATTACKED = auto()
    UNIT_DAMAGED = auto()
    UNIT_DEFEATED = auto()

    # Logging
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all events."""
    timeline_time: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class BattleStarted(GameEvent):
    """Emitted once all units are scheduled."""
    unit_count: int

    def __post_init__(self):
        # frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.BATTLE_STARTED)


@dataclass(frozen=True)
class BattleEnded(GameEvent):
    """Emitted when one side has no opponents left or the turn cap is hit."""
    winner: Optional["Side"]
    turns_taken: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_ENDED)


@dataclass(frozen=True)
class UnitTurnStarted(GameEvent):
    """Emitted when a unit is popped from the timeline."""
    unit: "CombatUnit"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_TURN_STARTED)


@dataclass(frozen=True)
class UnitMoved(GameEvent):
    """Emitted after the board applied a move.

    ``duration`` is the tween length the presentation layer should use.
    """
    unit: "CombatUnit"  # unit.position is the destination
    from_position: "Vector2"
    to_position: "Vector2"
    facing: "Direction"
    duration: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_MOVED)


@dataclass(frozen=True)
class UnitAttacked(GameEvent):
    """Emitted when a unit attacks another."""
    attacker: "CombatUnit"
    target: "CombatUnit"
    facing: "Direction"
    damage: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_ATTACKED)


@dataclass(frozen=True)
class UnitDamaged(GameEvent):
    """Emitted after a unit loses HP to an attack."""
    unit: "CombatUnit"
    amount: int
    hp_remaining: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_DAMAGED)


@dataclass(frozen=True)
class UnitDefeated(GameEvent):
    """Emitted when a unit reaches 0 HP and leaves the board."""
    unit: "CombatUnit"
    position: "Vector2"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_DEFEATED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Request to add a message to the battle log."""
    message: str
    category: str = "SYSTEM"
    level: str = "INFO"
    source: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(GameEvent):
    """Debug-only message for troubleshooting."""
    message: str
    source: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)

"""Event system for publisher-subscriber communication.

- event_manager.py: Publisher-subscriber event routing
- events.py: Event definitions for unit state changes and logging
"""

from .event_manager import EventManager, EventSubscriber
from .events import (
    GameEvent,
    EventType,
    BattleStarted,
    BattleEnded,
    UnitTurnStarted,
    UnitMoved,
    UnitAttacked,
    UnitDamaged,
    UnitDefeated,
    LogMessage,
    DebugMessage,
)

__all__ = [
    "EventManager",
    "EventSubscriber",
    "GameEvent",
    "EventType",
    "BattleStarted",
    "BattleEnded",
    "UnitTurnStarted",
    "UnitMoved",
    "UnitAttacked",
    "UnitDamaged",
    "UnitDefeated",
    "LogMessage",
    "DebugMessage",
]

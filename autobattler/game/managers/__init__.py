"""Manager systems coordinating a battle through the event bus."""

from .combat_manager import CombatManager, TurnOutcome
from .log_manager import LogManager, LogLevel, LogCategory, LogEntry

__all__ = [
    "CombatManager",
    "TurnOutcome",
    "LogManager",
    "LogLevel",
    "LogCategory",
    "LogEntry",
]

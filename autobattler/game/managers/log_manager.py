"""
Battle log with categorization and filtering.

The LogManager listens on the event bus: components publish LogMessage and
DebugMessage events, and unit state events (moves, attacks, defeats) are
turned into readable battle log lines.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ...core.events import (
    BattleEnded,
    BattleStarted,
    DebugMessage,
    EventType,
    GameEvent,
    LogMessage,
    UnitAttacked,
    UnitDefeated,
    UnitMoved,
)

if TYPE_CHECKING:
    from ...core.events import EventManager


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()     # Initialization, loading, etc.
    BATTLE = auto()     # Attacks, damage, defeats
    MOVEMENT = auto()   # Unit movement
    AI = auto()         # Target selection decisions
    TIMELINE = auto()   # Turn scheduling
    SCENARIO = auto()   # Battle file loading
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.MOVEMENT: "MOV",
    LogCategory.AI: "AI",
    LogCategory.TIMELINE: "TML",
    LogCategory.SCENARIO: "SCN",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class LogEntry:
    """A single log message with metadata."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    timeline_time: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_time: bool = False, include_category: bool = True) -> str:
        """Format the message for display."""
        parts = []

        if include_time:
            parts.append(f"[t={self.timeline_time}]")

        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")

        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Collects the battle log from the event bus."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager to subscribe to (required)
            max_messages: Maximum number of messages to store in the buffer
            default_level: Minimum level returned by get_messages()
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.event_manager = event_manager
        # Bus diagnostics are logged directly; publishing them would recurse
        self.event_manager.set_debug_callback(self._handle_bus_debug)

        self._setup_event_subscriptions()

    def _handle_bus_debug(self, message: str) -> None:
        self.log(message, LogCategory.DEBUG, LogLevel.DEBUG)

    def _setup_event_subscriptions(self) -> None:
        handlers = {
            EventType.LOG_MESSAGE: self._handle_log_message_event,
            EventType.DEBUG_MESSAGE: self._handle_debug_message_event,
            EventType.BATTLE_STARTED: self._handle_battle_started,
            EventType.BATTLE_ENDED: self._handle_battle_ended,
            EventType.UNIT_MOVED: self._handle_unit_moved,
            EventType.UNIT_ATTACKED: self._handle_unit_attacked,
            EventType.UNIT_DEFEATED: self._handle_unit_defeated,
        }
        for event_type, handler in handlers.items():
            self.event_manager.subscribe(
                event_type, handler, subscriber_name=f"LogManager.{handler.__name__}"
            )

    def _handle_log_message_event(self, event: GameEvent) -> None:
        if isinstance(event, LogMessage):
            try:
                category = LogCategory[event.category.upper()]
            except KeyError:
                category = LogCategory.SYSTEM
            try:
                level = LogLevel[event.level.upper()]
            except KeyError:
                level = LogLevel.INFO
            text = f"[{event.source}] {event.message}" if event.source else event.message
            self.log(text, category, level, event.timeline_time)

    def _handle_debug_message_event(self, event: GameEvent) -> None:
        if isinstance(event, DebugMessage):
            self.log(f"[{event.source}] {event.message}", LogCategory.DEBUG,
                     LogLevel.DEBUG, event.timeline_time)

    def _handle_battle_started(self, event: GameEvent) -> None:
        if isinstance(event, BattleStarted):
            self.log(f"Battle started with {event.unit_count} units",
                     LogCategory.SYSTEM, timeline_time=event.timeline_time)

    def _handle_battle_ended(self, event: GameEvent) -> None:
        if isinstance(event, BattleEnded):
            outcome = f"{event.winner.value} wins" if event.winner else "no winner"
            self.log(f"Battle ended after {event.turns_taken} turns: {outcome}",
                     LogCategory.SYSTEM, timeline_time=event.timeline_time)

    def _handle_unit_moved(self, event: GameEvent) -> None:
        if isinstance(event, UnitMoved):
            self.log(
                f"{event.unit.name} moves {event.from_position.to_tuple()} -> "
                f"{event.to_position.to_tuple()} facing {event.facing.value}",
                LogCategory.MOVEMENT, timeline_time=event.timeline_time
            )

    def _handle_unit_attacked(self, event: GameEvent) -> None:
        if isinstance(event, UnitAttacked):
            self.log(
                f"{event.attacker.name} hits {event.target.name} for {event.damage} "
                f"({event.target.hp_current}/{event.target.hp_max} HP left)",
                LogCategory.BATTLE, timeline_time=event.timeline_time
            )

    def _handle_unit_defeated(self, event: GameEvent) -> None:
        if isinstance(event, UnitDefeated):
            self.log(f"{event.unit.name} ({event.unit.side.value}) is defeated",
                     LogCategory.BATTLE, timeline_time=event.timeline_time)

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM,
            level: LogLevel = LogLevel.INFO, timeline_time: int = 0) -> None:
        """Add a message to the log."""
        if category is LogCategory.WARNING:
            level = LogLevel.WARNING
        elif category is LogCategory.ERROR:
            level = LogLevel.ERROR
        self.messages.append(LogEntry(text, category, level, timeline_time))

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogEntry]:
        """Get recent messages, optionally filtered by category.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Categories to include (None for all enabled)

        Returns:
            Messages passing the category and level filters, oldest first
        """
        wanted = categories if categories else self.enabled_categories
        filtered = [msg for msg in self.messages
                    if msg.category in wanted
                    and msg.category in self.enabled_categories
                    and msg.level.value >= self.log_level.value]

        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def clear(self) -> None:
        self.messages.clear()

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        return (LogCategory.DEBUG in self.enabled_categories and
                self.log_level == LogLevel.DEBUG)

    def toggle_debug(self) -> None:
        """Toggle debug message visibility."""
        if self.is_debug_enabled():
            self.set_log_level(LogLevel.INFO)
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)

    def save_log_to_file(self, log_dir: str = "logs") -> Optional[str]:
        """Save every buffered message, ignoring filters, to a timestamped file.

        Returns:
            Path of the written file, or None if it could not be written
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        filepath = os.path.join(log_dir, f"battle_{timestamp}.log")

        try:
            os.makedirs(log_dir, exist_ok=True)
            with open(filepath, "w", encoding="utf-8") as f:
                f.write("Auto-battler - Battle Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")

                if not self.messages:
                    f.write("No messages to save.\n")
                for msg in self.messages:
                    f.write(f"[t={msg.timeline_time}] [{msg.category.name}] {msg.text}\n")
        except OSError as e:
            self.log(f"Failed to save log file: {e}", LogCategory.ERROR)
            return None

        self.log(f"Battle log saved to {filepath}", LogCategory.SYSTEM)
        return filepath

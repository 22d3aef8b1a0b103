"""Speed-driven turn order.

Each living unit has one pending entry at ``current_time + turn_delay``, so a
unit twice as fast acts twice as often. Entries at the same time resolve in
the order they were scheduled. Cancelled entries stay in the heap and are
dropped when they reach the front.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .turn_timing import get_turn_delay

if TYPE_CHECKING:
    from ..config_loader import CombatConfig
    from ...game.entities.unit import CombatUnit


@dataclass(order=True)
class TimelineEntry:
    """A unit's next turn, ordered by time and then by scheduling order."""
    execution_time: int
    sequence_id: int
    unit_id: str = field(compare=False)


class Timeline:
    """Min-heap of pending turns measured in milliseconds."""

    def __init__(self, config: Optional["CombatConfig"] = None):
        self._config = config
        self._heap: list[TimelineEntry] = []
        self._current_time = 0
        self._sequence = itertools.count(1)
        self._cancelled: set[int] = set()

    @property
    def current_time(self) -> int:
        """Time of the most recently popped entry."""
        return self._current_time

    def schedule_unit(self, unit: "CombatUnit") -> TimelineEntry:
        """Queue the unit's next turn one turn delay from now."""
        entry = TimelineEntry(
            execution_time=self._current_time + get_turn_delay(unit, self._config),
            sequence_id=next(self._sequence),
            unit_id=unit.unit_id,
        )
        heapq.heappush(self._heap, entry)
        return entry

    def remove_entry(self, unit_id: str) -> int:
        """Cancel every pending turn of a unit.

        Returns:
            Number of entries cancelled
        """
        pending = [entry.sequence_id for entry in self._heap
                   if entry.unit_id == unit_id and entry.sequence_id not in self._cancelled]
        self._cancelled.update(pending)
        return len(pending)

    def pop_next(self) -> Optional[TimelineEntry]:
        """Remove the earliest live entry and advance current_time to it."""
        while self._heap:
            entry = heapq.heappop(self._heap)
            if entry.sequence_id in self._cancelled:
                self._cancelled.discard(entry.sequence_id)
                continue
            self._current_time = entry.execution_time
            return entry
        return None

    def get_preview(self, count: int) -> list[TimelineEntry]:
        """The next ``count`` live entries in turn order, without consuming them."""
        live = (entry for entry in self._heap if entry.sequence_id not in self._cancelled)
        return heapq.nsmallest(count, live)

"""Core engine components.

- turn_timing.py: Turn delay and move duration derived from speed
- timeline.py: Timeline queue and entry management for turn order
"""

from .timeline import Timeline, TimelineEntry
from .turn_timing import get_turn_delay, get_move_duration

__all__ = [
    "Timeline",
    "TimelineEntry",
    "get_turn_delay",
    "get_move_duration",
]

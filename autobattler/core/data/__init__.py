"""Core data structures and definitions.

This package contains fundamental data types and game definitions:
- data_structures.py: Vector2 and VectorArray for spatial operations
- game_enums.py: Centralized enums for sides, facings and actions
- game_info.py: Unit statistics supplied by the unit/stat data model
"""

from .data_structures import Vector2, VectorArray
from .game_enums import Side, Direction, ActionType, SIDE_NAMES
from .game_info import UnitStats

__all__ = [
    "Vector2",
    "VectorArray",
    "Side",
    "Direction",
    "ActionType",
    "SIDE_NAMES",
    "UnitStats",
]

"""Centralized game enums.

This module contains the enums used across the combat core, board and
managers, providing a single source of truth.
"""

from enum import Enum


class Side(Enum):
    """Allegiance of a unit on the board."""
    PLAYER = "player"
    ENEMY = "enemy"

    def opponent(self) -> "Side":
        """Return the opposing side."""
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


class Direction(Enum):
    """Cardinal facings a unit can visually adopt."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ActionType(Enum):
    """What a unit did with its turn."""
    ATTACK = "attack"
    MOVE = "move"
    WAIT = "wait"


SIDE_NAMES = {
    Side.PLAYER: "Player",
    Side.ENEMY: "Enemy",
}

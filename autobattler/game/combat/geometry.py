"""Facing and distance helpers.

Screen coordinates: x grows to the right, y grows downward, so "up" is -y.
"""

import math

from ...core.data.data_structures import Vector2
from ...core.data.game_enums import Direction


def get_facing(origin: Vector2, target: Vector2) -> Direction:
    """Cardinal direction of the vector from origin to target.

    The axis with the larger magnitude wins. Exact diagonals resolve to the
    vertical axis, and a zero vector resolves to UP.
    """
    dx = target.x - origin.x
    dy = target.y - origin.y

    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def squared_distance(a: Vector2, b: Vector2) -> int:
    return a.squared_distance_to(b)


def clockwise_angle(origin: Vector2, target: Vector2) -> float:
    """Angle of target around origin in [0, 2*pi), clockwise from due east."""
    return math.atan2(target.y - origin.y, target.x - origin.x) % (2 * math.pi)


def is_within_range(a: Vector2, b: Vector2, attack_range: int) -> bool:
    """Euclidean range check, inclusive."""
    return squared_distance(a, b) <= attack_range * attack_range

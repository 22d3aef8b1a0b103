"""Nearest-opponent target selection.

Candidates are every occupied cell whose side differs from the side of the
unit at ``origin``. They are ranked by squared Euclidean distance; ties are
broken by a clockwise sweep around the origin that starts at due east, so
with equally close enemies to the east and south, east is chosen.
"""

from typing import TYPE_CHECKING, Optional

import numpy as np

from ...core.data.data_structures import Vector2, VectorArray

if TYPE_CHECKING:
    from ..board import Board


def get_targets_in_order(board: "Board", origin: Vector2) -> list[Vector2]:
    """All opposing positions, nearest first.

    Returns an empty list when ``origin`` is empty, out of bounds, or there
    are no opponents.
    """
    unit = board.get_occupant(origin)
    if unit is None:
        return []

    candidates = VectorArray.from_mask(board.get_opposing_mask(unit.side))
    if len(candidates) == 0:
        return []

    distances = candidates.squared_distances_to_point(origin)
    angles = candidates.clockwise_angles_from(origin)

    # lexsort sorts by the last key first
    order = np.lexsort((angles, distances))
    return [candidates[int(i)] for i in order]


def get_nearest_target(board: "Board", origin: Vector2) -> Optional[Vector2]:
    """Position of the nearest opponent of the unit at ``origin``, or None.

    Args:
        board: Board snapshot to search; it is not modified
        origin: Position of the querying unit; its side is read from the board

    Returns:
        The chosen target position, or None if ``origin`` holds no unit or
        no opposing unit exists
    """
    targets = get_targets_in_order(board, origin)
    return targets[0] if targets else None

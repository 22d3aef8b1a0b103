"""Combat decision queries.

Pure functions over a board snapshot:
- geometry.py: Facing and distance helpers
- targeting.py: Nearest opposing unit with clockwise tie-break
- pathfinding.py: Next step toward a target along a shortest path
"""

from .geometry import get_facing, squared_distance, clockwise_angle, is_within_range
from .targeting import get_nearest_target, get_targets_in_order
from .pathfinding import find_path, pathfind, neighbors_4

__all__ = [
    "get_facing",
    "squared_distance",
    "clockwise_angle",
    "is_within_range",
    "get_nearest_target",
    "get_targets_in_order",
    "find_path",
    "pathfind",
    "neighbors_4",
]

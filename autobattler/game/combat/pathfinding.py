"""Breadth-first pathfinding on the 4-connected board.

Every occupied cell is impassable except the two endpoints: the start holds
the moving unit and the goal holds its target. All steps cost the same, so
BFS yields a shortest path.
"""

from collections import deque
from typing import TYPE_CHECKING, Iterator, Optional

from ...core.data.data_structures import Vector2

if TYPE_CHECKING:
    from ..board import Board


def neighbors_4(position: Vector2) -> Iterator[Vector2]:
    """Orthogonal neighbours in search order: right, left, down, up."""
    yield Vector2(position.x + 1, position.y)
    yield Vector2(position.x - 1, position.y)
    yield Vector2(position.x, position.y + 1)
    yield Vector2(position.x, position.y - 1)


def find_path(board: "Board", start: Vector2, goal: Vector2) -> Optional[list[Vector2]]:
    """Shortest path from start to goal.

    Returns:
        Cells after ``start`` up to and including ``goal``; an empty list if
        ``start == goal``; None if either endpoint is off the board or no
        route exists
    """
    if not (board.is_valid_position(start) and board.is_valid_position(goal)):
        return None
    if start == goal:
        return []

    came_from: dict[Vector2, Vector2] = {}
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()

        for next_pos in neighbors_4(current):
            if next_pos in visited or not board.is_valid_position(next_pos):
                continue
            if next_pos != goal and board.is_occupied(next_pos):
                continue

            visited.add(next_pos)
            came_from[next_pos] = current

            if next_pos == goal:
                path = [goal]
                node = current
                while node != start:
                    path.append(node)
                    node = came_from[node]
                path.reverse()
                return path

            queue.append(next_pos)

    return None


def pathfind(board: "Board", start: Vector2, goal: Vector2, step_budget: int) -> Optional[Vector2]:
    """Cell to move to this turn when heading from start toward goal.

    Advances up to ``step_budget`` cells along a shortest path but never onto
    the goal, which is occupied. A unit already next to its goal (or with no
    budget) stays on ``start``.

    Returns:
        The destination cell, or None if no route exists
    """
    path = find_path(board, start, goal)
    if path is None:
        return None

    steps = path[:-1]  # drop the goal cell
    reachable = min(step_budget, len(steps))
    if reachable <= 0:
        return start
    return steps[reachable - 1]

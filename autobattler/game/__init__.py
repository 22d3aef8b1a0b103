"""Game layer: board, combat queries, unit state, managers and loaders."""

from .board import Board, Occupant

__all__ = [
    "Board",
    "Occupant",
]

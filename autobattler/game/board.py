"""Rectangular combat board.

The board is owned and mutated by the simulation (placing, moving and
removing occupants). The combat queries in ``game.combat`` only read it.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence

import numpy as np
from numpy.typing import NDArray

from ..core.data.data_structures import Vector2, VectorArray
from ..core.data.game_enums import Side


class HasSide(Protocol):
    side: Side


@dataclass(frozen=True)
class Occupant:
    """Minimal occupant: the combat queries only need a side."""
    side: Side
    name: str = ""


@dataclass(eq=False)
class Board:
    """Board of width x height cells, each holding at most one occupant."""

    width: int
    height: int
    _occupants: list[Any] = field(default_factory=list, init=False, repr=False)
    # Stores indices into _occupants (-1 for empty), indexed [y, x]
    occupancy: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.width}x{self.height}")
        self.occupancy = np.full((self.height, self.width), -1, dtype=np.int16)

    @classmethod
    def from_columns(
        cls, columns: Sequence[Sequence[Optional[HasSide]]], width: int, height: int
    ) -> "Board":
        """Build a board from column-major nested sequences (``columns[x][y]``).

        Columns may be shorter than ``height`` (or missing entirely); absent
        entries are empty cells. Entries beyond the board are ignored.
        """
        board = cls(width, height)
        for x, column in enumerate(columns[:width]):
            for y, occupant in enumerate(column[:height]):
                if occupant is not None:
                    board.place(occupant, Vector2(x, y))
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[str], legend: Mapping[str, HasSide]) -> "Board":
        """Build a board from text rows, one character per cell.

        Characters missing from ``legend`` (conventionally ``.``) are empty.
        The same legend object is placed at every matching cell.
        """
        if not rows:
            raise ValueError("At least one row is required")
        height = len(rows)
        width = max(len(row) for row in rows)
        board = cls(width, height)
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                occupant = legend.get(char)
                if occupant is not None:
                    board.place(occupant, Vector2(x, y))
        return board

    # ============== Read contract ==============

    def is_valid_position(self, position: Vector2) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def occupant_at(self, x: int, y: int) -> Optional[HasSide]:
        """Occupant at (x, y), or None when empty or out of bounds."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        index = self.occupancy[y, x]
        if index < 0:
            return None
        return self._occupants[index]

    def get_occupant(self, position: Vector2) -> Optional[HasSide]:
        """Occupant at a position, or None when empty or out of bounds."""
        return self.occupant_at(position.x, position.y)

    def is_occupied(self, position: Vector2) -> bool:
        return self.get_occupant(position) is not None

    def get_occupied_mask(self) -> NDArray[np.bool_]:
        """Boolean [y, x] mask of occupied cells."""
        return self.occupancy >= 0

    def get_side_mask(self, side: Side) -> NDArray[np.bool_]:
        """Boolean [y, x] mask of cells held by the given side."""
        mask = np.zeros((self.height, self.width), dtype=np.bool_)
        y_coords, x_coords = np.where(self.get_occupied_mask())
        for y, x in zip(y_coords, x_coords):
            if self._occupants[self.occupancy[y, x]].side == side:
                mask[y, x] = True
        return mask

    def get_opposing_mask(self, side: Side) -> NDArray[np.bool_]:
        """Boolean [y, x] mask of cells held by any side other than ``side``."""
        return self.get_occupied_mask() & ~self.get_side_mask(side)

    def occupied_positions(self) -> VectorArray:
        """All occupied cells in row-major order."""
        return VectorArray.from_mask(self.get_occupied_mask())

    def occupants(self) -> list[tuple[Vector2, HasSide]]:
        """(position, occupant) pairs in row-major order."""
        return [(position, self._occupants[self.occupancy[position.y, position.x]])
                for position in self.occupied_positions()]

    def count_by_side(self, side: Side) -> int:
        return int(np.sum(self.get_side_mask(side)))

    # ============== Mutation (simulation only) ==============

    def place(self, occupant: HasSide, position: Vector2) -> bool:
        """Put an occupant on an empty, in-bounds cell."""
        if not self.is_valid_position(position) or self.is_occupied(position):
            return False

        self._occupants.append(occupant)
        self.occupancy[position.y, position.x] = len(self._occupants) - 1
        return True

    def remove(self, position: Vector2) -> Optional[HasSide]:
        """Remove and return the occupant at a position."""
        occupant = self.get_occupant(position)
        if occupant is None:
            return None

        removed_index = int(self.occupancy[position.y, position.x])
        self.occupancy[position.y, position.x] = -1
        self._occupants.pop(removed_index)

        # Compact indices shifted down by the removal
        self.occupancy[self.occupancy > removed_index] -= 1
        return occupant

    def move(self, from_position: Vector2, to_position: Vector2) -> bool:
        """Move an occupant to an empty, in-bounds cell."""
        if self.get_occupant(from_position) is None:
            return False
        if not self.is_valid_position(to_position) or self.is_occupied(to_position):
            return False

        self.occupancy[to_position.y, to_position.x] = self.occupancy[from_position.y, from_position.x]
        self.occupancy[from_position.y, from_position.x] = -1
        return True

    def find(self, occupant: HasSide) -> Optional[Vector2]:
        """Position of a specific occupant object (identity match)."""
        for position, candidate in self.occupants():
            if candidate is occupant:
                return position
        return None

    def render(self, symbols: Optional[Mapping[Side, str]] = None) -> list[str]:
        """Text rows for debugging; '.' is empty."""
        symbols = symbols or {Side.PLAYER: "P", Side.ENEMY: "E"}
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                occupant = self.occupant_at(x, y)
                row.append("." if occupant is None else symbols.get(occupant.side, "?"))
            rows.append("".join(row))
        return rows

"""Spatial data structures shared by the board, combat queries and managers.

Positions are plain ``(x, y)`` cell coordinates: ``x`` is the column, ``y``
is the row, and ``y`` grows downward as on screen. Numpy-backed arrays are
indexed ``[y, x]`` so that ``array[position.y, position.x]`` addresses a cell.
"""

from dataclasses import dataclass
from typing import Optional, Union
import math

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Vector2:
    """Immutable cell coordinate.

    Equality and hashing are by component, so Vector2 works as a dict key
    and in sets.
    """
    x: int
    y: int

    def __add__(self, other: "Vector2") -> "Vector2":
        """Vector addition."""
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        """Vector subtraction."""
        return Vector2(self.x - other.x, self.y - other.y)

    def __iter__(self):
        """Make Vector2 iterable for unpacking (x, y order)."""
        yield self.x
        yield self.y

    def __getitem__(self, key: int) -> int:
        """Enable indexed access like Vector2[0] for x, Vector2[1] for y."""
        if key == 0:
            return self.x
        elif key == 1:
            return self.y
        else:
            raise IndexError("Vector2 index out of range (must be 0 or 1)")

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"

    def squared_distance_to(self, other: "Vector2") -> int:
        """Squared Euclidean distance; exact for integer coordinates."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: "Vector2") -> float:
        """Calculate Euclidean distance to another vector."""
        return math.sqrt(self.squared_distance_to(other))

    def manhattan_distance_to(self, other: "Vector2") -> int:
        """Calculate Manhattan distance to another vector."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    @classmethod
    def from_tuple(cls, coords: tuple[int, int]) -> "Vector2":
        """Create Vector2 from an (x, y) tuple."""
        return cls(int(coords[0]), int(coords[1]))

    @classmethod
    def from_list(cls, coords: list[int]) -> "Vector2":
        """Create Vector2 from an [x, y] list, as found in YAML files."""
        if len(coords) < 2:
            raise ValueError("List must contain at least 2 elements")
        return cls(int(coords[0]), int(coords[1]))

    def to_tuple(self) -> tuple[int, int]:
        """Convert to an (x, y) tuple."""
        return (self.x, self.y)

    def to_numpy(self) -> NDArray[np.int16]:
        """Convert to numpy array (x, y order)."""
        return np.array([self.x, self.y], dtype=np.int16)

    @classmethod
    def from_numpy(cls, arr: NDArray[np.int16]) -> "Vector2":
        """Create Vector2 from numpy array (x, y order)."""
        if arr.shape != (2,):
            raise ValueError("Array must have shape (2,) for Vector2 conversion")
        return cls(int(arr[0]), int(arr[1]))


class VectorArray:
    """Collection of positions stored as an (N, 2) numpy array.

    Used for batch distance and angle computations when scanning many
    candidate cells at once. Columns are (x, y).
    """

    def __init__(self, vectors: Optional[Union[list[Vector2], NDArray[np.int16]]] = None):
        """Initialize VectorArray from list of Vector2 objects or numpy array.

        Args:
            vectors: List of Vector2 objects or numpy array of shape (N, 2).
                    If None, creates an empty VectorArray.
        """
        if vectors is None:
            self._data = np.empty((0, 2), dtype=np.int16)
        elif isinstance(vectors, list):
            if not vectors:
                self._data = np.empty((0, 2), dtype=np.int16)
            else:
                self._data = np.array([[v.x, v.y] for v in vectors], dtype=np.int16)
        else:
            if vectors.shape[-1] != 2:
                raise ValueError("Numpy array must have shape (N, 2)")
            self._data = vectors.astype(np.int16).reshape(-1, 2)

    @property
    def data(self) -> NDArray[np.int16]:
        """Get the underlying numpy array (N, 2) shape."""
        return self._data

    @property
    def x_coords(self) -> NDArray[np.int16]:
        return self._data[:, 0]

    @property
    def y_coords(self) -> NDArray[np.int16]:
        return self._data[:, 1]

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> Vector2:
        if index >= len(self._data) or index < -len(self._data):
            raise IndexError("VectorArray index out of range")
        row = self._data[index]
        return Vector2(int(row[0]), int(row[1]))

    def __iter__(self):
        for row in self._data:
            yield Vector2(int(row[0]), int(row[1]))

    def to_vector_list(self) -> list[Vector2]:
        """Convert to list of Vector2 objects."""
        return [Vector2(int(row[0]), int(row[1])) for row in self._data]

    def squared_distances_to_point(self, target: Vector2) -> NDArray[np.int64]:
        """Calculate squared Euclidean distances from all vectors to a point.

        Args:
            target: Target Vector2 position

        Returns:
            Integer array of squared distances, one per vector
        """
        diff = self._data.astype(np.int64) - np.array([target.x, target.y], dtype=np.int64)
        return np.sum(diff**2, axis=1)

    def clockwise_angles_from(self, origin: Vector2) -> NDArray[np.float64]:
        """Screen-space clockwise angle of each vector as seen from origin.

        Angles are in radians within [0, 2*pi), starting at due east and
        sweeping clockwise (east, south, west, north) because y grows downward.
        """
        dx = self._data[:, 0].astype(np.float64) - origin.x
        dy = self._data[:, 1].astype(np.float64) - origin.y
        return np.mod(np.arctan2(dy, dx), 2 * np.pi)

    def contains(self, vector: Vector2) -> bool:
        """Check if array contains a specific vector."""
        target = np.array([vector.x, vector.y], dtype=np.int16)
        return bool(np.any(np.all(self._data == target, axis=1)))

    @classmethod
    def from_mask(cls, mask: NDArray[np.bool_]) -> "VectorArray":
        """Build from a boolean [y, x] mask, in row-major scan order."""
        y_coords, x_coords = np.where(mask)
        positions = np.column_stack((x_coords, y_coords)).astype(np.int16)
        return cls(positions)

"""
Random-access grids - the "get value at integer coordinate" capability.

Traversal algorithms only need a repositionable accessor:

    access = grid.access()
    access.set_position((3, 4))
    value = access.get()
    access.fwd_dim(0)           # now at (4, 4)
    other = access.copy_access()  # independently positioned clone

Two grids are provided: ArrayGrid over a numpy array, and PositionGrid,
an unbounded virtual grid whose value at each coordinate is the
coordinate itself.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import numpy as np

from .cursor import IntervalCursor
from .errors import InvalidArgumentError, check_dimensions


class GridAccess(ABC):
    """Repositionable accessor into a grid."""

    def __init__(self, n: int, position: Sequence[int] | None = None):
        self.n = n
        self.position = [0] * n if position is None else [int(v) for v in position]
        check_dimensions(n, len(self.position), "accessor position")

    def num_dimensions(self) -> int:
        return self.n

    @abstractmethod
    def get(self) -> Any:
        """Value at the current position."""

    @abstractmethod
    def copy_access(self) -> "GridAccess":
        """Independent accessor at the same position."""

    def set_position(self, coords: Sequence[int]) -> None:
        check_dimensions(self.n, len(coords), "position")
        for d in range(self.n):
            self.position[d] = int(coords[d])

    def set_position_dim(self, value: int, d: int) -> None:
        self.position[d] = int(value)

    def fwd_dim(self, d: int) -> None:
        self.position[d] += 1

    def bck_dim(self, d: int) -> None:
        self.position[d] -= 1

    def move(self, distance: int, d: int) -> None:
        self.position[d] += int(distance)

    def get_position(self, d: int) -> int:
        return self.position[d]

    def localize(self) -> tuple[int, ...]:
        return tuple(self.position)


class ArrayAccess(GridAccess):
    """Accessor into an ArrayGrid."""

    def __init__(self, grid: "ArrayGrid", position: Sequence[int] | None = None):
        super().__init__(grid.num_dimensions(), position)
        self.grid = grid

    def get(self) -> Any:
        return self.grid.value_at(self.position)

    def set(self, value: Any) -> None:
        """Write at the current position; positions outside the array raise even with a fill value."""
        if not self.grid.in_bounds(self.position):
            raise IndexError(
                f"position {tuple(self.position)} outside grid of shape {self.grid.shape}"
            )
        self.grid.data[tuple(self.position)] = value

    def copy_access(self) -> "ArrayAccess":
        return ArrayAccess(self.grid, self.position)


class ArrayGrid:
    """
    Grid backed by a numpy array; array axis d is dimension d.

    Reads outside the array raise IndexError unless an ``out_of_bounds``
    fill value was given, in which case that value is returned.
    """

    def __init__(self, data: np.ndarray, out_of_bounds: Any = None):
        if not isinstance(data, np.ndarray):
            raise TypeError(f"data must be np.ndarray, got {type(data)}")
        if data.ndim < 1:
            raise InvalidArgumentError("grid needs at least one dimension")
        self.data = data
        self.out_of_bounds = out_of_bounds

    @property
    def shape(self) -> tuple[int, ...]:
        return self.data.shape

    def num_dimensions(self) -> int:
        return self.data.ndim

    def in_bounds(self, position: Sequence[int]) -> bool:
        return all(0 <= p < extent for p, extent in zip(position, self.data.shape))

    def value_at(self, position: Sequence[int]) -> Any:
        if not self.in_bounds(position):
            if self.out_of_bounds is not None:
                return self.out_of_bounds
            raise IndexError(f"position {tuple(position)} outside grid of shape {self.shape}")
        return self.data[tuple(position)]

    def access(self, position: Sequence[int] | None = None) -> ArrayAccess:
        return ArrayAccess(self, position)

    def cursor(self) -> IntervalCursor:
        """Cursor over every element of the array, dimension 0 fastest."""
        return IntervalCursor(
            [0] * self.data.ndim,
            [extent - 1 for extent in self.data.shape],
            self.access(),
        )


class PositionAccess(GridAccess):
    """Accessor whose value is its own position."""

    def get(self) -> tuple[int, ...]:
        return tuple(self.position)

    def copy_access(self) -> "PositionAccess":
        return PositionAccess(self.n, self.position)


class PositionGrid:
    """Unbounded virtual grid of coordinates."""

    def __init__(self, n: int):
        if n < 1:
            raise InvalidArgumentError(f"grid needs at least one dimension, got {n}")
        self.n = n

    def num_dimensions(self) -> int:
        return self.n

    def access(self, position: Sequence[int] | None = None) -> PositionAccess:
        return PositionAccess(self.n, position)

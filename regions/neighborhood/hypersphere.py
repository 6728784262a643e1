"""
HyperSphere neighborhood - enumerate the lattice points of an N-D ball.

The ball {p : sum((p_i - c_i)^2) <= R^2} is scanned as nested
cross-sections. The outermost dimension (n - 1) is cut into 2R + 1
slabs; the slab at offset p is an (n - 1)-dimensional ball whose squared
radius is R^2 - p^2, which is cut again along dimension n - 2, and so on
down to dimension 0 where each cross-section is a plain scanline walked
with ``fwd_dim(0)``.

No distance test is performed per point. An integer square root is taken
once per scanline transition, and each dimension carries the remaining
squared budget rather than a rounded radius, so the enumeration is exact
in every dimensionality.
"""

import logging
from collections.abc import Sequence
from functools import lru_cache
from math import isqrt
from typing import Any

from ..cursor import Cursor
from ..errors import InvalidArgumentError, check_dimensions
from ..grid import GridAccess

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def _ball_size(n: int, budget: int) -> int:
    rad = isqrt(budget)
    if n == 1:
        return 2 * rad + 1
    return sum(_ball_size(n - 1, budget - p * p) for p in range(-rad, rad + 1))


def ball_size(n: int, radius: int) -> int:
    """
    Number of integer points inside an n-dimensional ball.

    Computed from scanline widths, without visiting individual points.

    Args:
        n: Dimensionality
        radius: Non-negative integer radius

    Returns:
        Exact lattice point count
    """
    if radius < 0:
        raise InvalidArgumentError(f"radius must be >= 0, got {radius}")
    return _ball_size(n, radius * radius)


class HyperSphereCursor(Cursor[Any]):
    """
    Cursor over a hyperball, reading values through a grid accessor.

    State per dimension d:
        r[d]: radius of the current cross-section in dimension d
        s[d]: remaining steps along dimension d in that cross-section
        q[d]: squared radius budget of the cross-section (r[d] = isqrt(q[d]))
    """

    def __init__(self, source: GridAccess, center: Sequence[int], radius: int):
        super().__init__(source.num_dimensions())
        check_dimensions(self.n, len(center), "hypersphere center")
        self.source = source
        self.center = tuple(int(c) for c in center)
        self.radius = int(radius)
        self.max_dim = self.n - 1
        self.r = [0] * self.n
        self.s = [0] * self.n
        self.q = [0] * self.n
        self._reset()

    def has_next(self) -> bool:
        return any(steps > 0 for steps in self.s)

    def _fwd(self) -> None:
        s = self.s
        for d in range(self.n):
            s[d] -= 1
            if s[d] >= 0:
                self.source.fwd_dim(d)
                break

        # Open a fresh cross-section in every dimension below d
        r, q = self.r, self.q
        for e in range(d - 1, -1, -1):
            offset = r[e + 1] - s[e + 1]
            budget = q[e + 1] - offset * offset
            rad = isqrt(budget)
            q[e] = budget
            r[e] = rad
            s[e] = 2 * rad
            self.source.set_position_dim(self.center[e] - rad, e)

    def _reset(self) -> None:
        for d in range(self.max_dim):
            self.r[d] = self.s[d] = self.q[d] = 0
            self.source.set_position_dim(self.center[d], d)

        self.source.set_position_dim(self.center[self.max_dim] - self.radius - 1, self.max_dim)

        self.r[self.max_dim] = self.radius
        self.s[self.max_dim] = 1 + 2 * self.radius
        self.q[self.max_dim] = self.radius * self.radius

    def _get(self) -> Any:
        return self.source.get()

    def _get_position(self, d: int) -> int:
        return self.source.get_position(d)

    def copy(self) -> "HyperSphereCursor":
        clone = HyperSphereCursor.__new__(HyperSphereCursor)
        clone.n = self.n
        clone._materialized = self._materialized
        clone.source = self.source.copy_access()
        clone.center = self.center
        clone.radius = self.radius
        clone.max_dim = self.max_dim
        clone.r = list(self.r)
        clone.s = list(self.s)
        clone.q = list(self.q)
        return clone


class HyperSphereNeighborhood:
    """
    Ball of integer radius around a position, over a random-access grid.

    Args:
        position: Center coordinate
        radius: Non-negative integer radius
        source_access: Accessor into the grid the neighborhood reads from.
            Every cursor works on its own copy of it.
    """

    def __init__(self, position: Sequence[int], radius: int, source_access: GridAccess):
        if radius < 0:
            raise InvalidArgumentError(f"radius must be >= 0, got {radius}")
        check_dimensions(source_access.num_dimensions(), len(position), "hypersphere center")
        self.position = tuple(int(p) for p in position)
        self.radius = int(radius)
        self.source_access = source_access
        self.n = len(self.position)
        logger.debug("HyperSphereNeighborhood center=%s radius=%d", self.position, self.radius)

    @staticmethod
    def factory() -> "HyperSphereNeighborhoodFactory":
        return HyperSphereNeighborhoodFactory()

    def num_dimensions(self) -> int:
        return self.n

    def cursor(self) -> HyperSphereCursor:
        return HyperSphereCursor(self.source_access.copy_access(), self.position, self.radius)

    def size(self) -> int:
        return ball_size(self.n, self.radius)

    def min(self, d: int) -> int:
        return self.position[d] - self.radius

    def max(self, d: int) -> int:
        return self.position[d] + self.radius

    def bounding_box(self) -> tuple[tuple[int, ...], tuple[int, ...]]:
        """Axis-aligned (min, max) corners, both inclusive."""
        return (
            tuple(self.min(d) for d in range(self.n)),
            tuple(self.max(d) for d in range(self.n)),
        )

    def dimension(self, d: int) -> int:
        """Extent of the bounding box along dimension d."""
        if not 0 <= d < self.n:
            raise IndexError(f"dimension {d} out of range for {self.n}-D neighborhood")
        return self.max(d) - self.min(d) + 1

    def first_element(self) -> Any:
        return self.cursor().next()

    def __iter__(self) -> HyperSphereCursor:
        return self.cursor()

    def __len__(self) -> int:
        return self.size()


class HyperSphereNeighborhoodFactory:
    """Creates HyperSphereNeighborhoods, e.g. one per pixel of a filter pass."""

    def create(
        self, position: Sequence[int], radius: int, source_access: GridAccess
    ) -> HyperSphereNeighborhood:
        return HyperSphereNeighborhood(position, radius, source_access)

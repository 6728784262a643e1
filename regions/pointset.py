"""
Point sets - finite sets of integer coordinates in N-dimensional space.

A point set answers membership queries, hands out independent cursors over
its members, can be translated, and knows a (possibly loose) bounding box:

    ball = BallPointSet(center=(10, 10), radius=3)
    box = HyperVolumePointSet((0, 0), (4, 9))
    region = ball | box          # PointSetUnion
    region.translate((5, 0))     # moves ball and box
    lo, hi = region.find_bound_min(), region.find_bound_max()

Bounding boxes are computed lazily and cached. The cache is keyed by a
modification stamp that includes every child's stamp, so a translate
through any holder of a shared child invalidates every parent.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence

import numpy as np

from .cursor import Cursor, FilteredCursor, IntervalCursor, SequenceCursor
from .errors import InvalidArgumentError, check_dimensions
from .grid import PositionGrid
from .neighborhood.hypersphere import HyperSphereCursor, ball_size

logger = logging.getLogger(__name__)

Coordinate = tuple[int, ...]
Bounds = tuple[Coordinate, Coordinate]


class BoundsCache:
    """
    Cached (min, max) corners, recomputed on first access after a change.

    ``invalidate()`` drops the value; ``get()`` also recomputes whenever the
    stamp it is given differs from the stamp the value was computed under.
    """

    def __init__(self):
        self._value: Bounds | None = None
        self._stamp: int | None = None

    def get(self, compute: Callable[[], Bounds], stamp: int = 0) -> Bounds:
        if self._value is None or self._stamp != stamp:
            self._value = compute()
            self._stamp = stamp
        return self._value

    def invalidate(self) -> None:
        self._value = None
        self._stamp = None

    @property
    def is_valid(self) -> bool:
        return self._value is not None


def bounds_volume(lo: Sequence[int], hi: Sequence[int]) -> int:
    """Number of lattice points in the box [lo, hi]; 0 if any side is inverted."""
    volume = 1
    for a, b in zip(lo, hi):
        volume *= max(0, b - a + 1)
    return volume


class PointSet(ABC):
    """
    Abstract point set of fixed dimensionality n.

    Subclasses implement ``get_origin``, ``_includes``, ``iterator``,
    ``_translate``, ``_compute_bounds`` and ``copy``. Combinators also
    return their parts from ``children`` and override ``modification_stamp``
    to fold in their children's stamps.
    """

    def __init__(self, n: int):
        if n < 1:
            raise InvalidArgumentError(f"point set needs at least one dimension, got {n}")
        self.n = n
        self._bounds = BoundsCache()
        self._modifications = 0

    def num_dimensions(self) -> int:
        return self.n

    @abstractmethod
    def get_origin(self) -> Coordinate:
        """Anchor coordinate of the set."""

    @abstractmethod
    def _includes(self, point: Coordinate) -> bool:
        """Membership test for a coordinate of the right dimensionality."""

    @abstractmethod
    def iterator(self) -> Cursor[Coordinate]:
        """Fresh, independent cursor over every member."""

    @abstractmethod
    def _translate(self, deltas: Coordinate) -> None:
        """Shift this set's own state by deltas; children are moved separately."""

    @abstractmethod
    def _compute_bounds(self) -> Bounds:
        """(min, max) corners containing every member."""

    @abstractmethod
    def copy(self) -> "PointSet":
        """Deep copy; translating the copy never affects this set."""

    def includes(self, point: Sequence[int]) -> bool:
        check_dimensions(self.n, len(point), "coordinate")
        return self._includes(tuple(int(p) for p in point))

    def children(self) -> tuple["PointSet", ...]:
        """Point sets this set is composed of."""
        return ()

    def _distinct_nodes(self) -> list["PointSet"]:
        """This set and every set below it, each exactly once."""
        seen: dict[int, PointSet] = {}
        stack: list[PointSet] = [self]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen[id(node)] = node
            stack.extend(node.children())
        return list(seen.values())

    def translate(self, deltas: Sequence[int]) -> None:
        """
        Shift every member by ``deltas``.

        A child reachable along several paths (``(a | b) & (a | c)``) is
        moved once, so membership after the move is the old membership
        shifted by ``deltas``.
        """
        check_dimensions(self.n, len(deltas), "translation vector")
        deltas = tuple(int(d) for d in deltas)
        for node in self._distinct_nodes():
            node._translate(deltas)
            node._modifications += 1
            node._bounds.invalidate()

    def modification_stamp(self) -> int:
        """Monotonic counter that grows with every translate affecting this set."""
        return self._modifications

    def _cached_bounds(self) -> Bounds:
        if not self._bounds.is_valid:
            logger.debug("recomputing bounds of %r", self)
        return self._bounds.get(self._compute_bounds, self.modification_stamp())

    def find_bound_min(self) -> Coordinate:
        return self._cached_bounds()[0]

    def find_bound_max(self) -> Coordinate:
        return self._cached_bounds()[1]

    def bounds_empty(self) -> bool:
        """True when the bounding box holds no lattice point."""
        return bounds_volume(self.find_bound_min(), self.find_bound_max()) == 0

    def calc_size(self) -> int:
        """Exact number of members, by full enumeration."""
        count = 0
        cursor = self.iterator()
        while cursor.has_next():
            cursor.fwd()
            count += 1
        return count

    def to_mask(self) -> tuple[np.ndarray, Coordinate]:
        """
        Rasterize the set over its bounding box.

        Returns:
            (mask, offset): boolean array whose axis d is dimension d, and the
            coordinate of mask element (0, ..., 0)
        """
        lo, hi = self.find_bound_min(), self.find_bound_max()
        shape = tuple(max(0, b - a + 1) for a, b in zip(lo, hi))
        mask = np.zeros(shape, dtype=bool)
        if mask.size == 0:
            return mask, lo
        for point in self.iterator():
            mask[tuple(p - o for p, o in zip(point, lo))] = True
        return mask, lo

    def __contains__(self, point: Sequence[int]) -> bool:
        return self.includes(point)

    def __iter__(self) -> Cursor[Coordinate]:
        return self.iterator()

    def __len__(self) -> int:
        return self.calc_size()

    def __or__(self, other: "PointSet") -> "PointSet":
        from .algebra import PointSetUnion

        return PointSetUnion(self, other)

    def __and__(self, other: "PointSet") -> "PointSet":
        from .algebra import PointSetIntersection

        return PointSetIntersection(self, other)

    def __sub__(self, other: "PointSet") -> "PointSet":
        from .algebra import PointSetDifference

        return PointSetDifference(self, other)


class HyperVolumePointSet(PointSet):
    """
    Axis-aligned box [min_corner, max_corner], both corners inclusive.

    The origin defaults to the min corner. Pass ``origin`` to anchor the box
    elsewhere, e.g. at its center when it serves as a structuring element.
    """

    def __init__(
        self,
        min_corner: Sequence[int],
        max_corner: Sequence[int],
        origin: Sequence[int] | None = None,
    ):
        super().__init__(len(min_corner))
        check_dimensions(self.n, len(max_corner), "max corner")
        self.min = tuple(int(v) for v in min_corner)
        self.max = tuple(int(v) for v in max_corner)
        if any(lo > hi for lo, hi in zip(self.min, self.max)):
            raise InvalidArgumentError(f"min corner {self.min} exceeds max corner {self.max}")
        if origin is None:
            self.origin = self.min
        else:
            check_dimensions(self.n, len(origin), "origin")
            self.origin = tuple(int(v) for v in origin)

    @classmethod
    def from_dimensions(cls, dims: Sequence[int]) -> "HyperVolumePointSet":
        """Box with origin at zero and the given extent per dimension."""
        return cls([0] * len(dims), [d - 1 for d in dims])

    def get_origin(self) -> Coordinate:
        return self.origin

    def _includes(self, point: Coordinate) -> bool:
        return all(lo <= p <= hi for p, lo, hi in zip(point, self.min, self.max))

    def iterator(self) -> IntervalCursor:
        return IntervalCursor(self.min, self.max)

    def _translate(self, deltas: Coordinate) -> None:
        self.min = tuple(v + d for v, d in zip(self.min, deltas))
        self.max = tuple(v + d for v, d in zip(self.max, deltas))
        self.origin = tuple(v + d for v, d in zip(self.origin, deltas))

    def _compute_bounds(self) -> Bounds:
        return self.min, self.max

    def calc_size(self) -> int:
        return bounds_volume(self.min, self.max)

    def copy(self) -> "HyperVolumePointSet":
        return HyperVolumePointSet(self.min, self.max, self.origin)

    def __repr__(self):
        if self.origin == self.min:
            return f"HyperVolumePointSet({self.min}, {self.max})"
        return f"HyperVolumePointSet({self.min}, {self.max}, origin={self.origin})"


class BallPointSet(PointSet):
    """
    Integer points within Euclidean distance ``radius`` of ``center``.

    Iteration uses the hypersphere scanline traversal over a PositionGrid,
    so no distance is evaluated per point.
    """

    def __init__(self, center: Sequence[int], radius: int):
        super().__init__(len(center))
        if radius < 0:
            raise InvalidArgumentError(f"radius must be >= 0, got {radius}")
        self.center = tuple(int(c) for c in center)
        self.radius = int(radius)

    def get_origin(self) -> Coordinate:
        return self.center

    def _includes(self, point: Coordinate) -> bool:
        distance_sq = sum((p - c) ** 2 for p, c in zip(point, self.center))
        return distance_sq <= self.radius * self.radius

    def iterator(self) -> HyperSphereCursor:
        return HyperSphereCursor(PositionGrid(self.n).access(), self.center, self.radius)

    def _translate(self, deltas: Coordinate) -> None:
        self.center = tuple(c + d for c, d in zip(self.center, deltas))

    def _compute_bounds(self) -> Bounds:
        return (
            tuple(c - self.radius for c in self.center),
            tuple(c + self.radius for c in self.center),
        )

    def calc_size(self) -> int:
        return ball_size(self.n, self.radius)

    def copy(self) -> "BallPointSet":
        return BallPointSet(self.center, self.radius)

    def __repr__(self):
        return f"BallPointSet(center={self.center}, radius={self.radius})"


class GeneralPointSet(PointSet):
    """
    Explicit list of coordinates, stored relative to an origin.

    Duplicates are dropped; iteration follows first-insertion order.
    Translation only moves the origin.
    """

    def __init__(self, origin: Sequence[int], points: Iterable[Sequence[int]]):
        super().__init__(len(origin))
        self.origin = tuple(int(o) for o in origin)
        offsets: dict[Coordinate, None] = {}
        for point in points:
            check_dimensions(self.n, len(point), "point")
            offsets[tuple(int(p) - o for p, o in zip(point, self.origin))] = None
        self._offsets = tuple(offsets)
        self._lookup = frozenset(self._offsets)

    @classmethod
    def from_mask(cls, mask: np.ndarray, offset: Sequence[int] | None = None) -> "GeneralPointSet":
        """Members are the True elements of ``mask``; axis d is dimension d."""
        if offset is None:
            offset = (0,) * mask.ndim
        check_dimensions(mask.ndim, len(offset), "mask offset")
        points = [tuple(int(i) + o for i, o in zip(idx, offset)) for idx in np.argwhere(mask)]
        return cls(offset, points)

    def get_origin(self) -> Coordinate:
        return self.origin

    def _includes(self, point: Coordinate) -> bool:
        return tuple(p - o for p, o in zip(point, self.origin)) in self._lookup

    def iterator(self) -> SequenceCursor:
        absolute = [tuple(v + o for v, o in zip(offset, self.origin)) for offset in self._offsets]
        return SequenceCursor(self.n, absolute)

    def _translate(self, deltas: Coordinate) -> None:
        self.origin = tuple(o + d for o, d in zip(self.origin, deltas))

    def _compute_bounds(self) -> Bounds:
        if not self._offsets:
            # Inverted box: no lattice point
            return self.origin, tuple(o - 1 for o in self.origin)
        columns = list(zip(*self._offsets))
        return (
            tuple(min(col) + o for col, o in zip(columns, self.origin)),
            tuple(max(col) + o for col, o in zip(columns, self.origin)),
        )

    def calc_size(self) -> int:
        return len(self._offsets)

    def copy(self) -> "GeneralPointSet":
        clone = GeneralPointSet(self.origin, ())
        clone._offsets = self._offsets
        clone._lookup = self._lookup
        return clone

    def __repr__(self):
        return f"GeneralPointSet(origin={self.origin}, size={len(self._offsets)})"


class ConditionalPointSet(PointSet):
    """
    Members of ``base`` for which ``condition(point)`` holds.

    The condition is evaluated in the frame the set was built in: after
    ``translate(d)`` a point p is tested as ``condition(p - d)``, so the
    condition moves together with the base set.
    """

    def __init__(self, base: PointSet, condition: Callable[[Coordinate], bool]):
        super().__init__(base.num_dimensions())
        self.base = base
        self.condition = condition
        self._shift = (0,) * self.n

    def get_origin(self) -> Coordinate:
        return self.base.get_origin()

    def _predicate(self) -> Callable[[Coordinate], bool]:
        shift, condition = self._shift, self.condition
        return lambda point: bool(condition(tuple(p - s for p, s in zip(point, shift))))

    def _includes(self, point: Coordinate) -> bool:
        return self.base.includes(point) and self._predicate()(point)

    def iterator(self) -> FilteredCursor:
        return FilteredCursor(self.base.iterator(), self._predicate())

    def children(self) -> tuple[PointSet, ...]:
        return (self.base,)

    def _translate(self, deltas: Coordinate) -> None:
        self._shift = tuple(s + d for s, d in zip(self._shift, deltas))

    def modification_stamp(self) -> int:
        return self._modifications + self.base.modification_stamp()

    def _compute_bounds(self) -> Bounds:
        return self.base.find_bound_min(), self.base.find_bound_max()

    def copy(self) -> "ConditionalPointSet":
        clone = ConditionalPointSet(self.base.copy(), self.condition)
        clone._shift = self._shift
        return clone

    def __repr__(self):
        return f"ConditionalPointSet({self.base!r})"

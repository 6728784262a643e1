"""
Set algebra over point sets.

Each combinator is built only from its children's public operations
(``includes``, ``iterator``, ``translate`` and the bound queries), so
combinators nest freely:

    region = (ball_a & ball_b) | (box - ball_c)

Children are shared references. Translating a combinator moves each of
its distinct children once, even one reachable along two paths, and the
move is visible to every other holder of those children; use ``copy()``
to break the sharing.
"""

import logging

from .cursor import FilteredCursor, LookaheadCursor
from .errors import check_dimensions
from .pointset import Bounds, Coordinate, PointSet, bounds_volume

logger = logging.getLogger(__name__)


class _BinaryPointSet(PointSet):
    """Shared plumbing for combinators of two children."""

    def __init__(self, a: PointSet, b: PointSet):
        check_dimensions(a.num_dimensions(), b.num_dimensions())
        super().__init__(a.num_dimensions())
        self.a = a
        self.b = b
        logger.debug("%s of %r and %r", type(self).__name__, a, b)

    def get_origin(self) -> Coordinate:
        return self.a.get_origin()

    def children(self) -> tuple[PointSet, ...]:
        return (self.a, self.b)

    def _translate(self, deltas: Coordinate) -> None:
        # No state of its own; translate() moves each distinct child once
        pass

    def modification_stamp(self) -> int:
        return self._modifications + self.a.modification_stamp() + self.b.modification_stamp()

    def copy(self) -> "_BinaryPointSet":
        return type(self)(self.a.copy(), self.b.copy())

    def __repr__(self):
        return f"{type(self).__name__}({self.a!r}, {self.b!r})"


class PointSetUnion(_BinaryPointSet):
    """
    Points in either child.

    Iterates all of ``a`` in a's order, then the points of ``b`` that ``a``
    does not include, in b's order; every point is visited exactly once.
    """

    def _includes(self, point: Coordinate) -> bool:
        return self.a.includes(point) or self.b.includes(point)

    def iterator(self) -> "UnionCursor":
        return UnionCursor(self.a, self.a.iterator(), self.b.iterator())

    def _compute_bounds(self) -> Bounds:
        a_min, a_max = self.a.find_bound_min(), self.a.find_bound_max()
        b_min, b_max = self.b.find_bound_min(), self.b.find_bound_max()
        return (
            tuple(min(x, y) for x, y in zip(a_min, b_min)),
            tuple(max(x, y) for x, y in zip(a_max, b_max)),
        )


class UnionCursor(LookaheadCursor):
    """Cursor of PointSetUnion."""

    def __init__(self, a: PointSet, a_iter, b_iter):
        super().__init__(a.num_dimensions())
        self.a = a
        self.a_iter = a_iter
        self.b_iter = b_iter

    def _find_next(self) -> Coordinate | None:
        if self.a_iter.has_next():
            return self.a_iter.next()
        while self.b_iter.has_next():
            point = self.b_iter.next()
            if not self.a.includes(point):
                return point
        return None

    def _reset_sources(self) -> None:
        self.a_iter.reset()
        self.b_iter.reset()

    def copy(self) -> "UnionCursor":
        return self._copy_state_to(UnionCursor(self.a, self.a_iter.copy(), self.b_iter.copy()))


class PointSetIntersection(_BinaryPointSet):
    """
    Points in both children.

    Iterates whichever child has the smaller bounding box, filtered by the
    other's ``includes``. The bounding box may be inverted (empty), in
    which case the set simply has no members.
    """

    def _includes(self, point: Coordinate) -> bool:
        return self.a.includes(point) and self.b.includes(point)

    def iterator(self) -> FilteredCursor:
        a_volume = bounds_volume(self.a.find_bound_min(), self.a.find_bound_max())
        b_volume = bounds_volume(self.b.find_bound_min(), self.b.find_bound_max())
        if b_volume < a_volume:
            return FilteredCursor(self.b.iterator(), self.a.includes)
        return FilteredCursor(self.a.iterator(), self.b.includes)

    def _compute_bounds(self) -> Bounds:
        a_min, a_max = self.a.find_bound_min(), self.a.find_bound_max()
        b_min, b_max = self.b.find_bound_min(), self.b.find_bound_max()
        return (
            tuple(max(x, y) for x, y in zip(a_min, b_min)),
            tuple(min(x, y) for x, y in zip(a_max, b_max)),
        )


class PointSetDifference(_BinaryPointSet):
    """Points of ``a`` not in ``b``, in a's order."""

    def _includes(self, point: Coordinate) -> bool:
        return self.a.includes(point) and not self.b.includes(point)

    def iterator(self) -> FilteredCursor:
        b = self.b
        return FilteredCursor(self.a.iterator(), lambda point: not b.includes(point))

    def _compute_bounds(self) -> Bounds:
        # Removing points never grows a's box
        return self.a.find_bound_min(), self.a.find_bound_max()

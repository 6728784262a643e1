"""
Cursor protocol - stateful, restartable traversal of coordinate-indexed data.

A cursor starts positioned *before* its first element. Each successful
``fwd()`` materializes a new current element which ``get()`` and the
coordinate accessors then report. Typical use:

    cursor = pointset.iterator()
    while cursor.has_next():
        position = cursor.next()

Cursors are also Python iterators, so ``for p in cursor`` and
``list(cursor)`` work (both consume the cursor from its current position).
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

from .errors import ExhaustedIterationError, InvalidArgumentError, check_dimensions

T = TypeVar("T")


def index_to_position(index: int, dims: Sequence[int]) -> list[int]:
    """
    Convert a flat index into a position, dimension 0 varying fastest.

    Args:
        index: Flat index in [0, prod(dims))
        dims: Extent of each dimension

    Returns:
        Zero-based position, one entry per dimension
    """
    position = []
    for extent in dims:
        position.append(index % extent)
        index //= extent
    return position


def position_to_index(position: Sequence[int], dims: Sequence[int]) -> int:
    """Inverse of index_to_position."""
    index = 0
    for d in reversed(range(len(dims))):
        index = index * dims[d] + position[d]
    return index


class Cursor(ABC, Generic[T]):
    """
    Abstract cursor over elements of type T.

    Subclasses implement the state machine (``_fwd``, ``_reset``, ``_get``,
    ``_get_position``, ``has_next`` and ``copy``); the base class owns the
    "current value is materialized" flag and derives the rest of the
    protocol from those primitives.
    """

    def __init__(self, n: int):
        if n < 1:
            raise InvalidArgumentError(f"cursor needs at least one dimension, got {n}")
        self.n = n
        self._materialized = False

    def num_dimensions(self) -> int:
        return self.n

    @abstractmethod
    def has_next(self) -> bool:
        """Whether at least one more element remains. Never moves the cursor."""

    @abstractmethod
    def _fwd(self) -> None:
        """Advance one element; only called when has_next() is True."""

    @abstractmethod
    def _reset(self) -> None:
        """Return internal counters to the pre-first-element state."""

    @abstractmethod
    def _get(self) -> T:
        """Current element."""

    @abstractmethod
    def _get_position(self, d: int) -> int:
        """Coordinate of the current element in dimension d."""

    @abstractmethod
    def copy(self) -> "Cursor[T]":
        """Independent cursor at the same logical position."""

    def fwd(self) -> None:
        """
        Advance exactly one element.

        Raises:
            ExhaustedIterationError: If no element remains
        """
        if not self.has_next():
            raise ExhaustedIterationError("fwd() called on an exhausted cursor")
        self._fwd()
        self._materialized = True

    def jump_fwd(self, steps: int) -> None:
        """
        Advance ``steps`` elements, equivalent to calling fwd() that many times.

        Raises ExhaustedIterationError without moving when fewer than
        ``steps`` elements remain. The generic version walks a copy first to
        find out; cursors that can count their remaining elements override it.
        """
        if steps < 0:
            raise InvalidArgumentError(f"cannot jump a negative number of steps: {steps}")
        if steps == 0:
            return
        scout = self.copy()
        for taken in range(steps):
            if not scout.has_next():
                raise ExhaustedIterationError(f"cannot jump {steps} steps, only {taken} remain")
            scout.fwd()
        for _ in range(steps):
            self.fwd()

    def next(self) -> T:
        """Advance, then return the new current element."""
        self.fwd()
        return self._get()

    def get(self) -> T:
        self._require_current()
        return self._get()

    def reset(self) -> None:
        self._reset()
        self._materialized = False

    def get_position(self, d: int) -> int:
        self._require_current()
        return self._get_position(d)

    def localize(self, buffer: list[int] | None = None) -> list[int]:
        """
        Write the current coordinates into ``buffer``.

        Args:
            buffer: Mutable sequence of length n, or None to allocate one

        Returns:
            The filled buffer
        """
        self._require_current()
        if buffer is None:
            buffer = [0] * self.n
        check_dimensions(self.n, len(buffer), "localize buffer")
        for d in range(self.n):
            buffer[d] = self._get_position(d)
        return buffer

    def _require_current(self) -> None:
        if not self._materialized:
            raise ExhaustedIterationError("cursor is positioned before its first element")

    def __iter__(self) -> "Cursor[T]":
        return self

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration
        return self.next()


class IntervalCursor(Cursor[T]):
    """
    Flat iteration over the closed interval [min, max], dimension 0 fastest.

    Without a grid accessor the cursor yields coordinate tuples; with one it
    positions the accessor and yields the accessor's values.
    """

    def __init__(self, min_corner: Sequence[int], max_corner: Sequence[int], access=None):
        super().__init__(len(min_corner))
        check_dimensions(self.n, len(max_corner), "interval max corner")
        if access is not None:
            check_dimensions(self.n, access.num_dimensions(), "grid accessor")
        self.min = [int(v) for v in min_corner]
        self.max = [int(v) for v in max_corner]
        self.dims = [max(0, hi - lo + 1) for lo, hi in zip(self.min, self.max)]
        self.size = 1
        for extent in self.dims:
            self.size *= extent
        self.access = access
        self._position = list(self.min)
        self._index = -1
        self._reset()

    def has_next(self) -> bool:
        return self._index < self.size - 1

    def _fwd(self) -> None:
        self._index += 1
        position = self._position
        position[0] += 1
        for d in range(self.n - 1):
            if position[d] <= self.max[d]:
                break
            position[d] = self.min[d]
            position[d + 1] += 1
        if self.access is not None:
            self.access.set_position(position)

    def jump_fwd(self, steps: int) -> None:
        if steps < 0:
            raise InvalidArgumentError(f"cannot jump a negative number of steps: {steps}")
        if steps == 0:
            return
        target = self._index + steps
        if target >= self.size:
            raise ExhaustedIterationError(
                f"cannot jump {steps} steps, only {self.size - 1 - self._index} remain"
            )
        self._index = target
        offset = index_to_position(target, self.dims)
        self._position = [lo + o for lo, o in zip(self.min, offset)]
        if self.access is not None:
            self.access.set_position(self._position)
        self._materialized = True

    def _reset(self) -> None:
        self._index = -1
        self._position = list(self.min)
        self._position[0] -= 1

    def _get(self) -> T:
        if self.access is not None:
            return self.access.get()
        return tuple(self._position)

    def _get_position(self, d: int) -> int:
        return self._position[d]

    def copy(self) -> "IntervalCursor[T]":
        access = self.access.copy_access() if self.access is not None else None
        clone = IntervalCursor(self.min, self.max, access)
        clone._index = self._index
        clone._position = list(self._position)
        clone._materialized = self._materialized
        return clone


class LookaheadCursor(Cursor[tuple[int, ...]]):
    """
    Coordinate cursor that finds its next element ahead of time.

    ``has_next()`` may pull elements from the underlying sources, but the
    element it finds is parked until ``fwd()``, so the reported position
    never changes. Subclasses implement ``_find_next`` (None when
    exhausted) and ``_reset_sources``.
    """

    def __init__(self, n: int):
        super().__init__(n)
        self._current: tuple[int, ...] | None = None
        self._next_cache: tuple[int, ...] | None = None

    @abstractmethod
    def _find_next(self) -> tuple[int, ...] | None:
        """Pull the next qualifying coordinate from the sources."""

    @abstractmethod
    def _reset_sources(self) -> None:
        """Reset every underlying cursor."""

    def has_next(self) -> bool:
        if self._next_cache is None:
            self._next_cache = self._find_next()
        return self._next_cache is not None

    def _fwd(self) -> None:
        self._current = self._next_cache
        self._next_cache = None

    def _reset(self) -> None:
        self._reset_sources()
        self._current = None
        self._next_cache = None

    def _get(self) -> tuple[int, ...]:
        return self._current

    def _get_position(self, d: int) -> int:
        return self._current[d]

    def _copy_state_to(self, clone: "LookaheadCursor") -> "LookaheadCursor":
        clone._current = self._current
        clone._next_cache = self._next_cache
        clone._materialized = self._materialized
        return clone


class FilteredCursor(LookaheadCursor):
    """Elements of a source cursor that satisfy a predicate, in source order."""

    def __init__(self, source: Cursor[tuple[int, ...]], predicate):
        super().__init__(source.num_dimensions())
        self.source = source
        self.predicate = predicate

    def _find_next(self) -> tuple[int, ...] | None:
        while self.source.has_next():
            point = self.source.next()
            if self.predicate(point):
                return point
        return None

    def _reset_sources(self) -> None:
        self.source.reset()

    def copy(self) -> "FilteredCursor":
        return self._copy_state_to(FilteredCursor(self.source.copy(), self.predicate))


class SequenceCursor(Cursor[tuple[int, ...]]):
    """Cursor over a fixed sequence of coordinate tuples."""

    def __init__(self, n: int, points: Sequence[tuple[int, ...]]):
        super().__init__(n)
        self.points = points
        self._index = -1

    def has_next(self) -> bool:
        return self._index < len(self.points) - 1

    def _fwd(self) -> None:
        self._index += 1

    def jump_fwd(self, steps: int) -> None:
        if steps < 0:
            raise InvalidArgumentError(f"cannot jump a negative number of steps: {steps}")
        if steps == 0:
            return
        if self._index + steps >= len(self.points):
            raise ExhaustedIterationError(f"cannot jump {steps} steps past the end")
        self._index += steps
        self._materialized = True

    def _reset(self) -> None:
        self._index = -1

    def _get(self) -> tuple[int, ...]:
        return self.points[self._index]

    def _get_position(self, d: int) -> int:
        return self.points[self._index][d]

    def copy(self) -> "SequenceCursor":
        clone = SequenceCursor(self.n, self.points)
        clone._index = self._index
        clone._materialized = self._materialized
        return clone

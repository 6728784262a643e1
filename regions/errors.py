"""
Exception hierarchy for point sets, cursors and grids.

All errors are raised synchronously at the offending call and are never
retried: every operation in this package is deterministic and local.
"""


class RegionError(Exception):
    """Base class for all region errors."""


class DimensionMismatchError(RegionError, ValueError):
    """Two objects that must share a dimensionality do not."""

    def __init__(self, expected: int, actual: int, what: str = "point set"):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} has {actual} dimensions, expected {expected}")


class ExhaustedIterationError(RegionError, IndexError):
    """A cursor was advanced (or read) with no element available."""


class InvalidArgumentError(RegionError, ValueError):
    """A structurally invalid construction parameter."""


def check_dimensions(expected: int, actual: int, what: str = "point set") -> None:
    """Raise DimensionMismatchError unless expected == actual."""
    if expected != actual:
        raise DimensionMismatchError(expected, actual, what)

"""N-dimensional point sets, cursors and neighborhood traversal."""

from .algebra import PointSetDifference, PointSetIntersection, PointSetUnion, UnionCursor
from .cursor import (
    Cursor,
    FilteredCursor,
    IntervalCursor,
    LookaheadCursor,
    SequenceCursor,
    index_to_position,
    position_to_index,
)
from .errors import (
    DimensionMismatchError,
    ExhaustedIterationError,
    InvalidArgumentError,
    RegionError,
)
from .grid import ArrayAccess, ArrayGrid, GridAccess, PositionAccess, PositionGrid
from .neighborhood import (
    HyperSphereCursor,
    HyperSphereNeighborhood,
    HyperSphereNeighborhoodFactory,
    NeighborhoodConfig,
    ball_size,
    build_pointset,
    get_config,
)
from .pointset import (
    BallPointSet,
    BoundsCache,
    ConditionalPointSet,
    GeneralPointSet,
    HyperVolumePointSet,
    PointSet,
)
from .structuring import (
    RegionStats,
    dilate,
    erode,
    footprint,
    neighborhood_mean,
    region_stats,
    region_values,
)
from .visualize import render_pointset

__all__ = [
    # Cursors
    "Cursor",
    "IntervalCursor",
    "LookaheadCursor",
    "FilteredCursor",
    "SequenceCursor",
    "index_to_position",
    "position_to_index",
    # Errors
    "RegionError",
    "DimensionMismatchError",
    "ExhaustedIterationError",
    "InvalidArgumentError",
    # Grids
    "GridAccess",
    "ArrayGrid",
    "ArrayAccess",
    "PositionGrid",
    "PositionAccess",
    # Point sets
    "PointSet",
    "BoundsCache",
    "HyperVolumePointSet",
    "BallPointSet",
    "GeneralPointSet",
    "ConditionalPointSet",
    # Set algebra
    "PointSetUnion",
    "PointSetIntersection",
    "PointSetDifference",
    "UnionCursor",
    # Neighborhoods
    "HyperSphereNeighborhood",
    "HyperSphereNeighborhoodFactory",
    "HyperSphereCursor",
    "ball_size",
    "NeighborhoodConfig",
    "get_config",
    "build_pointset",
    # Structuring elements
    "RegionStats",
    "footprint",
    "dilate",
    "erode",
    "region_values",
    "region_stats",
    "neighborhood_mean",
    # Visualization
    "render_pointset",
]

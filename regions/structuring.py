"""
Structuring elements and region statistics.

Point sets double as structuring elements for morphology and as regions of
interest for statistics over a grid:

    disk = BallPointSet((0, 0), 2)
    opened = dilate(erode(image, disk), disk)
    stats = region_stats(ArrayGrid(image), BallPointSet((40, 60), 5))
"""

import logging
from dataclasses import dataclass

import numpy as np
from scipy import ndimage

from .cursor import IntervalCursor
from .errors import InvalidArgumentError, check_dimensions
from .grid import ArrayGrid
from .neighborhood.hypersphere import HyperSphereNeighborhood
from .pointset import PointSet

logger = logging.getLogger(__name__)


@dataclass
class RegionStats:
    """Summary of grid values inside a region."""

    count: int
    sum: float
    mean: float
    min: float
    max: float


def footprint(pointset: PointSet) -> np.ndarray:
    """
    Boolean footprint of a point set centered on its origin.

    The member mask is padded with False on the short side of every axis
    so that the origin lands on the center element, which is where
    scipy.ndimage anchors a footprint. The origin does not have to be a
    member, nor lie inside the bounding box.

    Args:
        pointset: Structuring element, anchored at ``get_origin()``

    Returns:
        Boolean array with odd extent in every axis
    """
    mask, lo = pointset.to_mask()
    if mask.size == 0:
        raise InvalidArgumentError("structuring element has no members")
    hi = pointset.find_bound_max()
    origin = pointset.get_origin()

    pad = []
    for d in range(pointset.num_dimensions()):
        before, after = origin[d] - lo[d], hi[d] - origin[d]
        reach = max(before, after, 0)
        pad.append((reach - before, reach - after))
    if any(p != (0, 0) for p in pad):
        logger.debug("padding footprint of %r by %s", pointset, pad)
    return np.pad(mask, pad, mode="constant", constant_values=False)


def dilate(image: np.ndarray, pointset: PointSet) -> np.ndarray:
    """Grey-level dilation of ``image`` by the point set."""
    check_dimensions(image.ndim, pointset.num_dimensions(), "structuring element")
    return ndimage.grey_dilation(image, footprint=footprint(pointset))


def erode(image: np.ndarray, pointset: PointSet) -> np.ndarray:
    """Grey-level erosion of ``image`` by the point set."""
    check_dimensions(image.ndim, pointset.num_dimensions(), "structuring element")
    return ndimage.grey_erosion(image, footprint=footprint(pointset))


def region_values(grid: ArrayGrid, pointset: PointSet) -> np.ndarray:
    """
    Grid values at every member of the point set, in iteration order.

    Members outside the grid are skipped.
    """
    check_dimensions(grid.num_dimensions(), pointset.num_dimensions(), "region")
    values = [grid.value_at(point) for point in pointset.iterator() if grid.in_bounds(point)]
    return np.asarray(values, dtype=grid.data.dtype)


def region_stats(grid: ArrayGrid, pointset: PointSet) -> RegionStats:
    """
    Count, sum, mean, min and max of the grid inside a region.

    An empty intersection of region and grid gives count 0 and NaN for
    the other statistics.
    """
    values = region_values(grid, pointset)
    if values.size == 0:
        return RegionStats(count=0, sum=0.0, mean=float("nan"), min=float("nan"), max=float("nan"))
    return RegionStats(
        count=int(values.size),
        sum=float(values.sum()),
        mean=float(values.mean()),
        min=float(values.min()),
        max=float(values.max()),
    )


def neighborhood_mean(image: np.ndarray, radius: int, out_of_bounds: float | None = None) -> np.ndarray:
    """
    Mean over a hyperball neighborhood around every element of ``image``.

    Args:
        image: N-D array
        radius: Neighborhood radius
        out_of_bounds: Value used for neighbors outside the image. If None,
            those neighbors are left out of the mean.

    Returns:
        Float array of the same shape as image
    """
    grid = ArrayGrid(image, out_of_bounds=out_of_bounds)
    access = grid.access()
    factory = HyperSphereNeighborhood.factory()
    result = np.zeros(image.shape, dtype=float)
    logger.debug("neighborhood_mean shape=%s radius=%d", image.shape, radius)

    positions = IntervalCursor([0] * image.ndim, [extent - 1 for extent in image.shape])
    buffer = [0] * image.ndim
    while positions.has_next():
        center = positions.next()
        cursor = factory.create(center, radius, access).cursor()
        total, count = 0.0, 0
        while cursor.has_next():
            cursor.fwd()
            if out_of_bounds is None and not grid.in_bounds(cursor.localize(buffer)):
                continue
            total += float(cursor.get())
            count += 1
        result[center] = total / count
    return result

"""
Draw 2-D point sets onto images.

Coordinates follow the grid convention (dimension 0 = row, dimension 1 =
column); OpenCV takes points as (col, row).
"""

import cv2
import numpy as np

from .errors import check_dimensions
from .pointset import PointSet


def render_pointset(
    pointset: PointSet,
    shape: tuple[int, int],
    image: np.ndarray | None = None,
    color: tuple[int, int, int] = (255, 0, 0),
    alpha: float = 1.0,
    show_origin: bool = True,
) -> np.ndarray:
    """
    Overlay a point set on an image.

    Args:
        pointset: 2-D point set to draw
        shape: (height, width) of the output when no image is given
        image: Optional background, (H, W) grey or (H, W, 3) RGB
        color: RGB color for members
        alpha: Blend weight of the color over the background
        show_origin: Mark the point set's origin

    Returns:
        RGB uint8 image with members colored; members outside the image are clipped
    """
    check_dimensions(2, pointset.num_dimensions(), "rendered point set")

    # Create output image
    if image is None:
        output = np.zeros((shape[0], shape[1], 3), dtype=np.uint8)
    elif image.ndim == 2:
        output = cv2.cvtColor(image.astype(np.uint8), cv2.COLOR_GRAY2RGB)
    else:
        output = image.astype(np.uint8).copy()

    h, w = output.shape[:2]
    overlay = output.copy()
    for row, col in pointset.iterator():
        if 0 <= row < h and 0 <= col < w:
            overlay[row, col] = color

    output = cv2.addWeighted(overlay, alpha, output, 1.0 - alpha, 0)

    # Mark origin
    if show_origin:
        row, col = pointset.get_origin()
        if 0 <= row < h and 0 <= col < w:
            cv2.circle(output, (col, row), 2, (0, 255, 0), -1)  # Green circle

    return output

import math

import numpy as np
import pytest

from regions.errors import DimensionMismatchError, InvalidArgumentError
from regions.grid import ArrayGrid
from regions.neighborhood.config import build_pointset, get_config
from regions.pointset import BallPointSet, GeneralPointSet, HyperVolumePointSet
from regions.structuring import (
    dilate,
    erode,
    footprint,
    neighborhood_mean,
    region_stats,
    region_values,
)

from .helpers import lattice_ball


def test_footprint_of_unit_ball_is_cross():
    expected = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=bool)
    assert np.array_equal(footprint(BallPointSet((7, -3), 1)), expected)


def test_footprint_pads_to_put_origin_at_center():
    lopsided = BallPointSet((0, 0), 1) | BallPointSet((3, 0), 1)
    result = footprint(lopsided)
    assert result.shape == (9, 3)
    assert result[4, 1]  # origin (0, 0)
    assert result[7, 1]  # center of the second ball
    assert result[8, 1]
    assert not result[:3].any()
    assert result.sum() == 10


def test_footprint_of_corner_anchored_box():
    result = footprint(HyperVolumePointSet((0, 0), (2, 2)))
    expected = np.zeros((5, 5), dtype=bool)
    expected[2:, 2:] = True
    assert np.array_equal(result, expected)


def test_footprint_rejects_empty_element():
    with pytest.raises(InvalidArgumentError):
        footprint(GeneralPointSet((0, 0), []))


def test_dilating_an_impulse_stamps_the_element():
    image = np.zeros((9, 9), dtype=np.uint8)
    image[4, 4] = 1
    disk = BallPointSet((0, 0), 2)
    result = dilate(image, disk)
    expected = np.zeros_like(image)
    expected[2:7, 2:7] = footprint(disk)
    assert np.array_equal(result, expected)


def test_eroding_a_hole_stamps_the_element():
    image = np.ones((9, 9), dtype=np.uint8)
    image[4, 4] = 0
    box = HyperVolumePointSet((-1, -1), (1, 1), origin=(0, 0))
    result = erode(image, box)
    assert result[3:6, 3:6].sum() == 0
    assert result.sum() == 81 - 9


def test_moore_preset_as_structuring_element():
    moore = build_pointset(get_config("moore"))
    impulse = np.zeros((9, 9), dtype=np.uint8)
    impulse[4, 4] = 1
    expected = np.zeros_like(impulse)
    expected[3:6, 3:6] = 1
    assert np.array_equal(dilate(impulse, moore), expected)

    hole = 1 - impulse
    assert np.array_equal(erode(hole, moore), 1 - expected)


def test_dilating_with_corner_anchored_box_shifts_the_stamp():
    image = np.zeros((9, 9), dtype=np.uint8)
    image[4, 4] = 1
    result = dilate(image, HyperVolumePointSet((0, 0), (2, 2)))
    expected = np.zeros_like(image)
    expected[4:7, 4:7] = 1
    assert np.array_equal(result, expected)


def test_dilation_matches_neighborhood_max():
    rng = np.random.default_rng(1)
    image = rng.integers(0, 255, size=(8, 8)).astype(np.int32)
    result = dilate(image, BallPointSet((0, 0), 1))
    for r in range(8):
        for c in range(8):
            neighbors = [
                image[p] for p in lattice_ball((r, c), 1) if 0 <= p[0] < 8 and 0 <= p[1] < 8
            ]
            assert result[r, c] == max(neighbors)


def test_morphology_checks_dimensions():
    with pytest.raises(DimensionMismatchError):
        dilate(np.zeros((4, 4, 4)), BallPointSet((0, 0), 1))


def test_region_values_and_stats():
    grid = ArrayGrid(np.arange(25, dtype=float).reshape(5, 5))
    box = HyperVolumePointSet((1, 1), (2, 2))
    assert list(region_values(grid, box)) == [6.0, 11.0, 7.0, 12.0]

    stats = region_stats(grid, box)
    assert stats.count == 4
    assert stats.sum == 36.0
    assert stats.mean == 9.0
    assert stats.min == 6.0
    assert stats.max == 12.0


def test_region_stats_skips_members_outside_grid():
    grid = ArrayGrid(np.arange(25, dtype=float).reshape(5, 5))
    corner = region_stats(grid, BallPointSet((0, 0), 1))
    assert corner.count == 3
    assert corner.sum == 0.0 + 1.0 + 5.0

    outside = region_stats(grid, BallPointSet((20, 20), 1))
    assert outside.count == 0
    assert math.isnan(outside.mean)


def test_neighborhood_mean_matches_brute_force():
    rng = np.random.default_rng(2)
    image = rng.random((6, 7))
    result = neighborhood_mean(image, radius=2)
    for r in range(6):
        for c in range(7):
            values = [
                image[p] for p in lattice_ball((r, c), 2) if 0 <= p[0] < 6 and 0 <= p[1] < 7
            ]
            assert result[r, c] == pytest.approx(np.mean(values))


def test_neighborhood_mean_with_fill_value():
    image = np.ones((3, 3))
    result = neighborhood_mean(image, radius=1, out_of_bounds=0.0)
    assert result[1, 1] == pytest.approx(1.0)
    assert result[0, 0] == pytest.approx(3 / 5)
    assert result[0, 1] == pytest.approx(4 / 5)


def test_neighborhood_mean_3d():
    image = np.full((3, 3, 3), 2.5)
    assert np.allclose(neighborhood_mean(image, radius=1), 2.5)

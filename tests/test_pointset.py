import itertools

import numpy as np
import pytest

from regions.errors import DimensionMismatchError, InvalidArgumentError
from regions.pointset import (
    BallPointSet,
    BoundsCache,
    ConditionalPointSet,
    GeneralPointSet,
    HyperVolumePointSet,
)

from .helpers import drain, lattice_ball


PRIMITIVES = {
    "box": lambda: HyperVolumePointSet((-1, 2), (3, 4)),
    "ball": lambda: BallPointSet((2, -3), 3),
    "general": lambda: GeneralPointSet((0, 0), [(1, 1), (4, -2), (0, 5), (1, 1)]),
    "conditional": lambda: ConditionalPointSet(
        BallPointSet((0, 0), 4), lambda p: (p[0] + p[1]) % 2 == 0
    ),
}


@pytest.fixture(params=list(PRIMITIVES))
def pointset(request):
    return PRIMITIVES[request.param]()


class CountingBall(BallPointSet):
    def __init__(self, center, radius):
        super().__init__(center, radius)
        self.computations = 0

    def _compute_bounds(self):
        self.computations += 1
        return super()._compute_bounds()


def test_includes_agrees_with_iterator(pointset):
    members = drain(pointset.iterator())
    assert len(members) == len(set(members)) == pointset.calc_size()
    lo, hi = pointset.find_bound_min(), pointset.find_bound_max()
    ranges = [range(a - 2, b + 3) for a, b in zip(lo, hi)]
    for p in itertools.product(*ranges):
        assert pointset.includes(p) == (p in set(members))


def test_bounds_contain_every_member(pointset):
    lo, hi = pointset.find_bound_min(), pointset.find_bound_max()
    for p in pointset.iterator():
        assert all(a <= x <= b for a, x, b in zip(lo, p, hi))


def test_translate_commutes_with_membership(pointset):
    original = pointset.copy()
    delta = (5, -7)
    pointset.translate(delta)
    for p in itertools.product(range(-10, 12), repeat=2):
        shifted = tuple(x - d for x, d in zip(p, delta))
        assert pointset.includes(p) == original.includes(shifted)
    assert pointset.calc_size() == original.calc_size()


def test_copy_is_deep(pointset):
    clone = pointset.copy()
    before = set(drain(pointset.iterator()))
    clone.translate((100, 100))
    assert set(drain(pointset.iterator())) == before
    assert set(drain(clone.iterator())) == {(x + 100, y + 100) for x, y in before}


def test_iterators_are_independent():
    ball = BallPointSet((0, 0), 2)
    first = ball.iterator()
    second = ball.iterator()
    first.jump_fwd(4)
    assert second.next() == (0, -2)
    assert first.get() != second.get()


def test_bounds_are_memoized_until_translate():
    ball = CountingBall((0, 0, 0), 2)
    assert ball.find_bound_min() == (-2, -2, -2)
    assert ball.find_bound_max() == (2, 2, 2)
    ball.find_bound_min()
    assert ball.computations == 1

    ball.translate((1, 0, 0))
    assert ball.computations == 1
    assert ball.find_bound_max() == (3, 2, 2)
    assert ball.find_bound_min() == (-1, -2, -2)
    assert ball.computations == 2


def test_bounds_cache_recomputes_on_stamp_change():
    cache = BoundsCache()
    calls = []

    def compute():
        calls.append(1)
        return (0,), (len(calls),)

    assert cache.get(compute, stamp=0) == ((0,), (1,))
    assert cache.get(compute, stamp=0) == ((0,), (1,))
    assert cache.get(compute, stamp=3) == ((0,), (2,))
    cache.invalidate()
    assert not cache.is_valid
    assert cache.get(compute, stamp=3) == ((0,), (3,))


def test_ball_size_is_exact():
    ball = BallPointSet((7, 7), 4)
    assert ball.calc_size() == len(lattice_ball((7, 7), 4)) == len(drain(ball.iterator()))
    assert len(ball) == ball.calc_size()


def test_hypervolume_from_dimensions():
    box = HyperVolumePointSet.from_dimensions((3, 2))
    assert drain(box.iterator()) == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]
    assert box.calc_size() == 6


def test_hypervolume_origin_anchor_moves_with_box():
    box = HyperVolumePointSet((-1, -1), (1, 1), origin=(0, 0))
    assert HyperVolumePointSet((-1, -1), (1, 1)).get_origin() == (-1, -1)
    assert box.get_origin() == (0, 0)
    box.translate((4, 5))
    assert box.get_origin() == (4, 5)
    clone = box.copy()
    clone.translate((1, 1))
    assert clone.get_origin() == (5, 6)
    assert box.get_origin() == (4, 5)
    with pytest.raises(DimensionMismatchError):
        HyperVolumePointSet((0, 0), (1, 1), origin=(0,))
    assert (2, 1) in box
    assert (3, 1) not in box


def test_general_point_set_preserves_first_insertion_order():
    points = GeneralPointSet((1, 1), [(3, 3), (1, 2), (3, 3), (0, 0)])
    assert drain(points.iterator()) == [(3, 3), (1, 2), (0, 0)]
    assert points.find_bound_min() == (0, 0)
    assert points.find_bound_max() == (3, 3)


def test_empty_general_point_set_has_empty_bounds():
    empty = GeneralPointSet((0, 0), [])
    assert empty.calc_size() == 0
    assert empty.bounds_empty()
    mask, offset = empty.to_mask()
    assert mask.size == 0


def test_mask_round_trip():
    ball = BallPointSet((5, 5), 2)
    mask, offset = ball.to_mask()
    assert offset == (3, 3)
    assert mask.shape == (5, 5)
    assert mask.sum() == 13
    rebuilt = GeneralPointSet.from_mask(mask, offset)
    assert set(drain(rebuilt.iterator())) == set(drain(ball.iterator()))


def test_conditional_bounds_follow_base():
    evens = ConditionalPointSet(HyperVolumePointSet((0,), (9,)), lambda p: p[0] % 2 == 0)
    assert drain(evens.iterator()) == [(0,), (2,), (4,), (6,), (8,)]
    evens.translate((1,))
    assert evens.find_bound_min() == (1,)
    assert drain(evens.iterator()) == [(1,), (3,), (5,), (7,), (9,)]


def test_dimension_checks():
    ball = BallPointSet((0, 0), 1)
    with pytest.raises(DimensionMismatchError):
        ball.includes((0, 0, 0))
    with pytest.raises(DimensionMismatchError):
        ball.translate((1,))
    with pytest.raises(DimensionMismatchError):
        GeneralPointSet((0, 0), [(1, 2, 3)])
    with pytest.raises(DimensionMismatchError):
        GeneralPointSet.from_mask(np.ones((2, 2), dtype=bool), (0,))


def test_invalid_arguments():
    with pytest.raises(InvalidArgumentError):
        BallPointSet((0, 0), -1)
    with pytest.raises(InvalidArgumentError):
        HyperVolumePointSet((0, 5), (3, 4))
    with pytest.raises(InvalidArgumentError):
        BallPointSet((), 1)

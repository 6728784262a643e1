import pytest

from regions.errors import InvalidArgumentError
from regions.neighborhood.config import CONFIGS, NeighborhoodConfig, build_pointset, get_config
from regions.pointset import BallPointSet, HyperVolumePointSet


def test_get_config_defaults():
    config = get_config()
    assert isinstance(config, NeighborhoodConfig)
    assert config.shape == "ball"
    assert config.radius == 1


def test_unknown_config_raises():
    with pytest.raises(InvalidArgumentError):
        get_config("hexagon")


@pytest.mark.parametrize(
    "name, kind, size",
    [
        ("von_neumann", BallPointSet, 5),
        ("moore", HyperVolumePointSet, 9),
        ("disk", BallPointSet, 29),
        ("sphere", BallPointSet, 33),
    ],
)
def test_presets_build_expected_pointsets(name, kind, size):
    pointset = build_pointset(get_config(name))
    assert isinstance(pointset, kind)
    assert pointset.num_dimensions() == CONFIGS[name].ndim
    assert pointset.calc_size() == size


def test_build_pointset_centers_on_request():
    box = build_pointset(get_config("moore"), center=(10, 20))
    assert box.find_bound_min() == (9, 19)
    assert box.find_bound_max() == (11, 21)
    assert box.get_origin() == (10, 20)


def test_build_pointset_validates_config():
    with pytest.raises(InvalidArgumentError):
        build_pointset(NeighborhoodConfig(shape="star"))
    with pytest.raises(InvalidArgumentError):
        build_pointset(NeighborhoodConfig(radius=-2))

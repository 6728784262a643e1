"""
Configuration for neighborhoods / structuring elements

Named presets so filters and morphology can be switched by name.
"""

from dataclasses import dataclass

from ..errors import InvalidArgumentError


@dataclass
class NeighborhoodConfig:
    """Shape and size of a neighborhood centered on a pixel."""

    # === Geometry ===
    shape: str = "ball"   # "ball" (Euclidean) or "box" (Chebyshev)
    radius: int = 1
    ndim: int = 2

    # === Grid ===
    out_of_bounds: float | None = None  # fill value for reads outside the grid


@dataclass
class VonNeumannConfig(NeighborhoodConfig):
    """4-connected cross: ball of radius 1."""

    shape: str = "ball"
    radius: int = 1


@dataclass
class MooreConfig(NeighborhoodConfig):
    """8-connected square: box of radius 1."""

    shape: str = "box"
    radius: int = 1


@dataclass
class DiskConfig(NeighborhoodConfig):
    """Larger disk for smoothing filters."""

    radius: int = 3
    out_of_bounds: float | None = 0.0


@dataclass
class SphereConfig(NeighborhoodConfig):
    """Volumetric ball for 3-D stacks."""

    radius: int = 2
    ndim: int = 3


# Default configurations
CONFIGS = {
    "default": NeighborhoodConfig(),
    "von_neumann": VonNeumannConfig(),
    "moore": MooreConfig(),
    "disk": DiskConfig(),
    "sphere": SphereConfig(),
}

SHAPES = ("ball", "box")


def get_config(name="default"):
    """
    Get configuration by name.

    Args:
        name: Configuration name ("default", "von_neumann", "moore", "disk", "sphere")

    Returns:
        config: NeighborhoodConfig instance
    """
    if name not in CONFIGS:
        raise InvalidArgumentError(f"Unknown config: {name}. Available: {list(CONFIGS.keys())}")

    return CONFIGS[name]


def build_pointset(config: NeighborhoodConfig, center=None):
    """
    Build the point set a configuration describes.

    Args:
        config: Neighborhood configuration
        center: Center coordinate (defaults to the origin)

    Returns:
        BallPointSet, or a HyperVolumePointSet anchored at the center
    """
    from ..pointset import BallPointSet, HyperVolumePointSet

    if config.shape not in SHAPES:
        raise InvalidArgumentError(f"Unknown shape: {config.shape}. Available: {list(SHAPES)}")
    if config.radius < 0:
        raise InvalidArgumentError(f"radius must be >= 0, got {config.radius}")
    if center is None:
        center = (0,) * config.ndim

    if config.shape == "ball":
        return BallPointSet(center, config.radius)
    return HyperVolumePointSet(
        [c - config.radius for c in center],
        [c + config.radius for c in center],
        origin=center,
    )

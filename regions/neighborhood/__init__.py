"""
Neighborhoods

Local regions around a grid position, traversed through cursors:
- HyperSphereNeighborhood: exact N-D ball via nested scanlines
- NeighborhoodConfig: named neighborhood presets
"""

from .config import CONFIGS, NeighborhoodConfig, build_pointset, get_config
from .hypersphere import (
    HyperSphereCursor,
    HyperSphereNeighborhood,
    HyperSphereNeighborhoodFactory,
    ball_size,
)

__all__ = [
    "HyperSphereNeighborhood",
    "HyperSphereNeighborhoodFactory",
    "HyperSphereCursor",
    "ball_size",
    # Config
    "NeighborhoodConfig",
    "CONFIGS",
    "get_config",
    "build_pointset",
]

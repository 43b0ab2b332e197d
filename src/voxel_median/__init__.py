"""Boundary-adaptive 3-D median filtering of voxel volumes."""

from .accessor import ArrayVoxel, VoxelAccessor, preserved_position
from .config import MedianFilterConfig, parse_extent
from .filter import median_filter_3d, medfilt1
from .median3d import ExtentError, Median3D, validate_extent

__all__ = [
    "ArrayVoxel",
    "ExtentError",
    "Median3D",
    "MedianFilterConfig",
    "VoxelAccessor",
    "median_filter_3d",
    "medfilt1",
    "parse_extent",
    "preserved_position",
    "validate_extent",
]

__version__ = "0.1.0"

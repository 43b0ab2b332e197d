"""Whole-volume median filtering built on the :class:`Median3D` adapter."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from tqdm import tqdm

from .accessor import ArrayVoxel
from .median3d import Median3D, validate_extent

logger = logging.getLogger(__name__)


def median_filter_3d(
    data: np.ndarray,
    extent: int | Sequence[int] = 3,
    *,
    name: str = "array",
    progress: bool = False,
) -> np.ndarray:
    """Median filter a volume over a boundary-clipped 3-D neighbourhood.

    Parameters
    ----------
    data : np.ndarray
        Input volume, at least one axis. Arrays with fewer than three axes
        are filtered as if they had trailing axes of size 1. Axes beyond the
        third are not filtered: each 3-D sub-volume is processed on its own.
    extent : int or sequence of int, default=3
        Neighbourhood width, one positive odd value for all three axes or one
        per axis.
    name : str, default="array"
        Name of the volume in log and error messages.
    progress : bool, default=False
        Show a progress bar.

    Returns
    -------
    np.ndarray
        Filtered volume, float64, same shape as ``data``.

    Raises
    ------
    ExtentError
        If ``extent`` is not a valid neighbourhood extent.
    """
    extent = validate_extent(extent)
    data = np.asarray(data)
    if data.ndim == 0:
        raise ValueError("median filtering needs at least a 1-D array")

    shape = data.shape
    volume = data.reshape(shape + (1,) * (3 - data.ndim)) if data.ndim < 3 else data
    out = np.empty(volume.shape, dtype=np.float64)

    src = Median3D(ArrayVoxel(volume, name=name), extent)
    dest = ArrayVoxel(out, name=f"{name} (median)")

    logger.info('median filtering "%s" %s with extent %s', name, shape, list(extent))
    with tqdm(total=volume.size, desc="median filtering", disable=not progress) as pbar:
        for pos in np.ndindex(*volume.shape):
            for axis, index in enumerate(pos):
                src[axis] = index
                dest[axis] = index
            dest.set_value(src.value())
            pbar.update(1)
    logger.info('median filtering "%s" done', name)

    return out.reshape(shape)


def medfilt1(x: np.ndarray, n: int = 3) -> np.ndarray:
    """One-dimensional median filter with truncated edge windows.

    Equivalent to MATLAB ``medfilt1(x, n, 'truncate')`` for odd ``n``: near
    the ends the window is shortened instead of padded, and a window holding
    an even number of samples yields the mean of its two middle values.

    Parameters
    ----------
    x : np.ndarray
        Input signal, 1-D.
    n : int, default=3
        Window length, a positive odd integer.

    Returns
    -------
    np.ndarray
        Filtered signal, float64, same shape as ``x``.
    """
    x = np.asarray(x)
    if x.ndim != 1:
        raise ValueError(f"medfilt1 expects a 1-D signal, got shape {x.shape}")
    return median_filter_3d(x, (n, 1, 1), name="signal")

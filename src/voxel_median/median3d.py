"""Windowed 3-D median adapter over a voxel accessor."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .accessor import VoxelAccessor, preserved_position

logger = logging.getLogger(__name__)


class ExtentError(ValueError):
    """Invalid median filter neighbourhood extent."""


def validate_extent(extent: int | Sequence[int]) -> tuple[int, int, int]:
    """Check a neighbourhood extent and broadcast it to three axes.

    Parameters
    ----------
    extent : int or sequence of int
        One value used for all three axes, or one value per axis.
        Every value must be a positive odd integer.

    Returns
    -------
    tuple of int
        Full window width along axes 0, 1 and 2.

    Raises
    ------
    ExtentError
        If any value is even or non-positive, or if the number of values is
        neither 1 nor 3.
    """
    values = [extent] if isinstance(extent, (int, np.integer)) else list(extent)
    for e in values:
        if int(e) != e or e < 1 or not int(e) & 1:
            raise ExtentError(f"expected positive odd number for extent, got {e!r}")
    if len(values) not in (1, 3):
        raise ExtentError(
            f"unexpected number of elements specified in extent ({len(values)}, expected 1 or 3)"
        )
    if len(values) == 1:
        values = values * 3
    return tuple(int(e) for e in values)


class Median3D:
    """Median over a 3-D neighbourhood of the wrapped accessor's position.

    Wraps any :class:`VoxelAccessor` and is one itself: position, sizes and
    name are those of the parent, while :meth:`value` returns the median of
    the parent's values over a window centred on the current position. The
    window is clipped at the volume boundary rather than padded, so voxels
    near an edge use fewer samples. Only axes 0-2 are filtered; the position
    on any further axis is left as it is.

    Instances are not reentrant and must not share a parent across threads.

    Parameters
    ----------
    parent : VoxelAccessor
        Accessor with at least three axes.
    extent : int or sequence of int, default=(3,)
        Neighbourhood width, see :meth:`set_extent`.
    """

    def __init__(self, parent: VoxelAccessor, extent: int | Sequence[int] = (3,)):
        if parent.ndim < 3:
            raise ValueError(
                f"median3D adapter needs an accessor with at least 3 axes, "
                f"\"{parent.name}\" has {parent.ndim}"
            )
        self._parent = parent
        self._extent: tuple[int, int, int] | None = None
        self._radius: tuple[int, int, int] | None = None
        self._buffer = np.empty(0, dtype=np.float64)
        self.set_extent(extent)

    # Delegated accessor surface ------------------------------------------
    @property
    def name(self) -> str:
        return self._parent.name

    @property
    def ndim(self) -> int:
        return self._parent.ndim

    @property
    def parent(self) -> VoxelAccessor:
        return self._parent

    def size(self, axis: int) -> int:
        return self._parent.size(axis)

    def __getitem__(self, axis: int) -> int:
        return self._parent[axis]

    def __setitem__(self, axis: int, index: int) -> None:
        self._parent[axis] = index

    # Configuration --------------------------------------------------------
    @property
    def extent(self) -> tuple[int, int, int] | None:
        return self._extent

    @property
    def radius(self) -> tuple[int, int, int] | None:
        return self._radius

    def set_extent(self, extent: int | Sequence[int]) -> None:
        """Set the neighbourhood width.

        Parameters
        ----------
        extent : int or sequence of int
            A single positive odd integer for all three axes, or three of
            them, one per axis.

        Raises
        ------
        ExtentError
            On an even value or a wrong number of values. The adapter is
            left unconfigured and :meth:`value` refuses to run until a valid
            extent is set.
        """
        self._extent = self._radius = None
        extent = validate_extent(extent)

        self._buffer = np.empty(extent[0] * extent[1] * extent[2], dtype=np.float64)
        self._extent = extent
        self._radius = tuple((e - 1) // 2 for e in extent)

        logger.debug(
            'median3D adapter for image "%s" initialised with extent %s',
            self.name,
            list(extent),
        )

    # Queries --------------------------------------------------------------
    def window(self) -> tuple[tuple[int, int, int], tuple[int, int, int]]:
        """Bounds of the neighbourhood at the current position.

        Returns
        -------
        lo, hi : tuple of int
            Inclusive lower and exclusive upper index along axes 0-2,
            clipped to ``[0, size(axis))``.
        """
        radius = self._require_radius()
        lo = tuple(max(0, self[a] - radius[a]) for a in range(3))
        hi = tuple(min(self.size(a), self[a] + radius[a] + 1) for a in range(3))
        return lo, hi

    def value(self) -> float:
        """Median of the parent's values over the current window.

        For an even number of samples the mean of the two middle values is
        returned. The parent's position is the same before and after the call.
        """
        lo, hi = self.window()
        n = (hi[0] - lo[0]) * (hi[1] - lo[1]) * (hi[2] - lo[2])
        m = n // 2 + 1

        # keep the m smallest values seen; cm is the largest of them
        buf = self._buffer
        parent = self._parent
        nc = 0
        cm = -np.inf
        with preserved_position(parent):
            for k in range(lo[2], hi[2]):
                parent[2] = k
                for j in range(lo[1], hi[1]):
                    parent[1] = j
                    for i in range(lo[0], hi[0]):
                        parent[0] = i
                        val = parent.value()
                        if nc < m:
                            buf[nc] = val
                            if buf[nc] > cm:
                                cm = buf[nc]
                            nc += 1
                        elif val < cm:
                            buf[int(np.argmax(buf[:m] == cm))] = val
                            cm = buf[:m].max()

        if n % 2 == 0:
            cm = t = -np.inf
            for v in buf[:m]:
                if v > cm:
                    t, cm = cm, v
                elif v > t:
                    t = v
            cm = (cm + t) / 2.0

        return float(cm)

    def _require_radius(self) -> tuple[int, int, int]:
        if self._radius is None:
            raise RuntimeError(
                f'median3D adapter for image "{self.name}" has no valid extent configured'
            )
        return self._radius

    def __repr__(self) -> str:
        return f"Median3D({self._parent!r}, extent={self._extent})"

"""Voxel accessor contract and a NumPy-backed implementation."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class VoxelAccessor(Protocol):
    """Positioned read access to a scalar volume.

    An accessor owns a current position (one integer index per axis). Values
    are read at that position; moving the position is done per axis through
    item assignment, ``vox[axis] = index``.
    """

    name: str

    @property
    def ndim(self) -> int: ...

    def size(self, axis: int) -> int: ...

    def __getitem__(self, axis: int) -> int: ...

    def __setitem__(self, axis: int, index: int) -> None: ...

    def value(self) -> float: ...


class ArrayVoxel:
    """Accessor over a NumPy array.

    Parameters
    ----------
    data : np.ndarray
        Volume to access. Not copied; ``set_value`` writes into it.
    name : str, default="array"
        Name used in diagnostics.
    """

    def __init__(self, data: np.ndarray, name: str = "array"):
        data = np.asarray(data)
        if data.ndim == 0:
            raise ValueError(f"voxel accessor \"{name}\" needs at least one axis")
        self.data = data
        self.name = name
        self._pos = [0] * data.ndim

    @property
    def ndim(self) -> int:
        return self.data.ndim

    @property
    def shape(self) -> tuple[int, ...]:
        return self.data.shape

    def size(self, axis: int) -> int:
        return self.data.shape[axis]

    def __getitem__(self, axis: int) -> int:
        return self._pos[axis]

    def __setitem__(self, axis: int, index: int) -> None:
        index = int(index)
        if not 0 <= index < self.data.shape[axis]:
            raise IndexError(
                f"position {index} out of range for axis {axis} of \"{self.name}\" "
                f"(size {self.data.shape[axis]})"
            )
        self._pos[axis] = index

    @property
    def position(self) -> tuple[int, ...]:
        return tuple(self._pos)

    @position.setter
    def position(self, pos) -> None:
        if len(pos) != self.ndim:
            raise ValueError(
                f"expected {self.ndim} coordinates for \"{self.name}\", got {len(pos)}"
            )
        for axis, index in enumerate(pos):
            self[axis] = index

    def reset(self) -> None:
        self._pos = [0] * self.ndim

    def value(self) -> float:
        return self.data[tuple(self._pos)]

    def set_value(self, value: float) -> None:
        self.data[tuple(self._pos)] = value

    def __repr__(self) -> str:
        return f"ArrayVoxel(name={self.name!r}, shape={self.shape}, position={self.position})"


@contextmanager
def preserved_position(vox: VoxelAccessor, axes: int = 3) -> Iterator[tuple[int, ...]]:
    """Restore the position of the first ``axes`` axes of ``vox`` on exit.

    Yields the recorded position. Restoration also happens when the body
    raises.
    """
    saved = tuple(vox[axis] for axis in range(axes))
    try:
        yield saved
    finally:
        for axis, index in enumerate(saved):
            vox[axis] = index

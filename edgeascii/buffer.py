"""
Owned 8-bit single-channel pixel buffers.

A PixelBuffer wraps a numpy uint8 array of shape (height, stride). Only the
first `width` columns of each row are pixels; the remaining columns are row
padding so that each row starts on an `alignment`-byte boundary, like the
pitched images the loader produces.

Buffers are immutable once built. Stages never write into their input; they
allocate a fresh output buffer instead.
"""

from __future__ import annotations

import numpy as np

from .errors import BufferReleasedError


def aligned_stride(width: int, alignment: int = 1) -> int:
    """Round `width` up to the next multiple of `alignment`."""
    if alignment < 1:
        raise ValueError(f"alignment must be >= 1, got {alignment}")
    return ((width + alignment - 1) // alignment) * alignment


class PixelBuffer:
    """width x height grid of uint8 intensities with a row stride."""

    __slots__ = ("_data", "_width", "_height")

    def __init__(self, data: np.ndarray, width: int):
        if data.ndim != 2 or data.dtype != np.uint8:
            raise ValueError("PixelBuffer storage must be a 2D uint8 array")
        if not 0 <= width <= data.shape[1]:
            raise ValueError(f"width {width} exceeds stride {data.shape[1]}")
        data = data.copy()
        data.flags.writeable = False
        self._data: np.ndarray | None = data
        self._width = width
        self._height = data.shape[0]

    @classmethod
    def from_array(cls, array, alignment: int = 1) -> "PixelBuffer":
        """
        Copy a 2D array of intensities into a new buffer.

        Args:
            array: Anything numpy can turn into a 2D integer array with values in [0, 255].
            alignment: Row stride is rounded up to a multiple of this many bytes.

        Returns:
            A read-only PixelBuffer owning its own storage.
        """
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError(f"expected a 2D array, got shape {arr.shape}")
        if arr.size and not np.issubdtype(arr.dtype, np.integer):
            raise ValueError(f"pixel values must be integers, got dtype {arr.dtype}")
        if arr.size and (arr.min() < 0 or arr.max() > 255):
            raise ValueError("pixel values must be in [0, 255]")

        height, width = arr.shape
        stride = aligned_stride(width, alignment)
        data = np.zeros((height, stride), dtype=np.uint8)
        data[:, :width] = arr
        return cls(data, width)

    def _storage(self) -> np.ndarray:
        if self._data is None:
            raise BufferReleasedError("pixel buffer has been released")
        return self._data

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def stride(self) -> int:
        return self._storage().shape[1]

    @property
    def size(self) -> tuple[int, int]:
        """(width, height)"""
        return self._width, self._height

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width), numpy order."""
        return self._height, self._width

    @property
    def nbytes(self) -> int:
        return self.stride * self._height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (height, width) view of the visible pixels."""
        return self._storage()[:, : self._width]

    def pixel(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} buffer")
        return int(self._storage()[y, x])

    def to_host(self) -> np.ndarray:
        """Materialize the visible pixels as a contiguous, writable array."""
        return np.ascontiguousarray(self.pixels).copy()

    def release(self) -> None:
        self._data = None

    @property
    def released(self) -> bool:
        return self._data is None

    def __repr__(self) -> str:
        state = "released" if self._data is None else f"stride={self._data.shape[1]}"
        return f"PixelBuffer({self._width}x{self._height}, {state})"

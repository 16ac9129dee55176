"""Synthetic grey images for the test suite."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from edgeascii.buffer import PixelBuffer


def solid(width: int, height: int, level: int) -> np.ndarray:
    return np.full((height, width), level, dtype=np.uint8)


def vertical_step(width: int, height: int, left: int, right: int) -> np.ndarray:
    """Left half `left`, right half `right`."""
    arr = np.full((height, width), left, dtype=np.uint8)
    arr[:, width // 2:] = right
    return arr


def horizontal_step(width: int, height: int, top: int, bottom: int) -> np.ndarray:
    arr = np.full((height, width), top, dtype=np.uint8)
    arr[height // 2:, :] = bottom
    return arr


def continuous_ramp(width: int, height: int) -> np.ndarray:
    """Horizontal 0-255 gradient."""
    ramp = np.linspace(0, 255, width, dtype=np.float32)
    return np.tile(ramp, (height, 1)).astype(np.uint8)


def checkerboard(width: int, height: int, cell: int = 4) -> np.ndarray:
    yy, xx = np.mgrid[0:height, 0:width]
    return np.where(((xx // cell) + (yy // cell)) % 2 == 0, 255, 0).astype(np.uint8)


def save_gray(arr: np.ndarray, path: Path) -> Path:
    Image.fromarray(arr.astype(np.uint8)).save(path)
    return path


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def noise_buffer(rng):
    return PixelBuffer.from_array(rng.integers(0, 256, size=(23, 31), dtype=np.uint8))


@pytest.fixture
def pgm_factory(tmp_path):
    def make(arr: np.ndarray, name: str = "image.pgm") -> Path:
        return save_gray(arr, tmp_path / name)
    return make

"""
Bicubic resampling of 8-bit buffers.

resample_bicubic() hands the work to Pillow. resample_cubic_reference() is a
separable Catmull-Rom implementation on numpy that the reference backend
uses; both produce exactly the requested size and clamp reads at the edges.
"""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from .buffer import PixelBuffer
from .errors import StageSizeError

logger = logging.getLogger(__name__)

STAGE = "resample"


def check_target(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise StageSizeError(STAGE, f"target size {width}x{height} must be positive")


# =============================================================================
# Pillow bicubic
# =============================================================================

def resample_bicubic(src: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize a (H, W) uint8 array to (height, width) with Pillow's bicubic filter."""
    check_target(width, height)
    src_h, src_w = src.shape
    if src_w == 0 or src_h == 0:
        raise StageSizeError(STAGE, f"source {src_w}x{src_h} is empty")

    img = Image.fromarray(np.ascontiguousarray(src, dtype=np.uint8))
    resized = img.resize((width, height), Image.Resampling.BICUBIC)
    return np.array(resized, dtype=np.uint8)


# =============================================================================
# Separable cubic (Catmull-Rom, Keys a = -0.5)
# =============================================================================

def cubic_kernel(x: np.ndarray, a: float = -0.5) -> np.ndarray:
    """Keys cubic convolution kernel, support [-2, 2]."""
    x = np.abs(x)
    x2 = x * x
    x3 = x2 * x
    near = (a + 2) * x3 - (a + 3) * x2 + 1
    far = a * x3 - 5 * a * x2 + 8 * a * x - 4 * a
    return np.where(x <= 1.0, near, np.where(x < 2.0, far, 0.0))


def _resample_axis(src: np.ndarray, dst_len: int, axis: int) -> np.ndarray:
    src_len = src.shape[axis]
    if src_len == dst_len:
        return src.copy()

    # Align pixel centers: dst pixel d covers source position (d + 0.5) * scale - 0.5
    scale = src_len / dst_len
    positions = (np.arange(dst_len) + 0.5) * scale - 0.5
    base = np.floor(positions).astype(np.int64)
    frac = positions - base

    out_shape = list(src.shape)
    out_shape[axis] = dst_len
    out = np.zeros(out_shape, dtype=np.float64)
    for tap in (-1, 0, 1, 2):
        # Clamp-to-edge
        idx = np.clip(base + tap, 0, src_len - 1)
        weights = cubic_kernel(tap - frac)
        samples = np.take(src, idx, axis=axis)
        if axis == 0:
            out += samples * weights[:, None]
        else:
            out += samples * weights[None, :]
    return out


def resample_cubic_reference(src: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize a (H, W) uint8 array to (height, width): rows first, then columns."""
    check_target(width, height)
    src_h, src_w = src.shape
    if src_w == 0 or src_h == 0:
        raise StageSizeError(STAGE, f"source {src_w}x{src_h} is empty")

    work = src.astype(np.float64)
    work = _resample_axis(work, width, axis=1)
    work = _resample_axis(work, height, axis=0)
    return np.clip(np.round(work), 0, 255).astype(np.uint8)


def resample(buffer: PixelBuffer, width: int, height: int, alignment: int = 1) -> PixelBuffer:
    """Resample a buffer to exactly width x height."""
    result = resample_bicubic(buffer.pixels, width, height)
    logger.debug("resample: %dx%d -> %dx%d", buffer.width, buffer.height, width, height)
    return PixelBuffer.from_array(result, alignment=alignment)

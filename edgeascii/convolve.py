"""
Valid-region 3x3 correlation.

For a W x H source and a K x K kernel the output is (W-K+1) x (H-K+1):

    out[y, x] = trunc(sum_{j,i} weights[j][i] * src[y + j, x + i] / divisor)

clamped to [0, 255]. No padding is applied. Output pixel (x, y) corresponds
to source pixel (x + anchor_x, y + anchor_y), so the anchor shifts where the
result lines up with the source but never changes its values.
"""

from __future__ import annotations

import logging

import numpy as np

from .buffer import PixelBuffer
from .errors import StageSizeError
from .kernels import Kernel

logger = logging.getLogger(__name__)

STAGE = "convolution"


def output_size(width: int, height: int, kernel: Kernel) -> tuple[int, int]:
    """(width, height) of the correlation result, or StageSizeError."""
    k = kernel.size
    if width < k or height < k:
        raise StageSizeError(
            STAGE, f"source {width}x{height} is smaller than the {k}x{k} kernel"
        )
    return width - k + 1, height - k + 1


def _truncating_divide(acc: np.ndarray, divisor: int) -> np.ndarray:
    if divisor == 0:
        raise ValueError("kernel divisor must be non-zero")
    if divisor == 1:
        return acc
    sign = np.sign(acc) * (1 if divisor > 0 else -1)
    return sign * (np.abs(acc) // abs(divisor))


def correlate_valid(src: np.ndarray, kernel: Kernel) -> np.ndarray:
    """Vectorized correlation: one shifted-slice multiply-add per weight."""
    height, width = src.shape
    out_w, out_h = output_size(width, height, kernel)

    weights = kernel.as_array()
    src32 = src.astype(np.int32)
    acc = np.zeros((out_h, out_w), dtype=np.int32)
    for j in range(kernel.size):
        for i in range(kernel.size):
            w = int(weights[j, i])
            if w:
                acc += w * src32[j:j + out_h, i:i + out_w]

    return np.clip(_truncating_divide(acc, kernel.divisor), 0, 255).astype(np.uint8)


def correlate_reference(src: np.ndarray, kernel: Kernel) -> np.ndarray:
    """Per-pixel correlation over Python ints. Slow, but easy to audit."""
    height, width = src.shape
    out_w, out_h = output_size(width, height, kernel)

    rows = src.tolist()
    out = np.zeros((out_h, out_w), dtype=np.uint8)
    for y in range(out_h):
        for x in range(out_w):
            total = 0
            for j, kernel_row in enumerate(kernel.weights):
                src_row = rows[y + j]
                for i, w in enumerate(kernel_row):
                    total += w * src_row[x + i]
            # int() truncates toward zero
            value = int(total / kernel.divisor) if kernel.divisor != 1 else total
            out[y, x] = max(0, min(255, value))
    return out


def correlate(buffer: PixelBuffer, kernel: Kernel, alignment: int = 1) -> PixelBuffer:
    """Correlate a buffer with a kernel, returning a new, smaller buffer."""
    result = correlate_valid(buffer.pixels, kernel)
    logger.debug("%s: %dx%d -> %dx%d", kernel.name, buffer.width, buffer.height,
                 result.shape[1], result.shape[0])
    return PixelBuffer.from_array(result, alignment=alignment)

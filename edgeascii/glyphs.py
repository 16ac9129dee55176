"""
Grey intensity to character mapping.

A ramp is an ordered string: ramp[0] stands for black, ramp[-1] for white.
Each 8-bit value v maps to index (v * L - 1) / 255 with truncating division,
clamped to [0, L - 1]. That sends 0 to the first glyph and 255 to the last
one for every ramp length L >= 1.
"""

from __future__ import annotations

import numpy as np

from .buffer import PixelBuffer

DEFAULT_RAMP = "  -.,-=+:;cba?0123456789$WN#@"


def validate_ramp(ramp: str) -> str:
    if not isinstance(ramp, str) or not ramp:
        raise ValueError("ASCII ramp must be a non-empty string")
    return ramp


def glyph_index(value: int, ramp_length: int) -> int:
    if ramp_length < 1:
        raise ValueError(f"ramp length must be >= 1, got {ramp_length}")
    if not 0 <= value <= 255:
        raise ValueError(f"intensity {value} outside [0, 255]")
    numerator = value * ramp_length - 1
    # Truncate toward zero; only value == 0 gives a negative numerator
    index = -(-numerator // 255) if numerator < 0 else numerator // 255
    return max(0, min(ramp_length - 1, index))


def glyph_indices(values: np.ndarray, ramp_length: int) -> np.ndarray:
    """Vectorized glyph_index over an array of uint8 intensities."""
    if ramp_length < 1:
        raise ValueError(f"ramp length must be >= 1, got {ramp_length}")
    numerator = values.astype(np.int64) * ramp_length - 1
    # numerator >= -1, so floor and truncation agree after clamping
    return np.clip(numerator // 255, 0, ramp_length - 1)


def render_text(buffer: PixelBuffer, ramp: str = DEFAULT_RAMP, newline: str = "\n") -> str:
    """One line per image row, one glyph per pixel, each line terminated."""
    ramp = validate_ramp(ramp)
    host = buffer.to_host()
    lut = np.array(list(ramp), dtype='<U1')
    chars = lut[glyph_indices(host, len(ramp))]
    return "".join("".join(row) + newline for row in chars)

"""Loading and saving 8-bit single-channel images with Pillow."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import numpy as np
from PIL import Image, UnidentifiedImageError

from .buffer import PixelBuffer
from .errors import SourceUnavailable

logger = logging.getLogger(__name__)


class ImageSource(Protocol):
    def load(self, path) -> PixelBuffer:
        ...


class PillowImageSource:
    """
    Decode any raster format Pillow understands (PGM, PNG, ...) to grey.

    Colour images are converted to mode 'L'. Rows are padded to `alignment`
    bytes.
    """

    def __init__(self, alignment: int = 4):
        self.alignment = alignment

    def load(self, path) -> PixelBuffer:
        path = Path(path)
        if not path.is_file():
            raise SourceUnavailable(path)

        try:
            with Image.open(path) as img:
                if img.mode != 'L':
                    img = img.convert('L')
                arr = np.array(img, dtype=np.uint8)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise SourceUnavailable(path, f"could not be read: {exc}") from exc

        buffer = PixelBuffer.from_array(arr, alignment=self.alignment)
        logger.debug("Loaded %s: %dx%d, stride %d", path, buffer.width, buffer.height, buffer.stride)
        return buffer


def save_buffer(buffer: PixelBuffer, path) -> Path:
    """Write a buffer as a grayscale image; the format follows the extension."""
    path = Path(path)
    Image.fromarray(buffer.to_host()).save(path)
    return path

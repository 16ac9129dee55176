"""
Render pipeline: load -> filter -> (resize) -> render.

render() is a pure function of its request: it keeps no state between
calls, and every intermediate buffer it allocates is released before it
returns or raises.
"""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import TextIO

from .backend import ComputeBackend, get_backend
from .buffer import PixelBuffer
from .config import DEFAULT_COLUMNS, RenderConfig
from .glyphs import DEFAULT_RAMP, render_text, validate_ramp
from .kernels import NO_FILTER, get_kernel
from .source import ImageSource, PillowImageSource

logger = logging.getLogger(__name__)


class Stage(Enum):
    LOADED = "loaded"
    FILTERED = "filtered"
    RESIZED = "resized"
    UNRESIZED = "unresized"
    RENDERED = "rendered"


@dataclass(frozen=True)
class RenderRequest:
    source: PixelBuffer
    columns: int = DEFAULT_COLUMNS
    filter_id: int = NO_FILTER
    ramp: str = DEFAULT_RAMP


def resolve_columns(columns: int, source_width: int) -> int:
    """Negative -> abs(columns), zero -> source width, otherwise unchanged."""
    if columns < 0:
        return abs(columns)
    if columns == 0:
        return source_width
    return columns


def plan_resize(
    columns: int,
    source_size: tuple[int, int],
    filtered_size: tuple[int, int],
) -> tuple[int, int] | None:
    """
    Work out the resample target for a render.

    Args:
        columns: Requested output columns, as given by the caller.
        source_size: (width, height) of the original, unfiltered image.
        filtered_size: (width, height) after convolution.

    Returns:
        None when no resampling is needed, otherwise the (width, height) to
        resample the filtered image to. Downscales are computed from the
        original size so the source aspect ratio is kept. A factor >= 1
        resamples to the filtered size itself, i.e. requests wider than
        the source are not enlarged.
    """
    src_w, src_h = source_size
    if src_w <= 0:
        raise ValueError(f"source width must be positive, got {src_w}")

    effective = resolve_columns(columns, src_w)
    if effective == src_w:
        return None

    factor = Fraction(effective, src_w)
    if factor < 1:
        return math.ceil(src_w * factor), math.ceil(src_h * factor)
    return filtered_size


def render(request: RenderRequest, backend: ComputeBackend | None = None) -> str:
    """Filter, optionally resample and render one buffer to ASCII text."""
    ramp = validate_ramp(request.ramp)
    if backend is None:
        backend = get_backend()

    source = request.source
    kernel = get_kernel(request.filter_id)
    logger.debug("%s: %dx%d source, kernel %s", Stage.LOADED.value, source.width, source.height, kernel.name)

    intermediates: list[PixelBuffer] = []
    try:
        filtered = backend.correlate(source, kernel)
        intermediates.append(filtered)
        logger.debug("%s: %dx%d", Stage.FILTERED.value, filtered.width, filtered.height)

        target = plan_resize(request.columns, source.size, filtered.size)
        if target is None:
            final = filtered
            logger.debug("%s", Stage.UNRESIZED.value)
        else:
            final = backend.resample(filtered, *target)
            intermediates.append(final)
            logger.debug("%s: %dx%d", Stage.RESIZED.value, final.width, final.height)

        text = render_text(final, ramp)
        logger.debug("%s: %d lines", Stage.RENDERED.value, final.height)
        return text
    finally:
        for buffer in intermediates:
            buffer.release()


def render_file(
    path,
    config: RenderConfig | None = None,
    backend: ComputeBackend | None = None,
    source: ImageSource | None = None,
) -> str:
    """
    Load an image and render it.

    The image is loaded before any backend is created, so a missing file
    fails with SourceUnavailable without touching compute resources.
    """
    if config is None:
        config = RenderConfig()
    if source is None:
        source = PillowImageSource(alignment=config.alignment)

    src_buffer = source.load(path)
    try:
        if backend is None:
            backend = get_backend(config.backend)
        request = RenderRequest(
            source=src_buffer,
            columns=config.columns,
            filter_id=config.filter_id,
            ramp=config.ramp,
        )
        return render(request, backend)
    finally:
        src_buffer.release()


def write_output(text: str, stream: TextIO | None = None) -> None:
    """Write the whole rendering at once, then flush."""
    if stream is None:
        stream = sys.stdout
    stream.write(text)
    stream.flush()

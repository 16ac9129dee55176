"""
Compute backends for the convolution and resample stages.

The pipeline only talks to the ComputeBackend interface. Each backend
validates sizes itself (StageSizeError) and turns any other failure of its
primitive into BackendExecutionError, naming the stage.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

import numpy as np
import PIL

from . import convolve, resample
from .buffer import PixelBuffer
from .errors import BackendExecutionError, ComputeContextError, StageSizeError
from .kernels import Kernel

logger = logging.getLogger(__name__)


class ComputeBackend(ABC):
    """Runs 2D correlation and 2D resampling over pixel buffers."""

    name: str = ""

    def __init__(self, alignment: int = 1):
        self.alignment = alignment

    @abstractmethod
    def _correlate(self, src: np.ndarray, kernel: Kernel) -> np.ndarray:
        ...

    @abstractmethod
    def _resample(self, src: np.ndarray, width: int, height: int) -> np.ndarray:
        ...

    def describe(self) -> str:
        return f"{self.name} backend (numpy {np.__version__})"

    def _run(self, stage: str, func: Callable[[], np.ndarray]) -> PixelBuffer:
        try:
            result = func()
        except StageSizeError:
            raise
        except (ValueError, TypeError, MemoryError, OSError) as exc:
            raise BackendExecutionError(stage, str(exc)) from exc
        return PixelBuffer.from_array(result, alignment=self.alignment)

    def correlate(self, buffer: PixelBuffer, kernel: Kernel) -> PixelBuffer:
        logger.debug("%s: correlate %dx%d with %s", self.name, buffer.width, buffer.height, kernel.name)
        return self._run(convolve.STAGE, lambda: self._correlate(buffer.pixels, kernel))

    def resample(self, buffer: PixelBuffer, width: int, height: int) -> PixelBuffer:
        logger.debug("%s: resample %dx%d -> %dx%d", self.name, buffer.width, buffer.height, width, height)
        resample.check_target(width, height)
        return self._run(resample.STAGE, lambda: self._resample(buffer.pixels, width, height))


class NumpyBackend(ComputeBackend):
    """Vectorized correlation, Pillow bicubic resampling."""

    name = "numpy"

    def _correlate(self, src, kernel):
        return convolve.correlate_valid(src, kernel)

    def _resample(self, src, width, height):
        return resample.resample_bicubic(src, width, height)

    def describe(self) -> str:
        return f"{super().describe()}, Pillow {PIL.__version__}"


class ReferenceBackend(ComputeBackend):
    """Per-pixel correlation, numpy Catmull-Rom resampling."""

    name = "reference"

    def _correlate(self, src, kernel):
        return convolve.correlate_reference(src, kernel)

    def _resample(self, src, width, height):
        return resample.resample_cubic_reference(src, width, height)


BACKENDS: dict[str, type[ComputeBackend]] = {
    NumpyBackend.name: NumpyBackend,
    ReferenceBackend.name: ReferenceBackend,
}

DEFAULT_BACKEND = NumpyBackend.name


def available_backends() -> list[str]:
    return sorted(BACKENDS)


def get_backend(name: str = DEFAULT_BACKEND, alignment: int = 1) -> ComputeBackend:
    """Create a fresh backend instance by name."""
    try:
        backend_cls = BACKENDS[name]
    except KeyError:
        raise ComputeContextError(
            f"Unknown compute backend {name!r} (available: {', '.join(available_backends())})"
        ) from None
    backend = backend_cls(alignment=alignment)
    logger.debug("Using %s", backend.describe())
    return backend

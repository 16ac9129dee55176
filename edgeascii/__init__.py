"""Edge-detected ASCII art from 8-bit grey images."""

from .backend import ComputeBackend, NumpyBackend, ReferenceBackend, available_backends, get_backend
from .buffer import PixelBuffer
from .config import RenderConfig
from .convolve import correlate
from .errors import (
    BackendExecutionError,
    BufferReleasedError,
    ComputeContextError,
    EdgeAsciiError,
    SourceUnavailable,
    StageSizeError,
)
from .glyphs import DEFAULT_RAMP, glyph_index, render_text
from .kernels import KERNELS, Kernel, KernelId, get_kernel, kernel_by_name
from .pipeline import RenderRequest, plan_resize, render, render_file, resolve_columns, write_output
from .resample import resample
from .source import PillowImageSource, save_buffer

__version__ = "0.1.0"

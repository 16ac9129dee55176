"""Exceptions raised by the render pipeline.

Every error is terminal for the current render request. Callers catch
EdgeAsciiError to report a failure and decide whether to retry with
different parameters.
"""

from __future__ import annotations


class EdgeAsciiError(Exception):
    """Base class for all pipeline failures."""


class SourceUnavailable(EdgeAsciiError):
    """The source image is missing, unreadable or cannot be decoded."""

    def __init__(self, path, reason: str = "does not exist or is not accessible"):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Image {self.path} {reason}")


class ComputeContextError(EdgeAsciiError):
    """The compute backend could not be initialized."""


class StageSizeError(EdgeAsciiError):
    """A stage received dimensions it cannot process."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"{stage} stage: {message}")


class BackendExecutionError(EdgeAsciiError):
    """The convolution or resample primitive itself failed."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"{stage} stage failed: {message}")


class BufferReleasedError(EdgeAsciiError, RuntimeError):
    """A pixel buffer was used after release()."""

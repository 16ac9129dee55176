"""Render configuration with the command-line defaults."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace

from .backend import DEFAULT_BACKEND
from .glyphs import DEFAULT_RAMP
from .kernels import NO_FILTER

DEFAULT_COLUMNS = 80


@dataclass(frozen=True)
class RenderConfig:
    """
    columns: 0 keeps the source width, negative values use abs(columns).
    filter_id: 0-9 selects a kernel; anything else means Prewitt X.
    ramp: glyphs from black to white.
    backend: name passed to get_backend().
    alignment: row alignment for loaded images, in bytes.
    """
    columns: int = DEFAULT_COLUMNS
    filter_id: int = NO_FILTER
    ramp: str = DEFAULT_RAMP
    backend: str = DEFAULT_BACKEND
    alignment: int = 4

    def __post_init__(self):
        if not isinstance(self.ramp, str) or not self.ramp:
            raise ValueError("ASCII ramp must be a non-empty string")
        if self.alignment < 1:
            raise ValueError(f"alignment must be >= 1, got {self.alignment}")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RenderConfig":
        """Build a config from parsed CLI arguments; absent values keep the defaults."""
        kwargs = {}
        if getattr(args, "width", None) is not None:
            kwargs["columns"] = args.width
        if getattr(args, "filter", None) is not None:
            kwargs["filter_id"] = args.filter
        if getattr(args, "ascii_pattern", None):
            kwargs["ramp"] = args.ascii_pattern
        if getattr(args, "backend", None):
            kwargs["backend"] = args.backend
        return cls(**kwargs)

    def with_overrides(self, **changes) -> "RenderConfig":
        return replace(self, **changes)

"""
Catalog of the 3x3 edge-detection kernels.

Each kernel is plain data (weights, anchor, divisor). Selectors outside
0..9, including NO_FILTER, fall back to Prewitt X.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class KernelId(IntEnum):
    SOBEL_X = 0
    SOBEL_Y = 1
    SCHARR_X = 2
    SCHARR_Y = 3
    SCHARR_X_IMPROVED = 4
    SCHARR_Y_IMPROVED = 5
    KAYALI_X = 6
    KAYALI_Y = 7
    PREWITT_X = 8
    PREWITT_Y = 9


NO_FILTER = -1
DEFAULT_KERNEL_ID = KernelId.PREWITT_X


@dataclass(frozen=True)
class Kernel:
    """Square integer kernel with anchor (x, y) and divisor."""
    name: str
    weights: tuple[tuple[int, ...], ...]
    anchor: tuple[int, int] = (1, 1)
    divisor: int = 1

    @property
    def size(self) -> int:
        return len(self.weights)

    def as_array(self) -> np.ndarray:
        return np.array(self.weights, dtype=np.int32)


def _kernel3(name: str, flat: list[int]) -> Kernel:
    """Build a 3x3 kernel from row-major weights."""
    return Kernel(name, (tuple(flat[0:3]), tuple(flat[3:6]), tuple(flat[6:9])))


KERNELS: dict[KernelId, Kernel] = {
    KernelId.SOBEL_X: _kernel3("Sobel X", [-1, 0, 1, -2, 0, 2, -1, 0, 1]),
    KernelId.SOBEL_Y: _kernel3("Sobel Y", [-1, -2, -1, 0, 0, 0, 1, 2, 1]),
    KernelId.SCHARR_X: _kernel3("Scharr X", [3, 0, -3, 10, 0, -10, 3, 0, -3]),
    KernelId.SCHARR_Y: _kernel3("Scharr Y", [3, 10, 3, 0, 0, 0, -3, -10, -3]),
    KernelId.SCHARR_X_IMPROVED: _kernel3("Scharr X improved", [47, 0, -47, 162, 0, -162, 47, 0, -47]),
    KernelId.SCHARR_Y_IMPROVED: _kernel3("Scharr Y improved", [47, 162, 47, 0, 0, 0, -47, -162, -47]),
    KernelId.KAYALI_X: _kernel3("Kayali X", [6, 0, -6, 0, 0, 0, -6, 0, 6]),
    KernelId.KAYALI_Y: _kernel3("Kayali Y", [-6, 0, 6, 0, 0, 0, 6, 0, -6]),
    KernelId.PREWITT_X: _kernel3("Prewitt X", [1, 1, 1, 0, 0, 0, -1, -1, -1]),
    KernelId.PREWITT_Y: _kernel3("Prewitt Y", [1, 0, -1, 1, 0, -1, 1, 0, -1]),
}


def resolve_kernel_id(selector: int) -> KernelId:
    """Map a filter selector to a catalog id, defaulting to Prewitt X."""
    if min(KernelId) <= selector <= max(KernelId):
        return KernelId(int(selector))
    return DEFAULT_KERNEL_ID


def get_kernel(selector: int) -> Kernel:
    return KERNELS[resolve_kernel_id(selector)]


def _normalize_name(name: str) -> str:
    return name.strip().lower().replace("_", " ").replace("-", " ")


def kernel_by_name(name: str) -> Kernel:
    """Look up a kernel by display name or enum name ("sobel-x", "SOBEL_X")."""
    wanted = _normalize_name(name)
    for kernel_id, kernel in KERNELS.items():
        if wanted in (_normalize_name(kernel.name), _normalize_name(kernel_id.name)):
            return kernel
    raise KeyError(f"unknown kernel: {name!r}")


def describe_kernels() -> list[str]:
    return [f"{int(kernel_id)}: {kernel.name}" for kernel_id, kernel in KERNELS.items()]

"""
Array backend selection (NumPy on CPU, CuPy on GPU).

The kernels are written against an ``xp`` namespace so the same code runs on
either backend. Results always come back to the host as NumPy arrays.
"""

from __future__ import annotations
from typing import Literal

import numpy as np

# --- Optional GPU stack (CuPy) ---
HAVE_CUPY = False
try:
    import cupy as cp
    HAVE_CUPY = True
except Exception:  # CuPy is optional
    cp = None  # type: ignore

__all__ = ["HAVE_CUPY", "choose_backend", "to_host", "round_half_up"]

Device = Literal["auto", "cpu", "gpu"]


def _gpu_available() -> bool:
    if not HAVE_CUPY:
        return False
    try:
        return cp.cuda.runtime.getDeviceCount() > 0  # type: ignore[attr-defined]
    except Exception:
        return False


def choose_backend(device: Device = "cpu"):
    """Return (xp, use_gpu: bool) where xp is np or cp."""
    if device not in ("auto", "cpu", "gpu"):
        raise ValueError("device must be one of {'auto','cpu','gpu'}")
    if device == "gpu":
        if not _gpu_available():
            raise RuntimeError("GPU requested but CuPy/CUDA device is not available.")
        print("[GPU] Using CuPy backend for CLAHE")
        return cp, True  # type: ignore[return-value]
    if device == "auto" and _gpu_available():
        print("[GPU-auto] CuPy available → using GPU backend for CLAHE")
        return cp, True  # type: ignore[return-value]
    return np, False


def to_host(a, use_gpu: bool) -> np.ndarray:
    """Bring a backend array back to host memory."""
    return cp.asnumpy(a) if use_gpu else a  # type: ignore[union-attr]


def round_half_up(x, xp=np):
    """
    Round non-negative values to the nearest integer, ties upward.

    Keeps the dtype of ``x``. ``floor(x + 0.5)`` is not used because the
    addition itself rounds: in float32 the largest value below 0.5 becomes 1.
    """
    r = xp.floor(x)
    return r + (x - r >= 0.5).astype(x.dtype)

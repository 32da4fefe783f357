# -*- coding: utf-8 -*-
"""
readers.py - grayscale image readers returning (Y, X) uint8 arrays.

- TIFF through tifffile (first series, single page).
- PNG/JPEG/BMP/... through imageio.
- Headerless raw buffers (row-major, one byte per pixel) with known size.
"""
from __future__ import annotations
import os
import warnings

import numpy as np
import tifffile as tiff

from .formats import _is_tiff, _to_yx, from_buffer

__all__ = ["read_gray_u8", "read_raw_u8", "_scale_to_u8"]


def read_raw_u8(path: str, width: int, height: int) -> np.ndarray:
    """Read a headerless 8-bit buffer as (height, width)."""
    with open(path, "rb") as fh:
        data = fh.read()
    return from_buffer(data, width, height).copy()


def read_gray_u8(
    path: str,
    *,
    normalize: str = "auto",          # "auto" | "percentile" | "none"
    p_low: float = 1.0,
    p_high: float = 99.9,
    verbose: bool = False,
) -> np.ndarray:
    """
    Read a single-channel image as a (Y, X) uint8 array.

    Parameters
    ----------
    normalize : {'auto','percentile','none'}
        'auto'       -> uint8 passes through; other dtypes are percentile-scaled.
        'percentile' -> always percentile-scale [p_low, p_high] to [0, 255].
        'none'       -> uint8 only; other dtypes raise ValueError.
    p_low, p_high : float
        Percentiles used for scaling.
    verbose : bool
        Print which reader was used.
    """
    path = os.path.abspath(path)
    if _is_tiff(path):
        if verbose:
            print("[I/O] tifffile:", path)
        a = tiff.imread(path)
    else:
        import imageio.v2 as iio
        if verbose:
            print("[I/O] imageio:", path)
        a = iio.imread(path)
    a = _to_yx(np.asarray(a))
    return _scale_to_u8(a, normalize, p_low, p_high)


def _scale_to_u8(
    a: np.ndarray,
    normalize: str,
    p_low: float,
    p_high: float,
) -> np.ndarray:
    """Apply the normalization policy and return uint8."""
    if normalize not in ("auto", "percentile", "none"):
        warnings.warn(f"Unknown normalize={normalize!r}, using 'auto'.", RuntimeWarning)
        normalize = "auto"

    if normalize == "none":
        if a.dtype != np.uint8:
            raise ValueError(f"normalize='none' requires uint8 data, got {a.dtype}.")
        return a
    if normalize == "auto" and a.dtype == np.uint8:
        return a

    arr = a.astype(np.float32, copy=False)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        return np.zeros(a.shape, dtype=np.uint8)
    lo, hi = np.percentile(finite, [p_low, p_high])
    if hi <= lo:
        hi = lo + 1.0
    x = np.clip((np.nan_to_num(arr, nan=lo) - lo) / (hi - lo), 0.0, 1.0)
    return (x * 255.0 + 0.5).astype(np.uint8)

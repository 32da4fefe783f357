# -*- coding: utf-8 -*-
"""
formats.py - shared helpers for grayscale I/O: orientation, buffer layout,
suffix dispatch. No file I/O here, only utilities used by readers and writers.
"""
from __future__ import annotations
import os
from typing import Tuple

import numpy as np

from ..errors import InvalidBufferLength

__all__ = [
    "TIFF_SUFFIXES",
    "RAW_SUFFIXES",
    "_is_tiff",
    "_is_raw",
    "_to_yx",
    "as_buffer",
    "from_buffer",
]

TIFF_SUFFIXES = (".tif", ".tiff")
RAW_SUFFIXES = (".raw", ".gray", ".bin")


def _suffix(path: str) -> str:
    return os.path.splitext(str(path))[1].lower()


def _is_tiff(path: str) -> bool:
    return _suffix(path) in TIFF_SUFFIXES


def _is_raw(path: str) -> bool:
    return _suffix(path) in RAW_SUFFIXES


def _to_yx(arr: np.ndarray) -> np.ndarray:
    """
    Normalize array to (Y, X).

    Handles:
      - (Y, X)       -> as-is
      - (1, Y, X)    -> (Y, X)   single-page stack
      - (Y, X, 1)    -> (Y, X)   explicit single channel
    Anything else (color, multi-frame) raises ValueError.
    """
    a = np.asarray(arr)
    if a.ndim == 2:
        return a
    if a.ndim == 3 and a.shape[0] == 1:
        return a[0]
    if a.ndim == 3 and a.shape[-1] == 1:
        return a[..., 0]
    raise ValueError(
        f"Expected a single-channel 2D image, got shape {a.shape} "
        "(color and multi-frame inputs are not supported)."
    )


def as_buffer(img: np.ndarray) -> Tuple[np.ndarray, int, int]:
    """2D uint8 image -> (flat row-major buffer, width, height)."""
    a = _to_yx(img)
    if a.dtype != np.uint8:
        raise ValueError(f"Expected uint8 image, got dtype {a.dtype}.")
    H, W = a.shape
    return np.ascontiguousarray(a).reshape(-1), int(W), int(H)


def from_buffer(buf, width: int, height: int) -> np.ndarray:
    """Flat row-major uint8 buffer -> (height, width) view."""
    if isinstance(buf, (bytes, bytearray, memoryview)):
        a = np.frombuffer(buf, dtype=np.uint8)
    else:
        a = np.asarray(buf, dtype=np.uint8).reshape(-1)
    if a.size != int(width) * int(height):
        raise InvalidBufferLength(int(width) * int(height), a.size)
    return a.reshape(int(height), int(width))

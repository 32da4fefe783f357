# -*- coding: utf-8 -*-
"""
writers.py - grayscale image writers for (Y, X) uint8 arrays.
"""
from __future__ import annotations
import os

import numpy as np
import tifffile as tiff

from .formats import _is_raw, _is_tiff, _to_yx

__all__ = ["write_gray_u8", "write_raw_u8"]


def _ensure_parent(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)


def write_raw_u8(path: str, buffer) -> None:
    """Write a flat uint8 buffer (or 2D uint8 image) as raw bytes."""
    a = np.asarray(buffer)
    if a.dtype != np.uint8:
        raise ValueError(f"Expected uint8 data, got dtype {a.dtype}.")
    _ensure_parent(path)
    with open(path, "wb") as fh:
        fh.write(np.ascontiguousarray(a).tobytes())


def write_gray_u8(path: str, img: np.ndarray, *, compress: bool = True) -> None:
    """
    Write a 2D uint8 image. Format follows the suffix:
    .tif/.tiff -> tifffile, .raw/.gray/.bin -> raw bytes, otherwise imageio.
    """
    a = _to_yx(np.asarray(img))
    if a.dtype != np.uint8:
        raise ValueError(f"Expected uint8 image, got dtype {a.dtype}.")
    if _is_raw(path):
        write_raw_u8(path, a)
        return
    _ensure_parent(path)
    if _is_tiff(path):
        tiff.imwrite(
            path,
            a,
            compression=("deflate" if compress else None),
            photometric="minisblack",
        )
        return
    import imageio.v2 as iio
    iio.imwrite(path, a)

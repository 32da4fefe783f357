"""
Pixel-centre bilinear downscale for single-channel 8-bit buffers.

Used by the two-pass downscale path (full-resolution CLAHE, then resample).
Slower and heavier than the fused sampler but anti-aliases better.
"""

from __future__ import annotations

import numpy as np

from .backend import round_half_up
from .validation import as_u8_buffer, check_buffer, check_dim

__all__ = ["downscale_bilinear"]


def _axis(n_out: int, n_src: int):
    scale = n_src / n_out
    src = (np.arange(n_out, dtype=np.float64) + 0.5) * scale - 0.5
    i0 = np.clip(np.floor(src), 0, n_src - 1).astype(np.int64)
    i1 = np.minimum(i0 + 1, n_src - 1)
    w = src - i0
    return i0, i1, w


def downscale_bilinear(buffer, width: int, height: int, target_width: int, target_height: int) -> np.ndarray:
    """
    Resample a row-major uint8 buffer to (target_width, target_height).

    Returns
    -------
    np.ndarray
        Flat uint8 array of length ``target_width * target_height``.
    """
    width = check_dim("width", width)
    height = check_dim("height", height)
    target_width = check_dim("target_width", target_width)
    target_height = check_dim("target_height", target_height)
    buf = as_u8_buffer(buffer)
    check_buffer(buf, width, height)

    img = buf.reshape(height, width).astype(np.float64)
    y0, y1, fy = _axis(target_height, height)
    x0, x1, fx = _axis(target_width, width)
    fy = fy[:, None]
    fx = fx[None, :]

    out = (
        img[y0[:, None], x0[None, :]] * (1 - fx) * (1 - fy)
        + img[y0[:, None], x1[None, :]] * fx * (1 - fy)
        + img[y1[:, None], x0[None, :]] * (1 - fx) * fy
        + img[y1[:, None], x1[None, :]] * fx * fy
    )
    out = np.clip(round_half_up(out), 0, 255).astype(np.uint8)
    return out.reshape(-1)

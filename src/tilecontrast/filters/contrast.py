"""
Local contrast enhancement on 2D arrays.
"""
from __future__ import annotations
from typing import Literal, Optional, Tuple, Union

import numpy as np

from tilecontrast.clahe import equalize, equalize_and_downscale

__all__ = ["to_u8", "clahe_u8"]


def to_u8(img: np.ndarray) -> np.ndarray:
    """uint8 passes through; anything else is read as float [0,1] and scaled."""
    im = np.asarray(img)
    if im.dtype == np.uint8:
        return im
    im = np.clip(im.astype(np.float32), 0, 1)
    return (im * 255).astype(np.uint8)


def clahe_u8(
    img: np.ndarray,
    clip_limit: float = 3.0,
    tiles: Union[int, Tuple[int, int]] = (8, 8),
    target_shape: Optional[Tuple[int, int]] = None,
    *,
    method: Literal["fused", "two_pass"] = "fused",
    device: Literal["auto", "cpu", "gpu"] = "cpu",
) -> np.ndarray:
    """
    CLAHE on a single 2D image (expects float [0,1] or uint8).

    Parameters
    ----------
    img : np.ndarray
        Image of shape (Y, X).
    clip_limit : float
        Fractional clip limit; <= 0 disables clipping.
    tiles : int or (tiles_x, tiles_y)
        Tile grid. An int gives a square grid.
    target_shape : (Y', X') or None
        If given, downscale to this shape in the same pass.
    method, device
        Passed to :func:`tilecontrast.clahe.equalize_and_downscale`.

    Returns
    -------
    np.ndarray
        uint8 array of shape (Y, X), or ``target_shape`` when it is strictly
        smaller along at least one axis.
    """
    im = to_u8(img)
    if im.ndim != 2:
        raise ValueError(f"Expected 2D array, got shape {im.shape}.")
    if isinstance(tiles, (int, np.integer)):
        gx = gy = int(tiles)
    else:
        gx, gy = (int(t) for t in tiles)

    H, W = im.shape
    buf = np.ascontiguousarray(im).reshape(-1)
    if target_shape is None:
        out = equalize(buf, W, H, gx, gy, clip_limit, device=device)
        return out.reshape(H, W)

    th, tw = (int(s) for s in target_shape)
    out = equalize_and_downscale(buf, W, H, tw, th, gx, gy, clip_limit, method=method, device=device)
    if tw >= W and th >= H:
        return out.reshape(H, W)
    return out.reshape(th, tw)

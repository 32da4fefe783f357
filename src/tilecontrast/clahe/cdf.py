"""
Cumulative-distribution normalization: tile histogram -> 256-entry mapping.

For a tile with ``N`` pixels and clipped histogram ``h``::

    cdf[i]   = h[0] + ... + h[i]
    cdf_min  = cdf at the first non-zero bin (0 if none)
    denom    = N - cdf_min
    map[i]   = round(clamp((cdf[i] - cdf_min) / denom * 255, 0, 255))

Arithmetic is single precision with round-half-up. Tiles with ``denom <= 0``
and flat tiles (one occupied bin before clipping) get the identity table, so
a uniform region leaves the image unchanged. With clipping active this
differs on purpose from the unmodified algorithm, which maps a clipped flat
tile to a bright value.
"""

from __future__ import annotations

import numpy as np

from .backend import round_half_up
from .tiles import NBINS

__all__ = ["flat_tiles", "build_mappings"]


def flat_tiles(hist, xp=np):
    """Boolean mask (n_tiles,) of tiles whose pixels all share one intensity."""
    return xp.count_nonzero(hist, axis=1) == 1


def build_mappings(hist, pixel_counts, flat=None, xp=np):
    """
    Build the per-tile intensity remapping tables.

    Parameters
    ----------
    hist : array (n_tiles, 256), int
        Clipped histograms.
    pixel_counts : array (n_tiles,), int
        True pixel count of each tile (edge tiles included).
    flat : array (n_tiles,), bool or None
        Tiles forced to the identity table (see :func:`flat_tiles`).

    Returns
    -------
    array (n_tiles, 256), uint8
        Monotonic non-decreasing tables, one row per tile.
    """
    f32 = xp.float32
    cdf = xp.cumsum(xp.asarray(hist, dtype=xp.int64), axis=1)
    n_tiles = cdf.shape[0]

    first_nz = xp.argmax(cdf > 0, axis=1)  # row of zeros -> index 0 -> cdf 0
    cdf_min = cdf[xp.arange(n_tiles), first_nz]

    counts = xp.asarray(pixel_counts, dtype=xp.int64)
    denom = counts.astype(f32) - cdf_min.astype(f32)
    degenerate = denom <= 0
    if flat is not None:
        degenerate = degenerate | xp.asarray(flat, dtype=bool)

    safe = xp.where(degenerate, f32(1.0), denom)
    scaled = (cdf.astype(f32) - cdf_min.astype(f32)[:, None]) / safe[:, None] * f32(255.0)
    mapped = xp.clip(round_half_up(scaled, xp), 0, 255).astype(xp.uint8)

    identity = xp.broadcast_to(xp.arange(NBINS, dtype=xp.uint8), mapped.shape)
    return xp.where(degenerate[:, None], identity, mapped).astype(xp.uint8)

# --- file: tilecontrast/summary/stats.py ---
"""
QC numbers for a before/after pair of 8-bit images.

- summary_stats     : global intensity statistics and a contrast-gain ratio.
- tile_contrast_map : per-tile standard deviation over the CLAHE tile layout,
                      useful to see where the clip limit held contrast back.
"""

from __future__ import annotations
from typing import Dict, Tuple, Union

import numpy as np

from tilecontrast.clahe.validation import make_grid

__all__ = ["summary_stats", "tile_contrast_map"]


def _describe(a: np.ndarray) -> Dict[str, float]:
    x = np.asarray(a, dtype=np.float64)
    return {
        "mean": float(x.mean()),
        "std": float(x.std()),
        "min": float(x.min()),
        "max": float(x.max()),
    }


def summary_stats(before: np.ndarray, after: np.ndarray) -> Dict[str, float]:
    """
    Intensity statistics of the input and output images.

    Returns
    -------
    dict
        ``before_mean``, ``before_std``, ``before_min``, ``before_max``, the same
        four for ``after_*``, and ``contrast_gain = after_std / before_std``
        (NaN when the input is flat).
    """
    b = _describe(before)
    a = _describe(after)
    stats = {f"before_{k}": v for k, v in b.items()}
    stats.update({f"after_{k}": v for k, v in a.items()})
    stats["contrast_gain"] = a["std"] / b["std"] if b["std"] > 0 else float("nan")
    return stats


def tile_contrast_map(img: np.ndarray, tiles: Union[int, Tuple[int, int]] = (8, 8)) -> np.ndarray:
    """
    Per-tile intensity standard deviation.

    Parameters
    ----------
    img : np.ndarray
        2D image (Y, X).
    tiles : int or (tiles_x, tiles_y)
        Tile grid, same geometry as the equalizer (edge tiles absorb remainders).

    Returns
    -------
    np.ndarray
        Float32 array of shape (tiles_y, tiles_x).
    """
    a = np.asarray(img)
    if a.ndim != 2:
        raise ValueError(f"tile_contrast_map expects 2D input, got shape {a.shape}.")
    gx, gy = (tiles, tiles) if isinstance(tiles, (int, np.integer)) else tiles
    grid = make_grid(a.shape[1], a.shape[0], gx, gy)

    out = np.empty((grid.tiles_y, grid.tiles_x), dtype=np.float32)
    for idx, (y0, y1, x0, x1) in grid.iter_tiles():
        ty, tx = divmod(idx, grid.tiles_x)
        out[ty, tx] = float(a[y0:y1, x0:x1].astype(np.float64).std())
    return out

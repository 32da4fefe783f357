"""
Clip-limited histogram redistribution.

Each bin above the cap is cut down to it; the total excess is spread evenly
over all 256 bins, and the leftover ``excess % 256`` units go one each to the
lowest-indexed bins. The dark-side bias of that remainder is kept on purpose:
downstream consumers depend on the exact pixel values it produces.
"""

from __future__ import annotations
import math
from typing import Optional

import numpy as np

from .tiles import NBINS

__all__ = ["compute_clip_limit", "clip_histograms"]


def compute_clip_limit(clip_limit: float, nominal_pixels: int) -> Optional[int]:
    """
    Per-bin cap derived from the fractional clip limit.

    ``max(1, floor(clip_limit * nominal_pixels / 256))`` evaluated in single
    precision. Returns ``None`` (no clipping) when ``clip_limit <= 0`` or the
    cap is not finite.
    """
    clip_limit = float(clip_limit)
    if not clip_limit > 0:
        return None
    cap = np.float32(clip_limit) * np.float32(nominal_pixels) / np.float32(NBINS)
    if not math.isfinite(float(cap)):
        return None
    return int(max(np.float32(1.0), cap))


def clip_histograms(hist, actual_clip: Optional[int], xp=np):
    """
    Clip every tile histogram at ``actual_clip`` and redistribute the excess.

    Parameters
    ----------
    hist : array (n_tiles, 256), int
        Raw tile histograms. Not modified.
    actual_clip : int or None
        Per-bin cap from :func:`compute_clip_limit`; ``None`` disables clipping.

    Returns
    -------
    array (n_tiles, 256), int64
        Clipped histograms; each row keeps the sum of the input row.
    """
    out = xp.array(hist, dtype=xp.int64, copy=True)
    if actual_clip is None:
        return out

    excess = xp.maximum(out - actual_clip, 0).sum(axis=1)
    out = xp.minimum(out, actual_clip)

    per_bin = excess // NBINS
    remainder = excess % NBINS
    bins = xp.arange(NBINS, dtype=xp.int64)
    out += per_bin[:, None]
    out += (bins[None, :] < remainder[:, None]).astype(xp.int64)
    return out

"""
tilecontrast.summary
====================

Quality-control numbers and lightweight visualizations for inspection.

Modules
-------
stats : Global before/after statistics and per-tile contrast maps.
viz   : Before/after preview figures.

Guidelines
----------
- Summary products are for QC only; they never feed back into the kernels.
"""

# Re-exports for short imports like:
#   from tilecontrast.summary import summary_stats, save_before_after
from .stats import summary_stats, tile_contrast_map
from .viz import grid_before_after, save_before_after

import importlib as _importlib
stats = _importlib.import_module(".stats", __name__)
viz = _importlib.import_module(".viz", __name__)

__all__ = [
    # functions
    "summary_stats",
    "tile_contrast_map",
    "grid_before_after",
    "save_before_after",
    # modules
    "stats",
    "viz",
]

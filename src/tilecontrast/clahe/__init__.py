"""
tilecontrast.clahe
==================

Contrast-Limited Adaptive Histogram Equalization (CLAHE) on flat 8-bit
grayscale buffers.

Modules
-------
tiles      : Tile grid geometry and per-tile 256-bin histograms.
clip       : Clip limit derivation and excess redistribution.
cdf        : Histogram -> monotonic 256-entry mapping tables.
interp     : Bilinear cross-tile blending; fused nearest-source downscale.
resample   : Plain bilinear downscale (two-pass path).
core       : equalize / equalize_and_downscale entry points.
backend    : NumPy / CuPy selection.
validation : Entry checks (buffer length, dimensions).

Pixel format
------------
Row-major, one byte per pixel, intensity in [0, 255]; the same contract as
blur, threshold, morphology and edge stages, so buffers compose directly.

Typical defaults
----------------
- tile grid 8×8, clip_limit 3.0 (2.0 for document-style thresholding prep).
- clip_limit <= 0 turns the engine into plain tiled histogram equalization.
"""

# Short imports for public API
from .core import equalize, equalize_and_downscale, tile_mappings
from .tiles import NBINS, TileGrid, build_tile_histograms
from .clip import compute_clip_limit, clip_histograms
from .cdf import build_mappings, flat_tiles
from .interp import interpolate_tiles, sample_downscaled
from .resample import downscale_bilinear

import importlib as _importlib
tiles = _importlib.import_module(".tiles", __name__)
clip = _importlib.import_module(".clip", __name__)
cdf = _importlib.import_module(".cdf", __name__)
interp = _importlib.import_module(".interp", __name__)
resample = _importlib.import_module(".resample", __name__)
core = _importlib.import_module(".core", __name__)

__all__ = [
    # functions
    "equalize",
    "equalize_and_downscale",
    "tile_mappings",
    "build_tile_histograms",
    "compute_clip_limit",
    "clip_histograms",
    "build_mappings",
    "flat_tiles",
    "interpolate_tiles",
    "sample_downscaled",
    "downscale_bilinear",
    # types / constants
    "TileGrid",
    "NBINS",
    # modules
    "tiles",
    "clip",
    "cdf",
    "interp",
    "resample",
    "core",
]

"""
tilecontrast.filters
====================

Array-level wrappers around the buffer kernels.

Modules
-------
contrast : CLAHE on 2D numpy images (float [0,1] or uint8) with optional
           downscale in the same pass.

Design
------
- The kernels in ``tilecontrast.clahe`` work on flat row-major buffers; the
  wrappers here only handle dtype conversion and (Y, X) reshaping.
- Apply contrast enhancement at the very end of a preprocessing chain, on the
  2D image handed to thresholding / detection.
"""

from .contrast import clahe_u8, to_u8

import importlib as _importlib
contrast = _importlib.import_module(".contrast", __name__)

__all__ = [
    # functions
    "clahe_u8",
    "to_u8",
    # modules
    "contrast",
]

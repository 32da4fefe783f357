"""
tilecontrast.cli
================

Command-line entrypoints.

Re-exports
----------
from tilecontrast.cli import run_clahe, clahe_main, clahe_cli
"""

from .clahe_cli import run_clahe as run_clahe, main as clahe_main

import importlib as _importlib
clahe_cli = _importlib.import_module(".clahe_cli", __name__)

__all__ = [
    # functions
    "run_clahe", "clahe_main",
    # modules
    "clahe_cli",
]

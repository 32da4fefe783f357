# -*- coding: utf-8 -*-
"""Public I/O API for tilecontrast.io."""
from .readers import read_gray_u8, read_raw_u8
from .writers import write_gray_u8, write_raw_u8
from .formats import as_buffer, from_buffer

__all__ = [
    "read_gray_u8",
    "read_raw_u8",
    "write_gray_u8",
    "write_raw_u8",
    "as_buffer",
    "from_buffer",
]

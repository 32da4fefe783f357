"""
Entry checks shared by the public kernels.

Everything here runs before any pixel work so a malformed call fails without
producing partial output.
"""

from __future__ import annotations
import operator

import numpy as np

from ..errors import InvalidBufferLength, InvalidDimensions
from .tiles import TileGrid

__all__ = ["as_u8_buffer", "check_dim", "check_buffer", "make_grid"]


def as_u8_buffer(image) -> np.ndarray:
    """Return ``image`` as a flat uint8 array (no copy when already uint8)."""
    if isinstance(image, (bytes, bytearray, memoryview)):
        return np.frombuffer(image, dtype=np.uint8)
    a = np.asarray(image)
    if a.dtype != np.uint8:
        if a.dtype == bool or not np.issubdtype(a.dtype, np.integer):
            raise TypeError(f"Expected an 8-bit intensity buffer, got dtype {a.dtype}.")
        if a.size and (int(a.min()) < 0 or int(a.max()) > 255):
            raise TypeError("Buffer values must lie in [0, 255].")
        a = a.astype(np.uint8)
    return a.reshape(-1)


def check_dim(name: str, value) -> int:
    """Validate a strictly positive integer dimension."""
    try:
        v = operator.index(value)
    except TypeError:
        raise InvalidDimensions(f"{name} must be an integer, got {value!r}.") from None
    if v <= 0:
        raise InvalidDimensions(f"{name} must be > 0, got {v}.")
    return v


def check_buffer(buf: np.ndarray, width: int, height: int) -> None:
    expected = width * height
    if buf.size != expected:
        raise InvalidBufferLength(expected, buf.size)


def make_grid(width, height, tile_grid_x, tile_grid_y) -> TileGrid:
    """Validate image/grid dimensions and return the tile layout."""
    width = check_dim("width", width)
    height = check_dim("height", height)
    tile_grid_x = check_dim("tile_grid_x", tile_grid_x)
    tile_grid_y = check_dim("tile_grid_y", tile_grid_y)
    if tile_grid_x > width or tile_grid_y > height:
        raise InvalidDimensions(
            f"Tile grid {tile_grid_x}x{tile_grid_y} does not fit a {width}x{height} image."
        )
    return TileGrid(width=width, height=height, tiles_x=tile_grid_x, tiles_y=tile_grid_y)

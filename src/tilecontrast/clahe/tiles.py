"""
Tile grid geometry and per-tile intensity histograms.

The image is split into ``tiles_x × tiles_y`` rectangles. Base tile size is
``width // tiles_x`` by ``height // tiles_y``; the last column and the last
row of tiles absorb the remainder, so every pixel belongs to exactly one tile.
Tiles are indexed row-major: ``idx = ty * tiles_x + tx``.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

__all__ = ["NBINS", "TileGrid", "build_tile_histograms"]

NBINS = 256


@dataclass(frozen=True)
class TileGrid:
    """Logical tile grid laid over a (height, width) image.

    Attributes
    ----------
    width, height : int
        Image size in pixels.
    tiles_x, tiles_y : int
        Number of tile columns and rows (both >= 1, and no larger than the
        matching image dimension).
    """
    width: int
    height: int
    tiles_x: int
    tiles_y: int

    @property
    def tile_w(self) -> int:
        return self.width // self.tiles_x

    @property
    def tile_h(self) -> int:
        return self.height // self.tiles_y

    @property
    def n_tiles(self) -> int:
        return self.tiles_x * self.tiles_y

    @property
    def nominal_pixels(self) -> int:
        """Pixel count of a base (non-edge) tile."""
        return self.tile_w * self.tile_h

    def bounds(self, tx: int, ty: int) -> Tuple[int, int, int, int]:
        """Return (y0, y1, x0, x1) of tile (tx, ty); edge tiles reach the border."""
        y0 = ty * self.tile_h
        x0 = tx * self.tile_w
        y1 = self.height if ty == self.tiles_y - 1 else y0 + self.tile_h
        x1 = self.width if tx == self.tiles_x - 1 else x0 + self.tile_w
        return y0, y1, x0, x1

    def iter_tiles(self) -> Iterator[Tuple[int, Tuple[int, int, int, int]]]:
        """Yield (tile_index, bounds) in row-major tile order."""
        for ty in range(self.tiles_y):
            for tx in range(self.tiles_x):
                yield ty * self.tiles_x + tx, self.bounds(tx, ty)

    def pixel_counts(self) -> np.ndarray:
        """Actual pixel count of every tile, shape (n_tiles,), int64."""
        counts = np.empty(self.n_tiles, dtype=np.int64)
        for idx, (y0, y1, x0, x1) in self.iter_tiles():
            counts[idx] = (y1 - y0) * (x1 - x0)
        return counts


def build_tile_histograms(img: np.ndarray, grid: TileGrid, xp=np) -> np.ndarray:
    """
    Count intensities per tile.

    Parameters
    ----------
    img : array (Y, X), uint8
        Source image on the ``xp`` backend.
    grid : TileGrid
        Tile layout; must match ``img.shape``.
    xp : module
        ``numpy`` or ``cupy``.

    Returns
    -------
    array (n_tiles, 256), int64
        Row ``i`` is the histogram of tile ``i``; it sums to the tile's pixel
        count.
    """
    if img.shape != (grid.height, grid.width):
        raise ValueError(f"Image shape {img.shape} != grid (H,W)=({grid.height},{grid.width}).")
    hist = xp.zeros((grid.n_tiles, NBINS), dtype=xp.int64)
    for idx, (y0, y1, x0, x1) in grid.iter_tiles():
        block = img[y0:y1, x0:x1].ravel()
        hist[idx] = xp.bincount(block, minlength=NBINS)[:NBINS]
    return hist

"""
CLAHE entry points over flat, row-major uint8 buffers.

Typical usage
-------------
>>> from tilecontrast.clahe import equalize, equalize_and_downscale
>>> out = equalize(buf, width, height, 8, 8, 3.0)
>>> small = equalize_and_downscale(buf, width, height, width // 4, height // 4, 8, 8, 3.0)

Stages
------
histograms (tiles) -> clip & redistribute (clip) -> mapping tables (cdf)
-> bilinear blend at source size (interp.interpolate_tiles) or at target size
(interp.sample_downscaled).

All tables are finished before any output pixel is computed. Calls are pure:
no state survives between them, and the input buffer is never written.
"""

from __future__ import annotations
from typing import Literal

import numpy as np

from .backend import Device, choose_backend, to_host
from .cdf import build_mappings, flat_tiles
from .clip import clip_histograms, compute_clip_limit
from .interp import interpolate_tiles, sample_downscaled
from .resample import downscale_bilinear
from .tiles import TileGrid, build_tile_histograms
from .validation import as_u8_buffer, check_buffer, check_dim, make_grid

__all__ = ["equalize", "equalize_and_downscale", "tile_mappings"]


def tile_mappings(img, grid: TileGrid, clip_limit: float, xp=np):
    """Per-tile 256-entry remapping tables, shape (n_tiles, 256), uint8."""
    hist = build_tile_histograms(img, grid, xp=xp)
    actual_clip = compute_clip_limit(clip_limit, grid.nominal_pixels)
    clipped = clip_histograms(hist, actual_clip, xp=xp)
    counts = xp.asarray(grid.pixel_counts())
    return build_mappings(clipped, counts, flat=flat_tiles(hist, xp=xp), xp=xp)


def equalize(
    image,
    width: int,
    height: int,
    tile_grid_x: int = 8,
    tile_grid_y: int = 8,
    clip_limit: float = 3.0,
    *,
    device: Device = "cpu",
) -> np.ndarray:
    """
    Contrast-limited adaptive histogram equalization at source resolution.

    Parameters
    ----------
    image : bytes-like or array-like
        Row-major 8-bit intensities, length ``width * height``.
    width, height : int
        Image size in pixels.
    tile_grid_x, tile_grid_y : int
        Tile columns/rows; each must not exceed the matching image dimension.
    clip_limit : float
        Fractional clip limit; ``<= 0`` disables clipping (plain tiled HE).
    device : {'cpu','gpu','auto'}
        Array backend.

    Returns
    -------
    np.ndarray
        New flat uint8 array of length ``width * height``.

    Raises
    ------
    InvalidDimensions
        Non-positive size or grid, or grid larger than the image.
    InvalidBufferLength
        ``len(image) != width * height``.
    """
    grid = make_grid(width, height, tile_grid_x, tile_grid_y)
    buf = as_u8_buffer(image)
    check_buffer(buf, grid.width, grid.height)

    xp, use_gpu = choose_backend(device)
    img = xp.asarray(buf).reshape(grid.height, grid.width)
    mappings = tile_mappings(img, grid, clip_limit, xp=xp)
    out = interpolate_tiles(img, mappings, grid, xp=xp)
    return np.ascontiguousarray(to_host(out, use_gpu)).reshape(-1)


def equalize_and_downscale(
    image,
    width: int,
    height: int,
    target_width: int,
    target_height: int,
    tile_grid_x: int = 8,
    tile_grid_y: int = 8,
    clip_limit: float = 3.0,
    *,
    method: Literal["fused", "two_pass"] = "fused",
    device: Device = "cpu",
) -> np.ndarray:
    """
    CLAHE combined with a reduction to (target_width, target_height).

    If neither target dimension is smaller than the source, this is exactly
    :func:`equalize` at native size (the targets are ignored).

    Parameters
    ----------
    image, width, height, tile_grid_x, tile_grid_y, clip_limit, device
        As in :func:`equalize`. Tables are always built at source resolution
        with the given grid.
    target_width, target_height : int
        Output size (> 0).
    method : {'fused','two_pass'}
        'fused'    -> nearest-source sampling straight from the tile tables
                      (no full-resolution intermediate).
        'two_pass' -> full-resolution CLAHE followed by bilinear downscale.

    Returns
    -------
    np.ndarray
        Flat uint8 array of length ``target_width * target_height`` (or
        ``width * height`` on passthrough).
    """
    if method not in ("fused", "two_pass"):
        raise ValueError("method must be one of {'fused','two_pass'}")
    grid = make_grid(width, height, tile_grid_x, tile_grid_y)
    target_width = check_dim("target_width", target_width)
    target_height = check_dim("target_height", target_height)
    buf = as_u8_buffer(image)
    check_buffer(buf, grid.width, grid.height)

    if target_width >= grid.width and target_height >= grid.height:
        return equalize(buf, grid.width, grid.height, grid.tiles_x, grid.tiles_y, clip_limit, device=device)

    if method == "two_pass":
        full = equalize(buf, grid.width, grid.height, grid.tiles_x, grid.tiles_y, clip_limit, device=device)
        return downscale_bilinear(full, grid.width, grid.height, target_width, target_height)

    xp, use_gpu = choose_backend(device)
    img = xp.asarray(buf).reshape(grid.height, grid.width)
    mappings = tile_mappings(img, grid, clip_limit, xp=xp)
    out = sample_downscaled(img, mappings, grid, (target_width, target_height), xp=xp)
    return np.ascontiguousarray(to_host(out, use_gpu)).reshape(-1)

"""
Error types raised by the contrast kernels.

All of them derive from ``ValueError`` so existing ``except ValueError``
handlers around array code keep working.
"""

from __future__ import annotations

__all__ = ["TileContrastError", "InvalidBufferLength", "InvalidDimensions"]


class TileContrastError(ValueError):
    """Base class for malformed kernel calls."""


class InvalidBufferLength(TileContrastError):
    """Pixel buffer length does not equal ``width * height``."""

    def __init__(self, expected: int, actual: int):
        self.expected = int(expected)
        self.actual = int(actual)
        super().__init__(
            f"Buffer length {self.actual} does not match width*height={self.expected}."
        )


class InvalidDimensions(TileContrastError):
    """Zero/negative dimensions, or a tile grid that does not fit the image."""

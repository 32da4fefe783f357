"""Tests for the 2D array CLAHE wrapper."""

import numpy as np
import pytest

from tilecontrast.clahe import equalize
from tilecontrast.filters import clahe_u8, to_u8


def test_to_u8_scales_float():
    a = np.array([[0.0, 0.5, 1.0, 2.0, -1.0]], dtype=np.float32)
    np.testing.assert_array_equal(to_u8(a), [[0, 127, 255, 255, 0]])


def test_to_u8_passes_uint8_through():
    a = np.arange(10, dtype=np.uint8).reshape(2, 5)
    assert to_u8(a) is a


def test_clahe_u8_matches_buffer_kernel(noisy_image):
    H, W = noisy_image.shape
    out = clahe_u8(noisy_image, clip_limit=2.0, tiles=(4, 3))
    assert out.shape == (H, W)
    assert out.dtype == np.uint8
    expected = equalize(noisy_image.reshape(-1), W, H, 4, 3, 2.0).reshape(H, W)
    np.testing.assert_array_equal(out, expected)


def test_square_grid_from_int(noisy_image):
    np.testing.assert_array_equal(
        clahe_u8(noisy_image, tiles=4), clahe_u8(noisy_image, tiles=(4, 4))
    )


def test_float_input(noisy_image):
    out = clahe_u8(noisy_image.astype(np.float32) / 255.0, tiles=2)
    assert out.dtype == np.uint8
    assert out.shape == noisy_image.shape


def test_target_shape(noisy_image):
    out = clahe_u8(noisy_image, tiles=4, target_shape=(12, 16))
    assert out.shape == (12, 16)
    two = clahe_u8(noisy_image, tiles=4, target_shape=(12, 16), method="two_pass")
    assert two.shape == (12, 16)


def test_target_not_smaller_keeps_shape(noisy_image):
    out = clahe_u8(noisy_image, tiles=4, target_shape=noisy_image.shape)
    assert out.shape == noisy_image.shape


def test_rejects_3d():
    with pytest.raises(ValueError):
        clahe_u8(np.zeros((4, 4, 3), dtype=np.uint8))

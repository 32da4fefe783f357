"""Tests for clip limit derivation and excess redistribution."""

import numpy as np
import pytest

from tilecontrast.clahe.clip import clip_histograms, compute_clip_limit

pytestmark = pytest.mark.smoke


@pytest.mark.parametrize(
    "clip_limit, pixels, expected",
    [
        (2.0, 64, 1),        # 0.5 -> floor to at least 1
        (3.0, 1024, 12),
        (40.0, 100, 15),     # 15.625
        (0.01, 4096, 1),
    ],
)
def test_compute_clip_limit(clip_limit, pixels, expected):
    assert compute_clip_limit(clip_limit, pixels) == expected


@pytest.mark.parametrize("clip_limit", [0.0, -1.0, -0.5, float("nan")])
def test_non_positive_clip_disables(clip_limit):
    assert compute_clip_limit(clip_limit, 1024) is None


def test_no_clip_returns_copy():
    """Disabled clipping returns an unchanged copy; the input is untouched."""
    hist = np.arange(256, dtype=np.int64)[None, :].repeat(2, axis=0)
    before = hist.copy()
    out = clip_histograms(hist, None)
    np.testing.assert_array_equal(out, before)
    out[0, 0] = 999
    np.testing.assert_array_equal(hist, before)


def test_remainder_goes_to_lowest_bins():
    """Excess 290 over cap 10: +1 everywhere, +1 more for bins 0..33."""
    hist = np.zeros((1, 256), dtype=np.int64)
    hist[0, 200] = 300
    out = clip_histograms(hist, 10)[0]
    assert out[200] == 11
    assert np.all(out[:34] == 2)
    assert np.all(out[34:200] == 1)
    assert np.all(out[201:] == 1)
    assert out.sum() == 300


def test_excess_smaller_than_bins():
    """Excess below 256 only bumps the first `excess` bins."""
    hist = np.zeros((1, 256), dtype=np.int64)
    hist[0, 128] = 16
    out = clip_histograms(hist, 1)[0]
    assert np.all(out[:15] == 1)
    assert out[15] == 0
    assert out[128] == 1
    assert out.sum() == 16


def test_conservation_random(rng):
    """Clipping never creates or destroys counts."""
    hist = rng.integers(0, 50, size=(12, 256)).astype(np.int64)
    hist[:, 17] += 2000
    for cap in (1, 3, 20, 100, 10_000):
        out = clip_histograms(hist, cap)
        np.testing.assert_array_equal(out.sum(axis=1), hist.sum(axis=1))
        assert out.min() >= 0


def test_bins_never_exceed_cap_plus_share():
    hist = np.zeros((1, 256), dtype=np.int64)
    hist[0, :4] = 1000
    out = clip_histograms(hist, 5)[0]
    excess = 4 * 995
    assert out.max() <= 5 + excess // 256 + 1

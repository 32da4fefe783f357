import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def noisy_image(rng):
    """64x48 uint8 image with a gradient plus noise."""
    yy, xx = np.mgrid[0:48, 0:64]
    base = (xx * 2 + yy).astype(np.float32)
    noise = rng.normal(0, 8, size=base.shape)
    return np.clip(base + noise + 40, 0, 255).astype(np.uint8)

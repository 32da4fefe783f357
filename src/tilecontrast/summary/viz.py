# --- file: tilecontrast/summary/viz.py ---
"""
Before/after previews for QC.
Figures use a fixed 0..255 gray scale so contrast changes stay visible.
"""

from __future__ import annotations
import os

import numpy as np
import matplotlib.pyplot as plt


def grid_before_after(img_before: np.ndarray, img_after: np.ndarray, titles=("Before", "After")):
    """Show two 8-bit images side by side (grayscale)."""
    fig, axs = plt.subplots(1, 2, figsize=(10, 4))
    axs[0].imshow(img_before, cmap="gray", vmin=0, vmax=255); axs[0].set_title(titles[0]); axs[0].axis("off")
    axs[1].imshow(img_after, cmap="gray", vmin=0, vmax=255); axs[1].set_title(titles[1]); axs[1].axis("off")
    plt.tight_layout()
    return fig


def save_before_after(path: str, img_before: np.ndarray, img_after: np.ndarray, titles=("Before", "After"), dpi: int = 100) -> str:
    """Render :func:`grid_before_after` to ``path`` and close the figure."""
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)
    fig = grid_before_after(img_before, img_after, titles=titles)
    try:
        fig.savefig(path, dpi=dpi)
    finally:
        plt.close(fig)
    return path

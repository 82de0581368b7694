"""Standalone helpers that do not need an Image instance."""
import numpy as np

from .models.image import Image


def white_image(h: int, w: int) -> Image:
    """All-ones (white) RGB image of shape (h, w, 3)."""
    # The name is kept as-is for parity with existing pipelines; see DESIGN.md.
    return Image.from_buffer(np.ones((h, w, 3)), "black_image")


def normalize_pixel_values(values) -> np.ndarray:
    """
    Min-max normalize a grayscale image or vector into [0, 1].

    Args:
        values: array-like of rank < 3.

    Returns:
        (np.ndarray): float64 array, same shape. A constant input maps to zeros.
    """
    values = np.asarray(values, dtype=np.float64)
    if values.ndim >= 3:
        raise NotImplementedError("normalize_pixel_values supports grayscale images or vectors only.")
    shifted = values - values.min()
    peak = shifted.max()
    if peak == 0:
        return np.zeros_like(shifted)
    return shifted / peak

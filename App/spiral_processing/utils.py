"""Utility functions for tone mapping, geometry and path statistics.

AIDEV-NOTE: Helpers here accept both Python floats and numpy arrays so the
sampler and synthesizer can share them between scalar and batch code paths.
"""

import numpy as np

from models import LUMA_WEIGHTS


def clamp(value, low, high):
    """Clamp a value (or array) into [low, high]."""
    return np.minimum(np.maximum(value, low), high)


def lerp(a, b, t):
    """Linear interpolation that returns a exactly at t=0 and b exactly at t=1."""
    return a * (1.0 - t) + b * t


def fit_rect(
    src_width: int, src_height: int, size: int
) -> "tuple[int, int, int, int]":
    """Fit a rectangle into a size x size square, keeping its aspect ratio.

    Args:
        src_width: Source width in pixels
        src_height: Source height in pixels
        size: Side of the target square in pixels

    Returns:
        Tuple of (width, height, offset_x, offset_y) of the centered rectangle

    AIDEV-NOTE: Scale-to-fit, never crop. Upscaling is allowed so small
    images still fill the canvas.
    """
    scale = min(size / src_width, size / src_height)
    width = max(1, int(round(src_width * scale)))
    height = max(1, int(round(src_height * scale)))
    offset_x = (size - width) // 2
    offset_y = (size - height) // 2
    return width, height, offset_x, offset_y


def rgb_luminance(rgb: np.ndarray) -> np.ndarray:
    """Normalized Rec. 709 luminance (0-1) of an (..., 3) uint8 array."""
    r_weight, g_weight, b_weight = LUMA_WEIGHTS
    rgb = rgb.astype(np.float64)
    luma = r_weight * rgb[..., 0] + g_weight * rgb[..., 1] + b_weight * rgb[..., 2]
    return luma / 255.0


def calculate_total_length(xs: np.ndarray, ys: np.ndarray) -> float:
    """Calculate the length of a polyline in pixels."""
    if len(xs) < 2:
        return 0.0
    return float(np.hypot(np.diff(xs), np.diff(ys)).sum())

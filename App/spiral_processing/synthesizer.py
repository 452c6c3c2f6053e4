"""Archimedean spiral walk producing a brightness-modulated stroke.

AIDEV-NOTE: The spiral is r = b * theta with b = line_spacing / (2 pi), so
neighbouring arms are line_spacing px apart. It is sampled every ANGLE_STEP
radians from the center outward until either the requested number of turns
or the canvas margin is reached, whichever comes first.
"""

import math

import numpy as np
from loguru import logger

from models import ANGLE_STEP, EDGE_MARGIN_FACTOR, SpiralParameters, SpiralPath

from .sampler import ImageSampler
from .utils import lerp


def spiral_growth(line_spacing: float) -> float:
    """Radial growth per radian for the given arm spacing."""
    return line_spacing / (2 * math.pi)


def max_radius(params: SpiralParameters) -> float:
    """Radius at which the spiral must stop to keep the widest stroke on canvas."""
    return params.resolution / 2 - params.max_width * EDGE_MARGIN_FACTOR


def clip_radius(params: SpiralParameters) -> float:
    """Radius of the circular crop (independent of the stopping radius)."""
    return params.resolution / 2 - params.max_width


def max_theta(params: SpiralParameters) -> float:
    """Angle where the walk stops.

    The requested turn count is an upper bound; the canvas margin wins when
    it would be exceeded first.
    """
    b = spiral_growth(params.line_spacing)
    radius = max_radius(params)
    turn_limit = 2 * math.pi * params.turns

    if b == 0:
        # Spiral never grows, only the turn count can stop it
        radius_limit = math.inf if radius > 0 else 0.0
    else:
        radius_limit = radius / b

    return min(radius_limit, turn_limit)


def spiral_angles(params: SpiralParameters) -> np.ndarray:
    """Sample angles 0, step, 2*step, ... strictly below max_theta.

    Always contains at least the starting angle 0.
    """
    limit = max_theta(params)
    if not limit > 0:
        return np.zeros(1)

    count = int(math.ceil(limit / ANGLE_STEP))
    thetas = np.arange(count, dtype=np.float64) * ANGLE_STEP
    # Guard against float rounding pushing the last sample onto the limit
    return thetas[thetas < limit]


def stroke_width(shade, params: SpiralParameters):
    """Stroke width for a shade (0 = white, 1 = black); works on arrays."""
    return lerp(params.min_width, params.max_width, shade)


def synthesize_path(sampler: ImageSampler, params: SpiralParameters) -> SpiralPath:
    """Walk the spiral over a prepared sampler.

    Args:
        sampler: Luminance sampler over the working canvas
        params: Spiral parameters of the render

    Returns:
        SpiralPath with one sample per angle step, widths following the shade
    """
    cx = params.resolution / 2
    cy = params.resolution / 2
    b = spiral_growth(params.line_spacing)

    thetas = spiral_angles(params)
    radii = b * thetas
    xs = cx + radii * np.cos(thetas)
    ys = cy + radii * np.sin(thetas)

    # Brighter areas get thinner strokes, darker areas thicker ones
    shade = 1.0 - sampler.sample_many(xs, ys)
    widths = stroke_width(shade, params)

    logger.debug(
        f"Spiral walk: {len(thetas)} samples, "
        f"{thetas[-1] / (2 * math.pi):.1f} turns, "
        f"outer radius {radii[-1]:.1f}px"
    )

    return SpiralPath(
        thetas=thetas,
        xs=xs,
        ys=ys,
        widths=np.asarray(widths, dtype=np.float64),
        center=(cx, cy),
    )

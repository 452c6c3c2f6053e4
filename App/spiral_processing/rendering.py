"""Rasterization of a spiral path into a black-on-white bitmap.

AIDEV-NOTE: Every segment is stroked with its own width and round caps at
both ends. Overlapping caps of neighbouring segments form the round joins,
so the whole spiral reads as one continuous stroke whose width follows the
image. Anti-aliasing is done by drawing at `supersample` times the output
size and box-reducing the result.
"""

import io

import numpy as np
from loguru import logger
from PIL import Image, ImageDraw

from models import SpiralParameters, SpiralPath

from .errors import EncodeError
from .synthesizer import clip_radius

BACKGROUND = 255  # white
INK = 0  # black


def _stroke_segments(draw: ImageDraw.ImageDraw, path: SpiralPath, scale: int):
    """Draw every path segment with round caps onto a scaled canvas."""
    for x0, y0, x1, y1, width in path.segments():
        x0 *= scale
        y0 *= scale
        x1 *= scale
        y1 *= scale
        width *= scale
        if width <= 0:
            continue
        radius = width / 2

        draw.line([(x0, y0), (x1, y1)], fill=INK, width=max(1, int(round(width))))
        draw.ellipse([x0 - radius, y0 - radius, x0 + radius, y0 + radius], fill=INK)
        draw.ellipse([x1 - radius, y1 - radius, x1 + radius, y1 + radius], fill=INK)


def _circle_mask(size: int, radius: float) -> Image.Image:
    """Mask that is opaque inside a circle centered on a size x size canvas.

    A pixel is inside when its center lies within radius of the canvas center.
    """
    mask = np.zeros((size, size), dtype=np.uint8)
    if radius > 0:
        center = size / 2
        dy = np.arange(size) + 0.5 - center
        half = np.sqrt(np.maximum(radius**2 - dy**2, 0.0))
        # Columns x whose centers satisfy |x + 0.5 - center| <= half
        first = np.ceil(center - half - 0.5)
        last = np.floor(center + half - 0.5)
        for row in np.flatnonzero(np.abs(dy) <= radius):
            start = max(0, int(first[row]))
            stop = min(size, int(last[row]) + 1)
            mask[row, start:stop] = 255
    return Image.fromarray(mask)


def rasterize_path(path: SpiralPath, params: SpiralParameters) -> Image.Image:
    """Stroke a spiral path onto a white canvas.

    Args:
        path: Spiral samples in canvas coordinates
        params: Render parameters (resolution, clip, supersampling)

    Returns:
        Grayscale ("L") PIL image of size (resolution, resolution)
    """
    scale = max(1, int(params.supersample))
    size = params.resolution * scale

    drawing = Image.new("L", (size, size), BACKGROUND)
    _stroke_segments(ImageDraw.Draw(drawing), path, scale)

    if params.crop_to_circle:
        # Anything outside the circle stays background white
        background = Image.new("L", (size, size), BACKGROUND)
        mask = _circle_mask(size, clip_radius(params) * scale)
        drawing = Image.composite(drawing, background, mask)

    if scale > 1:
        drawing = drawing.reduce(scale)

    logger.debug(
        f"Rasterized {path.segment_count} segments at {size}x{size}px "
        f"(supersample {scale})"
    )
    return drawing


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes.

    Raises:
        EncodeError: If the image could not be encoded
    """
    buffer = io.BytesIO()
    try:
        image.save(buffer, format="PNG")
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to encode image: {e}") from e

    data = buffer.getvalue()
    if not data:
        raise EncodeError("Failed to encode image: encoder produced no data")
    return data

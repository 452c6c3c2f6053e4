"""Decoding of user supplied images into SourceImage objects."""

import io
from pathlib import Path

from loguru import logger
from PIL import Image, UnidentifiedImageError

from models import SourceImage

from .errors import DecodeError


def load_image(source: "bytes | str | Path") -> SourceImage:
    """Load and validate an image from raw bytes or a file path.

    Args:
        source: Encoded image bytes (PNG, JPG, WebP, ...) or a path to a file

    Returns:
        SourceImage wrapping a fully decoded RGBA image

    Raises:
        DecodeError: If the data is empty, missing or not a readable image
    """
    if isinstance(source, (bytes, bytearray)):
        if not source:
            raise DecodeError("Failed to load image: no data")
        stream = io.BytesIO(source)
        label = f"{len(source)} bytes"
    else:
        stream = Path(source)
        label = str(stream)

    try:
        with Image.open(stream) as image:
            # AIDEV-NOTE: load() forces full decoding so truncated files fail
            # here instead of halfway through a render
            image.load()
            rgba = image.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError(f"Failed to load image: {e}") from e

    logger.debug(f"Decoded {label} into {rgba.size[0]}x{rgba.size[1]} image")
    return SourceImage.from_pil(rgba)

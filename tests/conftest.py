"""Shared test fixtures for the spiral portrait tests."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from models import SourceImage, SpiralParameters


def make_source(color, size=(64, 64), mode="RGB") -> SourceImage:
    """Solid-color source image."""
    return SourceImage.from_pil(Image.new(mode, size, color))


def png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def gray_source():
    """Uniform mid-gray square image."""
    return make_source((128, 128, 128))


@pytest.fixture
def white_source():
    return make_source((255, 255, 255))


@pytest.fixture
def black_source():
    return make_source((0, 0, 0))


@pytest.fixture
def split_source():
    """Left half black, right half white, sized like the small canvas."""
    image = Image.new("RGB", (128, 128), (255, 255, 255))
    image.paste((0, 0, 0), (0, 0, 64, 128))
    return SourceImage.from_pil(image)


@pytest.fixture
def small_params():
    """Fast render settings: small canvas, no supersampling."""
    return SpiralParameters(resolution=128, supersample=1)

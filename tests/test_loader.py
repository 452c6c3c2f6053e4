"""Tests for image decoding."""

from __future__ import annotations

import pytest
from PIL import Image

from conftest import png_bytes
from spiral_processing import DecodeError, SpiralError, load_image


def test_load_from_bytes():
    source = load_image(png_bytes(Image.new("RGB", (12, 7), (1, 2, 3))))

    assert (source.width, source.height) == (12, 7)
    assert source.image.mode == "RGBA"
    assert source.image.getpixel((0, 0)) == (1, 2, 3, 255)


def test_load_from_path(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("L", (5, 9), 40).save(path)

    source = load_image(path)

    assert (source.width, source.height) == (5, 9)
    assert source.image.mode == "RGBA"


def test_load_from_str_path(tmp_path):
    path = tmp_path / "photo.jpg"
    Image.new("RGB", (8, 8), (200, 100, 50)).save(path, format="JPEG")
    assert load_image(str(path)).width == 8


@pytest.mark.parametrize(
    "data",
    [b"", b"definitely not an image", b"\x89PNG\r\n\x1a\n\x00\x00"],
)
def test_bad_bytes_raise_decode_error(data):
    with pytest.raises(DecodeError):
        load_image(data)


def test_truncated_image_raises_decode_error():
    data = png_bytes(Image.effect_noise((64, 64), 50).convert("RGB"))
    with pytest.raises(DecodeError):
        load_image(data[: len(data) // 2])


def test_missing_file_raises_decode_error(tmp_path):
    with pytest.raises(DecodeError, match="Failed to load image"):
        load_image(tmp_path / "nope.png")


def test_decode_error_hierarchy():
    assert issubclass(DecodeError, SpiralError)
    assert issubclass(DecodeError, ValueError)

"""Tests for the letterboxed working canvas and luminance sampling."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from conftest import make_source
from spiral_processing.sampler import ImageSampler, prepare_canvas
from spiral_processing.utils import fit_rect


class TestPrepareCanvas:
    def test_fit_rect_wide_image(self):
        assert fit_rect(200, 100, 100) == (100, 50, 0, 25)

    def test_fit_rect_tall_image_upscales(self):
        assert fit_rect(10, 20, 100) == (50, 100, 25, 0)

    def test_canvas_is_square_rgb(self):
        canvas = prepare_canvas(make_source((10, 20, 30), size=(30, 70)), 90)
        assert canvas.mode == "RGB"
        assert canvas.size == (90, 90)

    def test_letterbox_bars_are_white(self):
        canvas = prepare_canvas(make_source((200, 0, 0), size=(200, 100)), 100)

        assert canvas.getpixel((50, 0)) == (255, 255, 255)
        assert canvas.getpixel((50, 99)) == (255, 255, 255)
        r, g, b = canvas.getpixel((50, 50))
        assert abs(r - 200) <= 1 and g <= 1 and b <= 1

    def test_transparent_pixels_become_white(self):
        source = make_source((0, 0, 0, 0), mode="RGBA")
        sampler = ImageSampler.prepare(source, 32)
        assert sampler.sample_luminance(16, 16) == pytest.approx(1.0)


class TestSampleLuminance:
    def test_gray_applies_gamma(self):
        sampler = ImageSampler.prepare(make_source((128, 128, 128)), 32, gamma=1.15)
        assert sampler.sample_luminance(10.5, 3.2) == pytest.approx(
            (128 / 255) ** 1.15, abs=1e-9
        )

    def test_luminance_weights(self):
        sampler = ImageSampler.prepare(make_source((255, 0, 0)), 16)
        assert sampler.sample_luminance(8, 8) == pytest.approx(0.2126, abs=1e-3)

        sampler = ImageSampler.prepare(make_source((0, 255, 0)), 16)
        assert sampler.sample_luminance(8, 8) == pytest.approx(0.7152, abs=1e-3)

    def test_invert_happens_before_gamma(self):
        sampler = ImageSampler.prepare(
            make_source((64, 64, 64)), 16, gamma=2.0, invert=True
        )
        expected = (1 - 64 / 255) ** 2.0
        assert sampler.sample_luminance(4, 4) == pytest.approx(expected, abs=1e-9)
        # Gamma first would give a clearly different value
        assert abs(expected - (1 - (64 / 255) ** 2.0)) > 0.1

    def test_coordinates_are_floored(self, split_source):
        sampler = ImageSampler.prepare(split_source, 128)
        assert sampler.sample_luminance(63.99, 10) == pytest.approx(0.0)
        assert sampler.sample_luminance(64.0, 10) == pytest.approx(1.0)

    def test_out_of_range_coordinates_clamp(self, split_source):
        sampler = ImageSampler.prepare(split_source, 128)

        assert sampler.sample_luminance(-1000, -5) == sampler.sample_luminance(0, 0)
        assert sampler.sample_luminance(1e9, 1e9) == sampler.sample_luminance(127, 127)
        assert sampler.sample_luminance(-0.5, 140) == pytest.approx(0.0)

    def test_non_finite_coordinates_clamp(self, split_source):
        sampler = ImageSampler.prepare(split_source, 128)
        assert 0.0 <= sampler.sample_luminance(float("nan"), 5) <= 1.0
        assert sampler.sample_luminance(float("inf"), 5) == pytest.approx(1.0)

    def test_sample_many_matches_scalar(self, split_source):
        sampler = ImageSampler.prepare(split_source, 128, gamma=1.7, invert=True)
        xs = np.array([-3.0, 0.0, 12.4, 63.9, 64.1, 127.0, 160.0])
        ys = np.array([5.0, 127.5, 12.0, 40.0, 1.0, 0.0, -2.0])

        batch = sampler.sample_many(xs, ys)

        assert batch.shape == xs.shape
        for x, y, value in zip(xs, ys, batch):
            assert sampler.sample_luminance(x, y) == pytest.approx(value, abs=1e-12)

    def test_sampler_from_existing_canvas(self):
        canvas = Image.new("RGB", (8, 8), (255, 255, 255))
        sampler = ImageSampler(canvas, gamma=3.0, invert=True)
        assert sampler.resolution == 8
        assert sampler.sample_luminance(2, 2) == pytest.approx(0.0)

"""Tests for the end-to-end render pipeline."""

from __future__ import annotations

import io
from dataclasses import replace

import numpy as np
import pytest
from PIL import Image

from conftest import make_source, png_bytes
from models import RenderResult, SpiralParameters
from spiral_processing import EncodeError, SpiralProcessor, render_spiral
from spiral_processing.utils import calculate_total_length


def decode(result: RenderResult) -> np.ndarray:
    with Image.open(io.BytesIO(result.png_bytes)) as image:
        return np.asarray(image.convert("L"))


class TestRenderSpiral:
    def test_returns_png_of_requested_size(self, gray_source, small_params):
        result = render_spiral(gray_source, small_params)

        assert result.png_bytes.startswith(b"\x89PNG")
        assert decode(result).shape == (128, 128)
        assert result.parameters is small_params
        assert result.sample_count == len(result.path)

    def test_statistics_match_path(self, gray_source, small_params):
        result = render_spiral(gray_source, small_params)
        assert result.total_path_length == pytest.approx(
            calculate_total_length(result.path.xs, result.path.ys)
        )
        assert result.total_path_length > 0

    def test_render_is_idempotent(self, split_source):
        params = SpiralParameters(resolution=128)
        first = render_spiral(split_source, params)
        second = render_spiral(split_source, params)
        assert first.png_bytes == second.png_bytes

    def test_turns_zero_renders_blank_image(self, black_source, small_params):
        result = render_spiral(black_source, replace(small_params, turns=0))

        assert len(result.path) == 1
        assert (decode(result) == 255).all()

    def test_any_image_size_is_accepted(self, small_params):
        wide = make_source((0, 0, 0), size=(300, 40))
        result = render_spiral(wide, small_params)
        assert decode(result).shape == (128, 128)

    def test_higher_gamma_thickens_mid_tones(self, gray_source, small_params):
        low = render_spiral(gray_source, replace(small_params, gamma=0.8))
        high = render_spiral(gray_source, replace(small_params, gamma=2.0))
        assert high.path.widths.mean() > low.path.widths.mean()

    def test_encode_failure_publishes_nothing(
        self, gray_source, small_params, monkeypatch
    ):
        def broken_encode(image):
            raise EncodeError("Failed to encode image: buffer not finalized")

        monkeypatch.setattr("spiral_processing.processor.encode_png", broken_encode)

        with pytest.raises(EncodeError):
            render_spiral(gray_source, small_params)


class TestSpiralProcessor:
    def test_defaults(self):
        assert SpiralProcessor().params == SpiralParameters()

    def test_process_file(self, tmp_path, small_params):
        image_path = tmp_path / "portrait.png"
        image_path.write_bytes(png_bytes(Image.new("RGB", (20, 30), (90, 90, 90))))

        result = SpiralProcessor(small_params).process_file(image_path)

        assert result.sample_count > 1
        assert decode(result).min() < 255

    def test_steps_match_process(self, split_source, small_params):
        processor = SpiralProcessor(small_params)
        path = processor.synthesize(processor.prepare(split_source))
        result = processor.process(split_source)

        assert np.array_equal(path.widths, result.path.widths)

    def test_to_svg(self, gray_source, small_params):
        processor = SpiralProcessor(small_params)
        path = processor.synthesize(processor.prepare(gray_source))
        assert processor.to_svg(path).startswith("<svg")

"""Main spiral processor orchestrating the complete pipeline.

AIDEV-NOTE: A render is a pure function of (SourceImage, SpiralParameters):
nothing is cached between renders and no global state is touched, so the
same inputs always give byte-identical PNG output.
"""

from pathlib import Path

from loguru import logger
from PIL import Image

from models import RenderResult, SourceImage, SpiralParameters, SpiralPath

from .errors import EncodeError
from .loader import load_image
from .rendering import encode_png, rasterize_path
from .sampler import ImageSampler
from .svg_export import spiral_path_to_svg
from .synthesizer import synthesize_path
from .utils import calculate_total_length


class SpiralProcessor:
    """Turns images into spiral portraits with progress logging."""

    def __init__(self, params: SpiralParameters | None = None):
        self.params = params or SpiralParameters()

    def load_image(self, source: "bytes | str | Path") -> SourceImage:
        """Load and validate an image.

        Raises:
            DecodeError: If the image cannot be loaded
        """
        return load_image(source)

    def prepare(self, source: SourceImage) -> ImageSampler:
        """Letterbox the source into a working canvas and build a sampler."""
        return ImageSampler.prepare(
            source,
            self.params.resolution,
            gamma=self.params.gamma,
            invert=self.params.invert,
        )

    def synthesize(self, sampler: ImageSampler) -> SpiralPath:
        """Walk the spiral over a prepared sampler."""
        return synthesize_path(sampler, self.params)

    def rasterize(self, path: SpiralPath) -> Image.Image:
        """Stroke a spiral path into a bitmap."""
        return rasterize_path(path, self.params)

    def to_svg(self, path: SpiralPath) -> str:
        """Export a spiral path as an SVG document."""
        return spiral_path_to_svg(path, self.params)

    def process(self, source: SourceImage) -> RenderResult:
        """Execute the complete render pipeline.

        Args:
            source: Decoded source image

        Returns:
            RenderResult with the encoded bitmap and path statistics

        Raises:
            EncodeError: If the output could not be encoded
        """
        params = self.params
        logger.info(
            f"Rendering spiral for {source.width}x{source.height} image "
            f"at {params.resolution}px"
        )

        logger.debug("Preparing working canvas...")
        sampler = self.prepare(source)

        logger.debug("Walking spiral...")
        path = self.synthesize(sampler)

        logger.debug("Rasterizing and encoding...")
        try:
            png_bytes = encode_png(self.rasterize(path))
        except EncodeError as e:
            logger.error(f"Render failed: {e}")
            raise

        total_length = calculate_total_length(path.xs, path.ys)
        logger.info(
            f"Render complete: {len(path)} samples, "
            f"{total_length:.0f}px stroke, {len(png_bytes)} bytes"
        )

        return RenderResult(
            png_bytes=png_bytes,
            path=path,
            parameters=params,
            sample_count=len(path),
            total_path_length=total_length,
        )

    def process_file(self, file_path: "str | Path") -> RenderResult:
        """Load an image file and render it."""
        return self.process(self.load_image(file_path))


def render_spiral(source: SourceImage, params: SpiralParameters) -> RenderResult:
    """Render a spiral portrait.

    Args:
        source: Decoded source image
        params: Spiral parameters

    Returns:
        RenderResult with PNG bytes and the synthesized path

    Raises:
        EncodeError: If the rasterized output could not be encoded
    """
    return SpiralProcessor(params).process(source)

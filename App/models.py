"""Data models and constants for the spiral portrait generator."""

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from PIL import Image

# AIDEV-NOTE: Sampling constants of the spiral walk - changing them changes
# every rendered image, so keep them in sync with the tests.
ANGLE_STEP = 0.015  # radians between consecutive spiral samples
EDGE_MARGIN_FACTOR = 1.5  # spiral stops max_width * 1.5 px from the edge
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)  # Rec. 709 luminance

# Configuration file path
CONFIG_FILE = Path.home() / ".spiral_portrait_config.json"


@dataclass(frozen=True)
class SpiralParameters:
    """User-tunable settings for one render."""

    turns: int = 140  # requested number of revolutions (upper bound)
    line_spacing: float = 3.0  # px between neighbouring arms
    min_width: float = 0.6  # px stroke width in bright areas
    max_width: float = 4.2  # px stroke width in dark areas
    gamma: float = 1.15  # tone curve exponent
    invert: bool = False
    crop_to_circle: bool = True
    resolution: int = 2048  # output is resolution x resolution px

    # Rasterizer supersampling factor (1 disables anti-aliasing)
    supersample: int = 2


@dataclass(frozen=True)
class SourceImage:
    """A decoded image supplied by the caller.

    AIDEV-NOTE: The wrapped PIL image is always RGBA and must not be
    mutated once loaded - renders reference it without copying.
    """

    image: Image.Image

    @classmethod
    def from_pil(cls, image: Image.Image) -> "SourceImage":
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(image=image)

    @property
    def width(self) -> int:
        return self.image.size[0]

    @property
    def height(self) -> int:
        return self.image.size[1]


@dataclass(frozen=True, eq=False)
class SpiralPath:
    """Samples of one continuous spiral stroke.

    AIDEV-NOTE: Coordinates are in canvas pixels. widths[i] is the width of
    the segment that ends at sample i; widths[0] draws nothing.
    """

    thetas: np.ndarray
    xs: np.ndarray
    ys: np.ndarray
    widths: np.ndarray
    center: "tuple[float, float]" = (0.0, 0.0)

    def __len__(self) -> int:
        return len(self.thetas)

    @property
    def segment_count(self) -> int:
        return max(0, len(self) - 1)

    def radii(self) -> np.ndarray:
        """Distance of every sample from the spiral center."""
        return np.hypot(self.xs - self.center[0], self.ys - self.center[1])

    def segments(self):
        """Yield (x0, y0, x1, y1, width) for every drawn segment."""
        xs = self.xs.tolist()
        ys = self.ys.tolist()
        widths = self.widths.tolist()
        for i in range(1, len(xs)):
            yield xs[i - 1], ys[i - 1], xs[i], ys[i], widths[i]


@dataclass(frozen=True)
class RenderResult:
    """Result of a successful render."""

    # Encoded output bitmap
    png_bytes: bytes

    # Path the bitmap was rasterized from (also used for SVG export)
    path: SpiralPath

    # Parameters the render was produced with
    parameters: SpiralParameters = field(default_factory=SpiralParameters)

    # Statistics
    sample_count: int = 0
    total_path_length: float = 0.0  # px

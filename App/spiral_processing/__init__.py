"""Spiral portrait pipeline: image in, single spiral stroke out.

AIDEV-NOTE: Organized into modular components:
- loader: Decoding bytes/files into SourceImage
- sampler: Letterboxed working canvas and tone lookups
- synthesizer: Archimedean spiral walk and stroke widths
- rendering: Rasterization and PNG encoding
- svg_export: Vector export of the same path
- processor: SpiralProcessor orchestrator and render_spiral
- scheduling: Latest-wins render queue for interactive callers
"""

from .errors import DecodeError, EncodeError, SpiralError
from .loader import load_image
from .processor import SpiralProcessor, render_spiral
from .scheduling import RenderQueue, RenderTicket
from .svg_export import spiral_path_to_svg

__all__ = [
    "DecodeError",
    "EncodeError",
    "RenderQueue",
    "RenderTicket",
    "SpiralError",
    "SpiralProcessor",
    "load_image",
    "render_spiral",
    "spiral_path_to_svg",
]

"""UI components for the spiral portrait generator.

This package contains modular UI panels that can be easily rearranged
in the application layout.
"""

from ui.image_panel import ImagePanel
from ui.main_window import SpiralPortraitWindow

__all__ = [
    "SpiralPortraitWindow",
    "ImagePanel",
]

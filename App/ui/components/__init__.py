"""UI components package for modular control widgets."""

from ui.components.spiral_controls import SpiralControlsWidget

__all__ = [
    "SpiralControlsWidget",
]

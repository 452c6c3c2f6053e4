"""Centralized styling constants for the spiral portrait UI.

This module consolidates colors and sizes used throughout the application
to ensure consistency and easier maintenance.
"""


class ThemeColors:
    """Application theme colors."""

    # Preview area
    PREVIEW_BACKGROUND = "#ffffff"
    DROP_ZONE_BORDER = "#a1a1aa"
    DROP_ZONE_ACTIVE = "#18181b"

    # Status messages
    ERROR_TEXT = "#dc2626"
    STATUS_TEXT = "#71717a"


class Sizes:
    """Standard widget sizes and constraints."""

    # Preview of the rendered spiral
    PREVIEW_MIN_SIZE = (400, 400)

    # Controls column
    CONTROLS_MIN_WIDTH = 260

    # Main window
    WINDOW_MIN_SIZE = (900, 640)


SIZES = Sizes


def drop_zone_stylesheet(active: bool = False) -> str:
    """Generate the preview/drop zone stylesheet.

    Args:
        active: True while a drag is hovering over the zone

    Returns:
        CSS stylesheet string with a dashed border
    """
    border = ThemeColors.DROP_ZONE_ACTIVE if active else ThemeColors.DROP_ZONE_BORDER
    return (
        f"border: 2px dashed {border}; border-radius: 12px; "
        f"background-color: {ThemeColors.PREVIEW_BACKGROUND};"
    )


def status_stylesheet(is_error: bool) -> str:
    """Generate status label stylesheet.

    Args:
        is_error: True for error messages

    Returns:
        CSS stylesheet string with appropriate color
    """
    color = ThemeColors.ERROR_TEXT if is_error else ThemeColors.STATUS_TEXT
    return f"color: {color};"

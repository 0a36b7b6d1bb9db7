"""
Enumerations for the trace viewer using Python 3.11+ StrEnum.

This module defines string-based enumerations for the constants shared
between the input layer, configuration and the frame loop.
"""

from enum import StrEnum


class ViewCommand(StrEnum):
    """Commands a key can be bound to.

    Values double as the keys of the ``keys`` section in config.json.

    Attributes:
        ZOOM_IN: Grow the scale (more time units per pixel)
        ZOOM_OUT: Shrink the scale, floored at zero
        RESET_ZOOM: Restore the scale that fits the whole trace
        PAN_LEFT: Move the timeline content to the left
        PAN_RIGHT: Move the timeline content to the right
        RESET_PAN: Return the scroll offset to zero
    """
    ZOOM_IN = "zoomIn"
    ZOOM_OUT = "zoomOut"
    RESET_ZOOM = "resetZoom"
    PAN_LEFT = "panLeft"
    PAN_RIGHT = "panRight"
    RESET_PAN = "resetPan"


class Palette(StrEnum):
    """Color palettes for span rectangles.

    Attributes:
        SATURATED: Bright colors for spans narrower than one pixel
        MUTED: Darker colors for spans at least one pixel wide
    """
    SATURATED = "saturated"
    MUTED = "muted"

"""
Type definitions for the trace viewer.

This module defines common types, aliases, and TypedDict structures
used throughout the codebase.
"""

from typing import NamedTuple, Protocol, TypedDict

import numpy as np

from events import ViewerEvent

# On-disk and in-memory layout of one span record: three little-endian u64
SPAN_DTYPE = np.dtype([("tag", "<u8"), ("start", "<u8"), ("stop", "<u8")])
SPAN_RECORD_SIZE = SPAN_DTYPE.itemsize  # 24 bytes

ColorHex = str  # Color in hex format like "#RRGGBB"


class Span(NamedTuple):
    """One interval record: a lane tag and a [start, stop] timestamp pair."""
    tag: int
    start: int
    stop: int

    @property
    def duration(self) -> int:
        return self.stop - self.start


# Configuration TypedDict definitions
class WindowConfig(TypedDict, total=False):
    """Window configuration."""
    width: int
    height: int
    title: str


class LaneConfig(TypedDict, total=False):
    """Lane geometry in pixels."""
    height: int
    spacing: int


class TooltipConfig(TypedDict, total=False):
    """Tooltip box geometry and text style."""
    charWidth: int
    height: int
    textAlpha: int


# Protocol definitions
class RenderBackend(Protocol):
    """Drawing and event capability the frame loop renders through."""

    def clear(self, color: ColorHex) -> None:
        """Start a frame filled with ``color``."""
        ...

    def fill_rectangle(self, x: int, y: int, width: int, height: int, color: ColorHex) -> None:
        """Fill a rectangle in screen pixels."""
        ...

    def draw_text(self, x: int, y: int, text: str) -> None:
        """Draw a tooltip at (x, y). Raises RenderError on failure."""
        ...

    def present(self) -> None:
        """Show the finished frame."""
        ...

    def poll_events(self) -> list[ViewerEvent]:
        """Return the events received since the previous poll."""
        ...

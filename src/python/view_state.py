"""
ViewState: the zoom and scroll state of the timeline and every
timestamp <-> pixel conversion made with it.
"""

import logging
from typing import TYPE_CHECKING

from error_handler import ConfigurationError, PixelRangeError, ViewportDomainError
from utils.saturating import (
    fits_i32,
    fits_u32,
    saturating_add_i32,
    saturating_add_u64,
    saturating_sub_i32,
    saturating_sub_u64,
)

if TYPE_CHECKING:
    from span_store import SpanStore

logger = logging.getLogger(__name__)


class ViewState:
    """Map trace timestamps to screen pixels under a mutable zoom and scroll.

    ``scale`` is the number of time units per horizontal pixel minus one: every
    conversion divides by ``scale + 1``, so a scale of 0 is the finest zoom
    rather than a division by zero. ``scroll`` is a pixel offset subtracted
    from every x position. Both saturate instead of wrapping, since they are
    driven by keys the user may hold indefinitely.
    """

    min_start: int
    max_stop: int
    window_width: int
    scale: int
    scroll: int

    def __init__(self, min_start: int, max_stop: int, window_width: int,
                 scale: int | None = None, scroll: int = 0) -> None:
        if not fits_u32(window_width) or window_width == 0:
            raise ConfigurationError(f"window width must be in [1, 2**32 - 1], got {window_width}")
        if max_stop < min_start:
            raise ViewportDomainError(f"max stop {max_stop} is before min start {min_start}")
        self.min_start = min_start
        self.max_stop = max_stop
        self.window_width = window_width
        self.scale = self.initial_scale if scale is None else scale
        self.scroll = scroll

    @classmethod
    def for_store(cls, store: 'SpanStore', window_width: int) -> 'ViewState':
        """Build a view that fits the whole store into ``window_width`` pixels."""
        return cls(store.min_start, store.max_stop, window_width)

    @property
    def initial_scale(self) -> int:
        """Scale at which the full [min_start, max_stop] range spans the window."""
        return (self.max_stop - self.min_start) // self.window_width

    def to_screen_x(self, start: int) -> int:
        """Horizontal pixel position of timestamp ``start``."""
        if start < self.min_start:
            raise ViewportDomainError(f"timestamp {start} is before min start {self.min_start}")
        offset = (start - self.min_start) // (self.scale + 1)
        if not fits_i32(offset):
            raise PixelRangeError(f"bad x position {offset} for scale {self.scale} at timestamp {start}")
        return saturating_sub_i32(offset, self.scroll)

    def to_screen_width(self, start: int, stop: int) -> int:
        """Width in pixels of the span [start, stop]; 0 for sub-pixel spans."""
        if stop < start:
            raise ViewportDomainError(f"span stop {stop} is before start {start}")
        width = (stop - start) // (self.scale + 1)
        if not fits_u32(width):
            raise PixelRangeError(f"bad width {width} for scale {self.scale} span [{start}, {stop}]")
        return width

    def zoom_in(self, amount: int) -> None:
        """Grow the scale by ``amount`` time units per pixel."""
        if amount < 0:
            raise ValueError(f"zoom amount must be non-negative, got {amount}")
        self.scale = saturating_add_u64(self.scale, amount)
        logger.debug("Scale +%d -> %d", amount, self.scale)

    def zoom_out(self, amount: int) -> None:
        """Shrink the scale by ``amount``, stopping at 0."""
        if amount < 0:
            raise ValueError(f"zoom amount must be non-negative, got {amount}")
        self.scale = saturating_sub_u64(self.scale, amount)
        logger.debug("Scale -%d -> %d", amount, self.scale)

    def reset_zoom(self) -> None:
        self.scale = self.initial_scale
        logger.debug("Scale reset to %d", self.scale)

    def pan(self, delta: int) -> None:
        """Shift the scroll offset by ``delta`` pixels (either sign)."""
        self.scroll = saturating_add_i32(self.scroll, delta)
        logger.debug("Scroll %+d -> %d", delta, self.scroll)

    def reset_pan(self) -> None:
        self.scroll = 0
        logger.debug("Scroll reset")

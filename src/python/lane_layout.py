"""Lane placement and coloring of spans."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from custom_types import ColorHex, Span
from enums import Palette
from error_handler import ConfigurationError, LaneOverflowError
from utils.saturating import fits_i32

if TYPE_CHECKING:
    from config_manager import ConfigManager
    from view_state import ViewState

logger = logging.getLogger(__name__)

SATURATED_COLORS: tuple[ColorHex, ...] = (
    "#FF0000", "#00FF00", "#0000FF", "#FFFF00", "#00FFFF", "#FF00FF",
)
MUTED_COLORS: tuple[ColorHex, ...] = (
    "#C00000", "#00C000", "#0000C0", "#C0C000", "#00C0C0", "#C000C0",
)


@dataclass(frozen=True)
class SpanRect:
    """Screen rectangle of one span for the current frame."""
    x: int
    y: int
    width: int
    height: int
    color: ColorHex
    span: Span


class LaneLayout:
    """Stack one lane per tag and pick span colors.

    Lane ``tag`` starts at ``tag * (lane_height + lane_spacing) + lane_spacing``
    pixels from the top. Colors cycle through a palette by tag; spans that
    render narrower than one pixel use the saturated palette so the thin line
    stays visible, wider spans use the muted one.
    """

    def __init__(
        self,
        lane_height: int = 10,
        lane_spacing: int = 1,
        saturated: tuple[ColorHex, ...] | list[ColorHex] = SATURATED_COLORS,
        muted: tuple[ColorHex, ...] | list[ColorHex] = MUTED_COLORS,
    ) -> None:
        if lane_height < 1 or lane_spacing < 0:
            raise ConfigurationError(
                f"lane height must be >= 1 and spacing >= 0, got {lane_height} and {lane_spacing}"
            )
        if not saturated or not muted:
            raise ConfigurationError("span palettes must not be empty")
        self.lane_height = lane_height
        self.lane_spacing = lane_spacing
        self.saturated = tuple(saturated)
        self.muted = tuple(muted)

    @classmethod
    def from_config(cls, cfg: 'ConfigManager') -> 'LaneLayout':
        lanes = cfg.get_lane_config()
        return cls(
            lane_height=lanes["height"],
            lane_spacing=lanes["spacing"],
            saturated=cfg.get_palette(Palette.SATURATED),
            muted=cfg.get_palette(Palette.MUTED),
        )

    def lane_origin(self, tag: int) -> int:
        """Top pixel of the lane for ``tag``."""
        if not fits_i32(tag):
            raise LaneOverflowError(
                f"tag {tag} is too large to lay out; filter or renumber tags first"
            )
        y = (self.lane_spacing + self.lane_height) * tag + self.lane_spacing
        if not fits_i32(y + self.lane_height):
            raise LaneOverflowError(f"lane for tag {tag} starts at pixel {y}, outside the screen range")
        return y

    def assign_color(self, tag: int, width: int) -> ColorHex:
        """Color for a span of ``tag`` drawn ``width`` pixels wide."""
        palette = self.muted if width >= 1 else self.saturated
        return palette[tag % len(palette)]

    def layout_span(self, span: Span, view_state: 'ViewState') -> SpanRect:
        """Screen rectangle of ``span`` under the current view."""
        width = view_state.to_screen_width(span.start, span.stop)
        return SpanRect(
            x=view_state.to_screen_x(span.start),
            y=self.lane_origin(span.tag),
            width=width,
            height=self.lane_height,
            color=self.assign_color(span.tag, width),
            span=span,
        )

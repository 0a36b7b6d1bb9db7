"""
FrameDriver: the render loop of the viewer.

Each tick drains the backend's events, redraws every span under the current
view, rebuilds the hit-test index from what was drawn, draws the tooltip of
the selected span and presents the frame, then sleeps out the rest of the
frame period.
"""

from collections.abc import Callable
from dataclasses import dataclass
import logging
import time

from custom_types import ColorHex, RenderBackend
from error_handler import PixelRangeError
from events import KeyDownEvent, PointerDownEvent, PointerUpEvent, QuitEvent
from hit_test import HitTestIndex
from input_controller import InputController
from lane_layout import LaneLayout
from span_store import SpanStore
from utils.saturating import fits_i32
from view_state import ViewState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """The span picked by the current pointer press."""
    pointer_x: int
    pointer_y: int
    tag: int
    duration: int

    @property
    def tooltip_text(self) -> str:
        for name, value in (("tag", self.tag), ("duration", self.duration)):
            if not fits_i32(value):
                raise PixelRangeError(f"{name} {value} is too large to display")
        return f"{self.tag},{self.duration}"


class FrameDriver:
    """Drive the event -> layout -> draw cycle against a RenderBackend."""

    def __init__(
        self,
        store: SpanStore,
        view_state: ViewState,
        layout: LaneLayout,
        backend: RenderBackend,
        input_controller: InputController,
        background: ColorHex = "#C0C0C0",
        fps: int = 30,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.store = store
        self.view_state = view_state
        self.layout = layout
        self.backend = backend
        self.input_controller = input_controller
        self.background = background
        self.frame_period = 1.0 / fps
        self.hit_index = HitTestIndex()
        self.selection: Selection | None = None
        self._clock = clock
        self._sleep = sleep

    def run(self, max_frames: int | None = None) -> int:
        """Render frames until the backend reports quit.

        Args:
            max_frames: Optional cap on rendered frames

        Returns:
            int: Number of frames rendered
        """
        frames = 0
        logger.info("Frame loop started: %d spans, %.1f fps", len(self.store), 1.0 / self.frame_period)
        while max_frames is None or frames < max_frames:
            started = self._clock()
            if not self.tick():
                break
            frames += 1
            remaining = self.frame_period - (self._clock() - started)
            if remaining > 0:
                self._sleep(remaining)
        logger.info("Frame loop stopped after %d frames", frames)
        return frames

    def tick(self) -> bool:
        """Run one frame. Returns False once quit was requested."""
        if not self.process_events():
            return False
        self.render()
        return True

    def process_events(self) -> bool:
        for event in self.backend.poll_events():
            match event:
                case QuitEvent():
                    logger.info("Quit requested")
                    return False
                case KeyDownEvent(key=key):
                    self.input_controller.handle_key(key)
                case PointerDownEvent(x=x, y=y):
                    self._select(x, y)
                case PointerUpEvent():
                    self.selection = None
        self.input_controller.end_tick()
        return True

    def _select(self, x: int, y: int) -> None:
        area = self.hit_index.query(x, y)
        if area is not None:
            self.selection = Selection(pointer_x=x, pointer_y=y, tag=area.tag, duration=area.duration)

    def render(self) -> None:
        self.backend.clear(self.background)
        self.hit_index.clear()
        for span in self.store:
            rect = self.layout.layout_span(span, self.view_state)
            self.backend.fill_rectangle(rect.x, rect.y, rect.width, rect.height, rect.color)
            self.hit_index.append(rect)
        if self.selection is not None:
            self.backend.draw_text(
                self.selection.pointer_x, self.selection.pointer_y, self.selection.tooltip_text
            )
        self.backend.present()

"""PyQt6 rendering backend for the frame loop.

TraceCanvas is the window: it shows a back-buffer image and queues input
events. QtRenderBackend draws into that image with a QPainter opened by
clear() and closed by present(), and hands the queued events to the frame
loop on poll_events().
"""
from collections import deque
import logging

from PyQt6.QtCore import QRect, Qt
from PyQt6.QtGui import QColor, QFont, QImage, QKeyEvent, QKeySequence, QPainter
from PyQt6.QtWidgets import QApplication, QWidget

from config_manager import ConfigManager
from custom_types import ColorHex, TooltipConfig
from error_handler import RenderError
from events import KeyDownEvent, PointerDownEvent, PointerUpEvent, QuitEvent, ViewerEvent
from utils.saturating import I32_MAX

logger = logging.getLogger(__name__)


def key_name(event: QKeyEvent) -> str | None:
    """Lowercase name of the pressed key ('q', 'left', ...), or None for bare modifiers."""
    text = event.text()
    if text and text.isprintable():
        return text.lower()
    name = QKeySequence(event.key()).toString()
    return name.lower() or None


class TraceCanvas(QWidget):
    """Window that shows the last presented frame and records input."""

    def __init__(self, width: int, height: int, title: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.resize(width, height)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.frame = QImage(width, height, QImage.Format.Format_RGB32)
        self.frame.fill(QColor("#000000"))
        self._events: deque[ViewerEvent] = deque()

    def take_events(self) -> list[ViewerEvent]:
        events = list(self._events)
        self._events.clear()
        return events

    def keyPressEvent(self, event: QKeyEvent) -> None:
        # Auto-repeated presses are kept: they drive the key-repeat acceleration
        name = key_name(event)
        if name is None:
            super().keyPressEvent(event)
            return
        self._events.append(KeyDownEvent(name))
        event.accept()

    def mousePressEvent(self, event) -> None:
        pos = event.position()
        self._events.append(PointerDownEvent(int(pos.x()), int(pos.y())))
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        pos = event.position()
        self._events.append(PointerUpEvent(int(pos.x()), int(pos.y())))
        event.accept()

    def closeEvent(self, event) -> None:
        self._events.append(QuitEvent())
        event.accept()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.drawImage(0, 0, self.frame)
        painter.end()


class QtRenderBackend:
    """RenderBackend implementation drawing into a TraceCanvas."""

    def __init__(
        self,
        canvas: TraceCanvas,
        app: QApplication | None = None,
        font_family: str = "Arial",
        tooltip: TooltipConfig | None = None,
        tooltip_background: ColorHex = "#FFFFFF",
        tooltip_text: ColorHex = "#000000",
    ) -> None:
        self.canvas = canvas
        self.app = app or QApplication.instance()
        tooltip = tooltip or {}
        self.char_width = tooltip.get("charWidth", 20)
        self.tooltip_height = tooltip.get("height", 50)
        self.tooltip_background = QColor(tooltip_background)
        self.text_color = QColor(tooltip_text)
        self.text_color.setAlpha(tooltip.get("textAlpha", 128))
        self.font = QFont(font_family)
        self.font.setPixelSize(max(1, int(self.tooltip_height * 0.7)))
        self._painter: QPainter | None = None

    @classmethod
    def from_config(cls, cfg: ConfigManager) -> 'QtRenderBackend':
        """Create the application (if needed), the window and the backend."""
        app = QApplication.instance() or QApplication([])
        window = cfg.get_window_config()
        canvas = TraceCanvas(window["width"], window["height"], window["title"])
        canvas.show()
        return cls(
            canvas,
            app=app,
            font_family=cfg.get_font("tooltip"),
            tooltip=cfg.get_tooltip_config(),
            tooltip_background=cfg.get_color("tooltipBackground", "#FFFFFF"),
            tooltip_text=cfg.get_color("tooltipText", "#000000"),
        )

    def _active_painter(self) -> QPainter:
        if self._painter is None or not self._painter.isActive():
            raise RenderError("drawing outside of a frame: call clear() first")
        return self._painter

    def poll_events(self) -> list[ViewerEvent]:
        if self.app is not None:
            self.app.processEvents()
        return self.canvas.take_events()

    def clear(self, color: ColorHex) -> None:
        if self._painter is not None:
            self._painter.end()
        size = self.canvas.size()
        if self.canvas.frame.size() != size and not size.isEmpty():
            self.canvas.frame = QImage(size, QImage.Format.Format_RGB32)
        self.canvas.frame.fill(QColor(color))
        self._painter = QPainter(self.canvas.frame)

    def fill_rectangle(self, x: int, y: int, width: int, height: int, color: ColorHex) -> None:
        # Zero-width spans still render as a one pixel line; QPainter takes i32 sizes
        width = min(max(width, 1), I32_MAX)
        self._active_painter().fillRect(x, y, width, max(height, 1), QColor(color))

    def draw_text(self, x: int, y: int, text: str) -> None:
        painter = self._active_painter()
        box_width = len(text) * self.char_width
        painter.fillRect(x, y, box_width, self.tooltip_height, self.tooltip_background)
        painter.setFont(self.font)
        painter.setPen(self.text_color)
        painter.drawText(QRect(x, y, box_width, self.tooltip_height), Qt.AlignmentFlag.AlignCenter, text)

    def present(self) -> None:
        if self._painter is not None:
            self._painter.end()
            self._painter = None
        self.canvas.update()

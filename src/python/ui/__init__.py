"""UI components package for the trace viewer."""

from ui.qt_backend import (
    QtRenderBackend,
    TraceCanvas,
)

__all__ = [
    "QtRenderBackend",
    "TraceCanvas",
]

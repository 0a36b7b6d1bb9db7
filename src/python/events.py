"""
Input events delivered by a rendering backend once per tick.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class QuitEvent:
    """The window was closed."""


@dataclass(frozen=True)
class KeyDownEvent:
    """A key was pressed or auto-repeated; ``key`` is its lowercase name."""
    key: str


@dataclass(frozen=True)
class PointerDownEvent:
    x: int
    y: int


@dataclass(frozen=True)
class PointerUpEvent:
    x: int
    y: int


ViewerEvent = QuitEvent | KeyDownEvent | PointerDownEvent | PointerUpEvent

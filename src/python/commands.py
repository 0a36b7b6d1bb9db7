"""
Command pattern for view adjustments triggered from the keyboard.
"""
from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

from enums import ViewCommand

if TYPE_CHECKING:
    from view_state import ViewState


class Command(ABC):
    """Base class for view commands."""
    def __init__(self, view_state: 'ViewState') -> None:
        self.view_state = view_state

    @abstractmethod
    def execute(self) -> Any:
        """Execute the command against the view state."""
        pass


class ZoomInCommand(Command):
    """Grow the scale by a number of time units per pixel."""
    def __init__(self, view_state: 'ViewState', amount: int) -> None:
        super().__init__(view_state)
        self.amount = amount

    def execute(self) -> None:
        self.view_state.zoom_in(self.amount)


class ZoomOutCommand(Command):
    """Shrink the scale by a number of time units per pixel."""
    def __init__(self, view_state: 'ViewState', amount: int) -> None:
        super().__init__(view_state)
        self.amount = amount

    def execute(self) -> None:
        self.view_state.zoom_out(self.amount)


class ResetZoomCommand(Command):
    """Fit the whole trace into the window again."""
    def execute(self) -> None:
        self.view_state.reset_zoom()


class PanCommand(Command):
    """Shift the scroll offset by a signed number of pixels."""
    def __init__(self, view_state: 'ViewState', delta: int) -> None:
        super().__init__(view_state)
        self.delta = delta

    def execute(self) -> None:
        self.view_state.pan(self.delta)


class ResetPanCommand(Command):
    """Return the scroll offset to zero."""
    def execute(self) -> None:
        self.view_state.reset_pan()


def build_command(command: ViewCommand, view_state: 'ViewState', count: int) -> Command:
    """Command for ``command`` at repeat ``count``.

    Zoom steps grow with the square of the repeat count and pan steps
    linearly; resets ignore the count.
    """
    match command:
        case ViewCommand.ZOOM_IN:
            return ZoomInCommand(view_state, count * count)
        case ViewCommand.ZOOM_OUT:
            return ZoomOutCommand(view_state, count * count)
        case ViewCommand.RESET_ZOOM:
            return ResetZoomCommand(view_state)
        case ViewCommand.PAN_LEFT:
            return PanCommand(view_state, count)
        case ViewCommand.PAN_RIGHT:
            return PanCommand(view_state, -count)
        case ViewCommand.RESET_PAN:
            return ResetPanCommand(view_state)
        case _:
            raise ValueError(f"Invalid view command: {command}")

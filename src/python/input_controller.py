"""
Key-repeat state machine that turns key presses into accelerating view commands.

Holding a key delivers a stream of key-down events. Each one raises the
repeat count, and the count sets the step size: zoom steps are count**2 time
units per pixel, pan steps are count pixels. A tick that receives no bound
key-down drops the machine back to Idle, so the next press starts at 1 again.
"""

from dataclasses import dataclass
import logging

from commands import Command, build_command
from enums import ViewCommand
from utils.saturating import I32_MAX
from view_state import ViewState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No bound key was pressed during the last tick."""

    @property
    def count(self) -> int:
        return 0


@dataclass(frozen=True)
class Repeating:
    """``command`` has been pressed ``count`` times without an idle tick."""
    command: ViewCommand
    count: int


KeyRepeatState = Idle | Repeating


class InputController:
    """Apply key presses to a ViewState with key-repeat acceleration."""

    def __init__(self, view_state: ViewState, key_bindings: dict[str, ViewCommand]) -> None:
        """Initialize the controller.

        Args:
            view_state: The view the commands act on
            key_bindings: Lowercase key name -> command
        """
        self.view_state = view_state
        self.key_bindings = {key.lower(): ViewCommand(command) for key, command in key_bindings.items()}
        self.state: KeyRepeatState = Idle()
        self._pressed_this_tick = False

    def handle_key(self, key: str) -> Command | None:
        """Handle one key-down event.

        Returns the executed command, or None when ``key`` is not bound.
        """
        command = self.key_bindings.get(key.lower())
        if command is None:
            return None

        match self.state:
            case Repeating(command=current, count=count) if current == command:
                self.state = Repeating(command, min(count + 1, I32_MAX))
            case _:
                self.state = Repeating(command, 1)
        self._pressed_this_tick = True

        action = build_command(command, self.view_state, self.state.count)
        action.execute()
        logger.debug("Key %r -> %s (repeat %d)", key, command, self.state.count)
        return action

    def end_tick(self) -> None:
        """Close the current tick; without a bound key-down in it, go Idle."""
        if not self._pressed_this_tick and not isinstance(self.state, Idle):
            logger.debug("Key repeat ended at %d", self.state.count)
            self.state = Idle()
        self._pressed_this_tick = False

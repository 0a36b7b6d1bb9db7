"""
Tests for the key-repeat state machine.
"""
import pytest

from config_manager import DEFAULT_KEY_BINDINGS
from enums import ViewCommand
from commands import PanCommand, ZoomInCommand
from input_controller import Idle, InputController, Repeating
from utils.saturating import I32_MAX
from view_state import ViewState

BINDINGS = {key: ViewCommand(command) for command, key in DEFAULT_KEY_BINDINGS.items()}


@pytest.fixture
def view():
    return ViewState(min_start=0, max_stop=80_000, window_width=800)


@pytest.fixture
def controller(view):
    return InputController(view, BINDINGS)


def test_starts_idle(controller):
    assert controller.state == Idle()
    assert controller.state.count == 0


def test_zoom_in_accelerates_quadratically(controller, view):
    before = view.scale
    steps = []
    for _ in range(3):
        previous = view.scale
        controller.handle_key("q")
        steps.append(view.scale - previous)
    assert steps == [1, 4, 9]
    assert view.scale - before == 14
    assert controller.state == Repeating(ViewCommand.ZOOM_IN, 3)


def test_handle_key_returns_executed_command(controller):
    command = controller.handle_key("q")
    assert isinstance(command, ZoomInCommand)
    assert command.amount == 1
    command = controller.handle_key("a")
    assert isinstance(command, PanCommand)
    assert command.delta == 1


def test_zoom_out_accelerates_quadratically(controller, view):
    for _ in range(3):
        controller.handle_key("w")
    assert view.scale == 100 - 14


def test_pan_accelerates_linearly(controller, view):
    for _ in range(4):
        controller.handle_key("a")
    assert view.scroll == 1 + 2 + 3 + 4
    controller.end_tick()
    controller.end_tick()
    for _ in range(2):
        controller.handle_key("s")
    assert view.scroll == 10 - 3


def test_repeat_survives_ticks_with_presses(controller, view):
    controller.handle_key("q")
    controller.end_tick()
    controller.handle_key("q")
    controller.end_tick()
    assert controller.state == Repeating(ViewCommand.ZOOM_IN, 2)


def test_idle_tick_resets_count(controller, view):
    for _ in range(5):
        controller.handle_key("a")
    controller.end_tick()
    assert controller.state == Repeating(ViewCommand.PAN_LEFT, 5)
    controller.end_tick()
    assert controller.state == Idle()
    scroll = view.scroll
    controller.handle_key("a")
    assert controller.state == Repeating(ViewCommand.PAN_LEFT, 1)
    assert view.scroll - scroll == 1


def test_other_command_restarts_count(controller):
    controller.handle_key("q")
    controller.handle_key("q")
    controller.handle_key("a")
    assert controller.state == Repeating(ViewCommand.PAN_LEFT, 1)


def test_resets(controller, view):
    controller.handle_key("q")
    controller.handle_key("a")
    controller.handle_key("e")
    controller.handle_key("d")
    assert view.scale == view.initial_scale
    assert view.scroll == 0


def test_unbound_keys_are_ignored(controller, view):
    controller.handle_key("q")
    assert controller.handle_key("x") is None
    assert controller.handle_key("left") is None
    assert controller.state == Repeating(ViewCommand.ZOOM_IN, 1)
    assert view.scale == 101
    # An unbound key does not keep the repeat alive
    controller.end_tick()
    controller.handle_key("z")
    controller.end_tick()
    assert controller.state == Idle()


def test_keys_are_case_insensitive(view):
    controller = InputController(view, {"Q": ViewCommand.ZOOM_IN})
    controller.handle_key("q")
    controller.handle_key("Q")
    assert view.scale == 105


def test_count_saturates(controller):
    controller.state = Repeating(ViewCommand.PAN_LEFT, I32_MAX)
    controller.handle_key("a")
    assert controller.state.count == I32_MAX


def test_bindings_from_config(test_config_manager, view):
    controller = InputController(view, test_config_manager.get_key_bindings())
    controller.handle_key("z")
    assert view.scale == 101
    # zoomIn moved to "z", so "q" is free
    assert controller.handle_key("q") is None
    controller.handle_key("h")
    assert view.scroll == 1

"""
conftest.py - Shared pytest fixtures for trace viewer tests

This module provides standardized test fixtures for use across all tests.
It includes fixtures for:
- Path setup and Python path configuration
- Configuration management
- Sample span data and trace files
- A recording render backend
- GUI testing support
"""
import os
import sys
import json
import pathlib
import pytest

# Qt tests render offscreen unless a platform is chosen explicitly
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add the src/python directory to the Python path
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent / "src" / "python"))

# Imports from viewer modules (now that path is configured)
from config_manager import ConfigManager
from custom_types import Span
from events import ViewerEvent
from trace_loader import write_trace


# Path and Environment Fixtures
# ----------------------------

@pytest.fixture
def viewer_paths():
    """Provide standard paths to key project directories."""
    root_dir = pathlib.Path(__file__).parent.parent
    return {
        'root': root_dir,
        'src': root_dir / 'src',
        'python': root_dir / 'src' / 'python',
        'config': root_dir / 'config',
        'tests': root_dir / 'tests'
    }


# Configuration Fixtures
# ---------------------

@pytest.fixture
def test_config_data(tmp_path):
    """Create minimal test configuration data."""
    return {
        "colors": {
            "background": "#101010",
            "tooltipBackground": "#FFFFFF",
            "tooltipText": "#000000",
            "palette": {
                "saturated": ["#FF0000", "#00FF00"],
                "muted": ["#800000", "#008000"]
            },
            "fonts": {
                "tooltip": "Courier"
            }
        },
        "ui": {
            "window": {"width": 800, "height": 300, "title": "Test Viewer"},
            "lanes": {"height": 8, "spacing": 2},
            "frame": {"fps": 60},
            "tooltip": {"charWidth": 10, "height": 20, "textAlpha": 200}
        },
        "keys": {
            "zoomIn": "Z",
            "panLeft": "h"
        },
        "logging": {
            "level": "DEBUG",
            "file": str(tmp_path / "logs" / "viewer.log"),
            "console": False
        }
    }


@pytest.fixture
def test_config_file(tmp_path, test_config_data):
    """Write the test configuration to a temporary config.json."""
    config_file = tmp_path / "test_config.json"
    with open(config_file, 'w') as f:
        json.dump(test_config_data, f)
    return config_file


@pytest.fixture
def test_config_manager(test_config_file):
    """Create a ConfigManager instance with test configuration."""
    return ConfigManager(cfg_path=test_config_file, exit_on_error=False)


# Span Data Fixtures
# ------------------

@pytest.fixture
def sample_spans():
    """Three spans loaded out of start order, one per lane."""
    return [
        Span(tag=0, start=100, stop=10000),
        Span(tag=1, start=20000, stop=23000),
        Span(tag=2, start=10000, stop=13000),
    ]


@pytest.fixture
def trace_file(tmp_path):
    """A ten-record trace file: record i has tag i % 3 and covers [i*100, i*100 + 50]."""
    path = tmp_path / "trace.bin"
    write_trace(path, [(i % 3, i * 100, i * 100 + 50) for i in range(10)])
    return path


# Backend Fixtures
# ----------------

class RecordingBackend:
    """RenderBackend double that records draw calls and replays scripted events.

    ``ticks`` is a list of event lists, one per poll; once exhausted every
    poll returns no events.
    """

    def __init__(self, ticks: list[list[ViewerEvent]] | None = None):
        self.ticks = list(ticks or [])
        self.calls: list[tuple] = []
        self.frames: list[list[tuple]] = []
        self._frame: list[tuple] = []

    def poll_events(self) -> list[ViewerEvent]:
        return self.ticks.pop(0) if self.ticks else []

    def clear(self, color):
        self.calls.append(("clear", color))
        self._frame = []

    def fill_rectangle(self, x, y, width, height, color):
        self.calls.append(("fill_rectangle", x, y, width, height, color))
        self._frame.append(("fill_rectangle", x, y, width, height, color))

    def draw_text(self, x, y, text):
        self.calls.append(("draw_text", x, y, text))
        self._frame.append(("draw_text", x, y, text))

    def present(self):
        self.calls.append(("present",))
        self.frames.append(self._frame)


@pytest.fixture
def recording_backend():
    """Factory for RecordingBackend instances with scripted events."""
    return RecordingBackend


# GUI Testing Fixtures
# ------------------

@pytest.fixture(scope="session")
def qt_app():
    """Create a QApplication instance that persists for the test session."""
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:
        pytest.skip("PyQt6 not installed, skipping test")

    app = QApplication.instance()
    if app is None:
        app = QApplication([''])

    yield app

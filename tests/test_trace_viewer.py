"""
Tests for the command line entry point.
"""
import logging

import pytest

import trace_viewer
from trace_loader import write_trace


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_parser_accepts_five_positionals(tmp_path):
    args = trace_viewer.build_parser().parse_args([str(tmp_path / "t.bin"), "0", "10", "1", "3"])
    assert (args.start_index, args.stop_index, args.tag_min, args.tag_max) == (0, 10, 1, 3)
    assert args.debug is False


@pytest.mark.parametrize("argv", [
    [],
    ["trace.bin"],
    ["trace.bin", "0", "10", "0"],
    ["trace.bin", "0", "10", "0", "1", "2"],
    ["trace.bin", "zero", "10", "0", "1"],
    ["trace.bin", "0", "-10", "0", "1"],
])
def test_wrong_invocation_is_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        trace_viewer.main(argv)
    assert excinfo.value.code == 2


def test_missing_trace_file_exits_with_error(tmp_path, test_config_file, capsys):
    code = trace_viewer.main([str(tmp_path / "missing.bin"), "0", "1", "0", "1", "--config", str(test_config_file)])
    assert code == 1
    assert "failed to open" in capsys.readouterr().err


def test_empty_selection_exits_with_error(tmp_path, test_config_file, capsys):
    path = tmp_path / "trace.bin"
    write_trace(path, [(5, 0, 10), (6, 5, 20)])
    code = trace_viewer.main([str(path), "0", "2", "0", "1", "--config", str(test_config_file)])
    assert code == 1
    assert "non-empty" in capsys.readouterr().err


def test_inverted_index_range_exits_with_error(trace_file, test_config_file):
    assert trace_viewer.main([str(trace_file), "5", "2", "0", "3", "--config", str(test_config_file)]) == 1


def test_wires_viewer_from_config(trace_file, test_config_file, monkeypatch):
    import ui.qt_backend

    class NullBackend:
        @classmethod
        def from_config(cls, cfg):
            return cls()

    runs = []

    def fake_run(self, max_frames=None):
        runs.append((len(self.store), self.view_state.scale, self.frame_period, self.background))
        return 0

    monkeypatch.setattr(ui.qt_backend, "QtRenderBackend", NullBackend)
    monkeypatch.setattr(trace_viewer.FrameDriver, "run", fake_run)
    code = trace_viewer.main([str(trace_file), "0", "10", "0", "1", "--config", str(test_config_file)])
    assert code == 0
    # 7 of the 10 records have tag 0 or 1; they cover [0, 950] on an 800 px window
    assert runs == [(7, 950 // 800, pytest.approx(1 / 60), "#101010")]

"""tsc-trace viewer - interactive timeline of span trace files.

Usage:
    tsc-trace-viewer <trace file> <start index> <stop index> <tag min> <tag max>

Keys (defaults, see config/config.json):
    q / w   zoom in / zoom out (hold to accelerate)
    e       reset zoom
    a / s   pan left / pan right (hold to accelerate)
    d       reset pan
Click and hold on a span to show its tag and duration.
"""

import argparse
import logging
import pathlib
import sys

from config_manager import ConfigManager, config
from error_handler import ErrorHandler, TraceViewerError
from frame_driver import FrameDriver
from input_controller import InputController
from lane_layout import LaneLayout
from logging_config import setup_logging
from span_store import SpanStore
from trace_loader import TraceRequest, load_trace
from view_state import ViewState

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tsc-trace-viewer',
        description='Interactive timeline viewer for span trace files',
    )
    parser.add_argument('path', type=pathlib.Path, help='Trace file of 24-byte (tag, start, stop) records')
    parser.add_argument('start_index', type=_non_negative_int, help='First record index to load')
    parser.add_argument('stop_index', type=_non_negative_int, help='Record index to stop before')
    parser.add_argument('tag_min', type=_non_negative_int, help='Smallest tag to keep')
    parser.add_argument('tag_max', type=_non_negative_int, help='Largest tag to keep')
    parser.add_argument('--config', '-c', type=pathlib.Path, default=None,
                        help='Alternative config.json')
    parser.add_argument('--debug', '-d', action='store_true',
                        help='Enable debug logging')
    return parser


def build_driver(request: TraceRequest, cfg: ConfigManager) -> FrameDriver:
    """Load the trace and wire the viewer against a Qt window."""
    # Qt is only needed once there is something to show
    from ui.qt_backend import QtRenderBackend

    store = SpanStore(load_trace(request))
    logger.info("Laying out %d lanes", len(store.tags))
    view_state = ViewState.for_store(store, cfg.get_window_config()["width"])
    backend = QtRenderBackend.from_config(cfg)
    return FrameDriver(
        store=store,
        view_state=view_state,
        layout=LaneLayout.from_config(cfg),
        backend=backend,
        input_controller=InputController(view_state, cfg.get_key_bindings()),
        background=cfg.get_color("background", "#C0C0C0"),
        fps=cfg.get_frame_rate(),
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = ConfigManager(cfg_path=args.config) if args.config else config
    setup_logging(cfg=cfg)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        request = TraceRequest(
            path=args.path,
            start_index=args.start_index,
            stop_index=args.stop_index,
            tag_min=args.tag_min,
            tag_max=args.tag_max,
        )
        driver = build_driver(request, cfg)
        driver.run()
    except TraceViewerError as e:
        ErrorHandler.log_exception(e, context=f"Viewing {args.path}")
        print(f"tsc-trace-viewer: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())

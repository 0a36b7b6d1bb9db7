"""
Reading and writing trace files.

A trace file is a headerless run of 24-byte records, each holding three
little-endian u64 values: tag, start, stop.
"""

import logging
import pathlib
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from custom_types import SPAN_DTYPE, SPAN_RECORD_SIZE, Span
from error_handler import TraceFileError, UsageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceRequest:
    """Which records of a trace file to load.

    Records with index in [start_index, stop_index) are read, then only
    those whose tag lies in [tag_min, tag_max] are kept.
    """
    path: pathlib.Path
    start_index: int
    stop_index: int
    tag_min: int
    tag_max: int

    def __post_init__(self) -> None:
        for name in ("start_index", "stop_index", "tag_min", "tag_max"):
            if getattr(self, name) < 0:
                raise UsageError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.start_index > self.stop_index:
            raise UsageError(
                f"start index {self.start_index} is past stop index {self.stop_index}"
            )
        if self.tag_min > self.tag_max:
            raise UsageError(f"tag range [{self.tag_min}, {self.tag_max}] is empty")


def load_trace(request: TraceRequest) -> np.ndarray:
    """Load the records selected by ``request``.

    Raises:
        TraceFileError: The file cannot be read or holds fewer than
            ``stop_index`` records.
    """
    path = pathlib.Path(request.path)
    try:
        size = path.stat().st_size
    except OSError as e:
        raise TraceFileError(f"failed to open trace file '{path}': {e}") from e

    available = size // SPAN_RECORD_SIZE
    if available < request.stop_index:
        raise TraceFileError(
            f"trace file '{path}' holds {available} records, {request.stop_index} requested"
        )

    count = request.stop_index - request.start_index
    if count == 0:
        logger.warning("Empty index range [%d, %d) requested from %s",
                       request.start_index, request.stop_index, path)
        return np.empty(0, dtype=SPAN_DTYPE)
    try:
        records = np.fromfile(
            path,
            dtype=SPAN_DTYPE,
            count=count,
            offset=request.start_index * SPAN_RECORD_SIZE,
        )
    except (OSError, ValueError) as e:
        raise TraceFileError(f"failed to read trace file '{path}': {e}") from e

    if len(records) != count:
        raise TraceFileError(f"trace file '{path}' ended after {len(records)} of {count} records")

    mask = (records["tag"] >= request.tag_min) & (records["tag"] <= request.tag_max)
    selected = records[mask]
    logger.info(
        "Loaded %d of %d records [%d, %d) from %s with tags in [%d, %d]",
        len(selected), count, request.start_index, request.stop_index,
        path, request.tag_min, request.tag_max,
    )
    return selected


def write_trace(path: str | pathlib.Path, spans: Iterable[Span | tuple[int, int, int]]) -> int:
    """Write spans as 24-byte records and return the number written."""
    records = np.array([tuple(span) for span in spans], dtype=SPAN_DTYPE)
    try:
        records.tofile(pathlib.Path(path))
    except OSError as e:
        raise TraceFileError(f"failed to write trace file '{path}': {e}") from e
    logger.debug("Wrote %d records to %s", len(records), path)
    return len(records)

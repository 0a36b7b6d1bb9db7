"""
SpanStore: the immutable, start-ordered set of spans shown in one session.

- Spans are stable-sorted by start (ties keep their loaded order)
- min_start is the start of the first span after sorting
- max_stop is the largest stop over ALL spans, so a long span that starts
  early and encloses later ones still fits inside the viewport bounds
"""

import logging
from collections.abc import Iterable, Iterator

import numpy as np

from custom_types import SPAN_DTYPE, Span
from error_handler import EmptyTraceError, InvalidSpanError
from utils.saturating import fits_u64

logger = logging.getLogger(__name__)


class SpanStore:
    """Read-only, start-ordered span collection."""

    _records: np.ndarray
    _spans: list[Span]
    min_start: int
    max_stop: int

    def __init__(self, spans: np.ndarray | Iterable[Span | tuple[int, int, int]]) -> None:
        records = self._to_records(spans)
        if len(records) == 0:
            raise EmptyTraceError("expected a non-empty collection of trace spans")

        inverted = np.flatnonzero(records["stop"] < records["start"])
        if len(inverted):
            bad = records[inverted[0]]
            raise InvalidSpanError(
                f"span (tag={int(bad['tag'])}, start={int(bad['start'])}, stop={int(bad['stop'])}) "
                f"stops before it starts"
            )

        order = np.argsort(records["start"], kind="stable")
        self._records = records[order]
        self._records.flags.writeable = False
        self._spans = [Span(*row) for row in self._records.tolist()]

        self.min_start = self._spans[0].start
        self.max_stop = int(self._records["stop"].max())
        if self.max_stop != self._spans[-1].stop:
            logger.debug(
                "Latest-starting span stops at %d, widest stop is %d",
                self._spans[-1].stop, self.max_stop,
            )
        logger.info(
            "Span store ready: %d spans, start %d, stop %d",
            len(self._spans), self.min_start, self.max_stop,
        )

    @staticmethod
    def _to_records(spans: np.ndarray | Iterable[Span | tuple[int, int, int]]) -> np.ndarray:
        if isinstance(spans, np.ndarray):
            if spans.dtype != SPAN_DTYPE:
                raise InvalidSpanError(f"expected span records of dtype {SPAN_DTYPE}, got {spans.dtype}")
            return spans.copy()

        rows = [tuple(int(v) for v in span) for span in spans]
        for row in rows:
            if len(row) != 3 or not all(fits_u64(v) for v in row):
                raise InvalidSpanError(f"span {row} is not a (tag, start, stop) triple of u64 values")
        return np.array(rows, dtype=SPAN_DTYPE)

    @property
    def records(self) -> np.ndarray:
        """Sorted records as a read-only structured array."""
        return self._records

    @property
    def tags(self) -> list[int]:
        """Distinct tags present, ascending."""
        return [int(tag) for tag in np.unique(self.records["tag"])]

    def __len__(self) -> int:
        return len(self._spans)

    def __iter__(self) -> Iterator[Span]:
        return iter(self._spans)

    def __getitem__(self, index: int) -> Span:
        return self._spans[index]

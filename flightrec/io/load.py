# flightrec/io/load.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from flightrec.core import (
    DEFAULT_MAX_POINTS,
    Recording,
    Schema,
    Series,
    SeriesStatistics,
    decimate,
)
from flightrec.io.record_decoder import RecordDecoder
from flightrec.io.schema_loader import load_schema_file, read_bytes


log = logging.getLogger(__name__)


def load_recording(data_path: str | Path, schema_path: str | Path) -> Recording:
    schema = load_schema_file(schema_path)
    series = RecordDecoder(schema).decode_file(data_path)
    return Recording.from_series(schema, series, source=str(data_path))


class DataSession:
    """
    Holds the most recently loaded Recording.

    A load decodes into a fresh Recording and swaps it in only on success,
    so a failed load leaves the previous data untouched.
    """

    def __init__(self, *, max_points: int = DEFAULT_MAX_POINTS):
        self.max_points = max_points
        self._recording: Recording | None = None

    # ---- loading ----
    def load(self, path: str | Path, schema: Schema) -> Recording:
        data = read_bytes(path)
        return self.load_bytes(data, schema, source=str(path))

    def load_bytes(
        self,
        data: bytes | bytearray | memoryview,
        schema: Schema,
        *,
        source: str | None = None,
    ) -> Recording:
        series = RecordDecoder(schema).decode(data)
        recording = Recording.from_series(schema, series, source=source)

        self._recording = recording
        log.info("Session loaded %s (%d records)", source or "<bytes>", recording.record_count)
        return recording

    def clear(self) -> None:
        self._recording = None

    # ---- state ----
    @property
    def has_data(self) -> bool:
        return self._recording is not None

    @property
    def recording(self) -> Recording | None:
        return self._recording

    @property
    def series(self) -> Sequence[Series]:
        return () if self._recording is None else self._recording.series

    @property
    def statistics(self) -> SeriesStatistics:
        return SeriesStatistics() if self._recording is None else self._recording.statistics

    @property
    def path(self) -> str | None:
        return None if self._recording is None else self._recording.source

    @property
    def time_unit(self) -> str:
        return "" if self._recording is None else self._recording.time_unit

    # ---- view ----
    def visible(
        self,
        indices: Sequence[int],
        min_x: float | None = None,
        max_x: float | None = None,
    ) -> list[Series]:
        """
        Decimated series for a visible window.

        Without bounds the full window [0, max_x] is used. A requested
        window is clipped to [0, max_x] and never narrower than the
        statistics' `min_step`; one that falls outside the data is
        ignored in favour of the full window.
        """
        stats = self.statistics
        full_min, full_max = stats.full_window
        window = None
        if min_x is not None or max_x is not None:
            window = stats.clamp_window(
                full_min if min_x is None else min_x,
                full_max if max_x is None else max_x,
            )
        lo, hi = window if window is not None else (full_min, full_max)
        series = self.series
        return [
            decimate(series[i], lo, hi, self.max_points)
            for i in indices
            if 0 <= i < len(series)
        ]

# flightrec/core/recording.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from .exceptions import DataError, SignalNotFound
from .schema import Schema
from .series import Series
from .statistics import SeriesStatistics, compute_statistics, group_range


@dataclass(frozen=True, slots=True)
class Recording:
    """
    Recording = decoded series of one data file + their statistics.

    Design goals:
    - one Series per schema signal, in schema order
    - safe + predictable: immutable, built in one step by `from_series`
    - list-like and name-based access: rec[0], rec["alt"]
    """
    schema: Schema = field(repr=False)
    series: Sequence[Series] = field(repr=False)
    statistics: SeriesStatistics = field(default_factory=SeriesStatistics)
    source: str | None = None

    def __post_init__(self) -> None:
        series = tuple(self.series)
        if len(series) != len(self.schema):
            raise DataError(
                f"Recording needs one series per signal, got {len(series)} "
                f"for {len(self.schema)} signals."
            )
        for s in series:
            if not isinstance(s, Series):
                raise DataError("Recording.series values must be Series instances.")
        object.__setattr__(self, "series", series)

    @classmethod
    def from_series(
        cls,
        schema: Schema,
        series: Sequence[Series],
        *,
        source: str | None = None,
    ) -> "Recording":
        return cls(
            schema=schema,
            series=series,
            statistics=compute_statistics(series),
            source=source,
        )

    # ---- sequence / name API ----
    def __len__(self) -> int:
        return len(self.series)

    def __iter__(self) -> Iterator[Series]:
        return iter(self.series)

    def __getitem__(self, key: int | str) -> Series:
        if isinstance(key, str):
            for s in self.series:
                if s.name == key:
                    return s
            raise SignalNotFound(key)
        return self.series[key]

    @property
    def record_count(self) -> int:
        return self.series[0].n if self.series else 0

    @property
    def time_unit(self) -> str:
        return self.schema.time_axis_unit

    def group_range(self, indices: Sequence[int]) -> tuple[float, float] | None:
        return group_range(self.series, indices)

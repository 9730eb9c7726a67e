# flightrec/core/series.py
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .exceptions import DataError


def _as_float_1d(arr, label: str) -> np.ndarray:
    a = np.asarray(arr, dtype=np.float64)
    if a.ndim != 1:
        raise DataError(f"`{label}` must be 1D, got shape {a.shape}")
    return a


def window_bounds(x: np.ndarray, min_x: float, max_x: float) -> tuple[int, int]:
    """Index range [first, last) of sorted `x` with min_x <= x <= max_x."""
    first = int(np.searchsorted(x, min_x, side="left"))
    last = int(np.searchsorted(x, max_x, side="right"))
    return first, max(first, last)


@dataclass(frozen=True, slots=True)
class Series:
    """
    Immutable decoded signal: 1D `x` (record index) + 1D `y` (value).

    `time_scale` is the signal's effective multiplier from record index to
    the schema's time axis unit. It is carried along, not applied to `x`.
    """

    name: str
    x: np.ndarray = field(repr=False)
    y: np.ndarray = field(repr=False)
    unit: str = ""
    time_scale: float = 1.0

    def __post_init__(self) -> None:
        x = _as_float_1d(self.x, "x")
        y = _as_float_1d(self.y, "y")

        if x.size != y.size:
            raise DataError(f"`x` and `y` must have same length, got {x.size} vs {y.size}")

        if x.size > 0:
            if not np.isfinite(x).all():
                raise DataError("`x` contains non-finite values (NaN/Inf).")
            if np.any(np.diff(x) < 0):
                raise DataError("`x` must be monotonic non-decreasing.")

        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    @classmethod
    def empty(cls, name: str, unit: str = "") -> "Series":
        return cls(name=name, x=np.empty(0), y=np.empty(0), unit=unit)

    def __len__(self) -> int:
        return self.n

    @property
    def n(self) -> int:
        return int(self.x.size)

    @property
    def x_start(self) -> float | None:
        return None if self.n == 0 else float(self.x[0])

    @property
    def x_end(self) -> float | None:
        return None if self.n == 0 else float(self.x[-1])

    @property
    def samples(self) -> np.ndarray:
        """(n, 2) array of (x, y) pairs."""
        return np.column_stack((self.x, self.y))

    def scaled_x(self) -> np.ndarray:
        """`x` expressed in the schema's time axis unit."""
        return self.x * self.time_scale

    def slice_x(self, min_x: float, max_x: float) -> "Series":
        if min_x > max_x:
            min_x, max_x = max_x, min_x
        first, last = window_bounds(self.x, min_x, max_x)
        return self.take(slice(first, last))

    def take(self, index) -> "Series":
        """New Series built from `x[index]`, `y[index]` (slice or index array)."""
        return Series(
            name=self.name,
            x=self.x[index],
            y=self.y[index],
            unit=self.unit,
            time_scale=self.time_scale,
        )

    def to_numpy(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray]:
        if copy:
            return self.x.copy(), self.y.copy()
        return self.x, self.y

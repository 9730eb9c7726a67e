# flightrec/core/statistics.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .series import Series


log = logging.getLogger(__name__)

# Consecutive sample pairs scanned per series when estimating the step
STEP_SCAN_PAIRS = 4096
MIN_STEP_FRACTION = 0.01
MIN_STEP_FLOOR = 1e-3


@dataclass(frozen=True, slots=True)
class SeriesStatistics:
    """Display-ready ranges derived from one set of decoded series."""

    min_y: float = -1.0
    max_y: float = 1.0
    max_x: float = 0.0
    min_step: float = MIN_STEP_FLOOR
    has_range: bool = False

    @property
    def full_window(self) -> tuple[float, float]:
        return 0.0, self.max_x

    def clamp_window(self, min_x: float, max_x: float) -> tuple[float, float] | None:
        """
        Normalize a requested visible window, or None if it is unusable.

        The bounds are ordered and clipped to `full_window`. A window
        narrower than `min_step` is widened around its center to `min_step`,
        then shifted back inside `full_window`. Returns None when nothing
        of the window is left inside [0, max_x].
        """
        bound_min, bound_max = self.full_window
        if max_x < min_x:
            min_x, max_x = max_x, min_x
        min_x = max(bound_min, min_x)
        max_x = min(bound_max, max_x)
        if max_x <= min_x:
            return None

        if max_x - min_x < self.min_step:
            center = (min_x + max_x) * 0.5
            min_x = center - self.min_step * 0.5
            max_x = center + self.min_step * 0.5
            if min_x < bound_min:
                min_x = bound_min
                max_x = min(bound_max, bound_min + self.min_step)
            if max_x > bound_max:
                max_x = bound_max
                min_x = max(bound_min, bound_max - self.min_step)
            if max_x <= min_x:
                return None
        return min_x, max_x


def _is_degenerate(lo: float, hi: float) -> bool:
    return lo == hi or math.isclose(lo, hi, rel_tol=1e-12, abs_tol=0.0)


def _widen(lo: float, hi: float) -> tuple[float, float]:
    """Widen a constant range symmetrically so it can be plotted."""
    delta = abs(lo) * 0.1 if abs(lo) > 1.0 else 1.0
    return lo - delta, hi + delta


def _fold_range(series: Iterable[Series]) -> tuple[float, float] | None:
    lo = hi = None
    for s in series:
        y = s.y[~np.isnan(s.y)]
        if y.size == 0:
            continue
        s_lo, s_hi = float(y.min()), float(y.max())
        lo = s_lo if lo is None else min(lo, s_lo)
        hi = s_hi if hi is None else max(hi, s_hi)
    if lo is None:
        return None
    return lo, hi


def _smallest_step(x: np.ndarray, max_pairs: int) -> float | None:
    head = x[: max_pairs + 1]
    if head.size < 2:
        return None
    dx = np.abs(np.diff(head))
    dx = dx[dx > 0.0]
    if dx.size == 0:
        return None
    return float(dx.min())


def compute_statistics(
    series: Sequence[Series],
    *,
    scan_pairs: int = STEP_SCAN_PAIRS,
) -> SeriesStatistics:
    """
    One pass over all decoded series.

    - min_y / max_y: global value range (NaN samples are ignored)
    - max_x: largest last-sample x over all series
    - min_step: 1% of the smallest positive x gap seen in the first
      `scan_pairs` pairs of each series, floored at 1e-3
    """
    y_range = _fold_range(series)

    max_x = 0.0
    step: float | None = None
    for s in series:
        if s.n == 0:
            continue
        max_x = max(max_x, float(s.x[-1]))
        candidate = _smallest_step(s.x, scan_pairs)
        if candidate is not None and (step is None or candidate < step):
            step = candidate

    if y_range is None:
        min_y, max_y = -1.0, 1.0
    else:
        min_y, max_y = y_range

    if _is_degenerate(min_y, max_y):
        min_y, max_y = _widen(min_y, max_y)

    min_step = MIN_STEP_FLOOR
    if step is not None:
        min_step = max(step * MIN_STEP_FRACTION, MIN_STEP_FLOOR)

    stats = SeriesStatistics(
        min_y=min_y,
        max_y=max_y,
        max_x=max_x,
        min_step=min_step,
        has_range=y_range is not None,
    )
    log.debug("Statistics over %d series: %s", len(series), stats)
    return stats


def group_range(series: Sequence[Series], indices: Iterable[int]) -> tuple[float, float] | None:
    """
    Value range over the series at `indices`, widened when constant.

    Out-of-range indices are skipped. Returns None when no sample was seen.
    """
    picked = [series[i] for i in indices if 0 <= i < len(series)]
    y_range = _fold_range(picked)
    if y_range is None:
        return None
    lo, hi = y_range
    if _is_degenerate(lo, hi):
        lo, hi = _widen(lo, hi)
    return lo, hi

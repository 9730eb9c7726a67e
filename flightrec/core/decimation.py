# flightrec/core/decimation.py
"""
Min/max preserving decimation of one series for a visible x window.

The window is split into equal-width buckets and each bucket keeps the
sample with the lowest and the one with the highest y, so spikes survive
at any zoom level. The first and last samples inside the window are always
kept.
"""
from __future__ import annotations

import logging

import numpy as np

from .series import Series, window_bounds


log = logging.getLogger(__name__)

DEFAULT_MAX_POINTS = 5000


def _bucket_extrema(ys: np.ndarray, b0: int, b1: int) -> tuple[int, int]:
    """Indices of the lowest and highest y in ys[b0:b1], skipping NaN.

    An all-NaN bucket reports its first sample for both.
    """
    bucket = ys[b0:b1]
    if np.isnan(bucket).all():
        return b0, b0
    return b0 + int(np.nanargmin(bucket)), b0 + int(np.nanargmax(bucket))


def decimate_indices(
    x: np.ndarray,
    y: np.ndarray,
    min_x: float,
    max_x: float,
    max_points: int,
) -> np.ndarray:
    """
    Indices into `x` / `y` of the samples to draw, in ascending x order.

    `x` must be sorted ascending. The result holds at most `max_points`
    indices, plus the window's last sample which is always appended.
    """
    if x.size == 0 or max_points <= 0:
        return np.empty(0, dtype=np.intp)
    if max_x < min_x:
        min_x, max_x = max_x, min_x

    first, last = window_bounds(x, min_x, max_x)
    count = last - first
    if count <= 0:
        return np.empty(0, dtype=np.intp)
    if count <= max_points:
        return np.arange(first, last, dtype=np.intp)

    bucket_count = max(1, max_points // 2)
    span = max_x - min_x
    bucket_size = span / bucket_count if span > 0.0 else 1.0

    xs = x[first:last]
    ys = y[first:last]
    starts = min_x + bucket_size * np.arange(bucket_count)
    ends = starts + bucket_size
    ends[-1] = max_x
    # Buckets are half-open [start, end); samples at exactly max_x are
    # only represented by the trailing point.
    lo = np.searchsorted(xs, starts, side="left")
    hi = np.maximum(np.searchsorted(xs, ends, side="left"), lo)

    out = [first]
    for b0, b1 in zip(lo.tolist(), hi.tolist()):
        if b0 == b1:
            continue
        i_min, i_max = _bucket_extrema(ys, b0, b1)
        if xs[i_min] <= xs[i_max]:
            out.append(first + i_min)
            if i_max != i_min:
                out.append(first + i_max)
        else:
            out.append(first + i_max)
            out.append(first + i_min)
        if len(out) >= max_points:
            break
    out.append(last - 1)

    log.debug(
        "Decimated %d samples in [%g, %g] to %d points (%d buckets)",
        count, min_x, max_x, len(out), bucket_count,
    )
    return np.asarray(out, dtype=np.intp)


def decimate_xy(
    x,
    y,
    min_x: float,
    max_x: float,
    max_points: int = DEFAULT_MAX_POINTS,
) -> tuple[np.ndarray, np.ndarray]:
    """Array form of `decimate`; returns new (x, y) arrays."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    idx = decimate_indices(x, y, min_x, max_x, max_points)
    return x[idx], y[idx]


def decimate(
    series: Series,
    min_x: float,
    max_x: float,
    max_points: int = DEFAULT_MAX_POINTS,
) -> Series:
    """
    Reduce `series` to about `max_points` samples inside [min_x, max_x].

    The input is never modified; a new Series is returned on every call.
    """
    idx = decimate_indices(series.x, series.y, min_x, max_x, max_points)
    return series.take(idx)

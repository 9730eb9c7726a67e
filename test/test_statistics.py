# test/test_statistics.py
import numpy as np
import pytest

from flightrec.core import Series, SeriesStatistics, compute_statistics, group_range


def _s(y, x=None, name="s"):
    y = np.asarray(y, dtype=float)
    x = np.arange(y.size, dtype=float) if x is None else np.asarray(x, dtype=float)
    return Series(name=name, x=x, y=y)


def test_no_series_falls_back():
    stats = compute_statistics([])
    assert stats == SeriesStatistics(min_y=-1.0, max_y=1.0, max_x=0.0, min_step=1e-3, has_range=False)


def test_only_empty_series_falls_back():
    stats = compute_statistics([Series.empty("a")])
    assert not stats.has_range
    assert (stats.min_y, stats.max_y, stats.max_x) == (-1.0, 1.0, 0.0)


def test_range_max_x_and_step():
    stats = compute_statistics([_s([1.0, 5.0, 3.0]), _s([-2.0, 0.0], x=[0.0, 9.0])])

    assert stats.has_range
    assert stats.min_y == -2.0
    assert stats.max_y == 5.0
    assert stats.max_x == 9.0
    # smallest gap is 1.0 -> 1% of it
    assert stats.min_step == pytest.approx(0.01)


def test_min_step_floor():
    stats = compute_statistics([_s([1.0, 2.0, 3.0], x=[0.0, 0.01, 0.02])])
    assert stats.min_step == pytest.approx(1e-3)


def test_zero_gaps_are_not_step_candidates():
    stats = compute_statistics([_s([1.0, 2.0, 3.0], x=[0.0, 0.0, 0.0])])
    assert stats.min_step == pytest.approx(1e-3)


def test_step_scan_is_bounded_to_prefix():
    x = np.concatenate([np.arange(4097) * 2.0, [8192.5]])
    stats = compute_statistics([_s(np.zeros(x.size) + np.arange(x.size), x=x)])
    # the 0.5 gap sits after the first 4096 pairs and is not seen
    assert stats.min_step == pytest.approx(0.02)

    stats_small = compute_statistics([_s([0.0, 1.0, 2.0, 3.0], x=[0.0, 10.0, 20.0, 20.5])], scan_pairs=2)
    assert stats_small.min_step == pytest.approx(0.1)


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, (-0.5, 1.5)), (0.0, (-1.0, 1.0)), (50.0, (45.0, 55.0)), (-20.0, (-22.0, -18.0))],
)
def test_constant_range_is_widened(value, expected):
    stats = compute_statistics([_s([value] * 5)])
    assert stats.has_range
    assert stats.min_y == pytest.approx(expected[0])
    assert stats.max_y == pytest.approx(expected[1])


def test_nan_values_are_ignored():
    stats = compute_statistics([_s([np.nan, 2.0, 4.0])])
    assert (stats.min_y, stats.max_y) == (2.0, 4.0)


def test_clamp_window_orders_and_widens():
    stats = SeriesStatistics(min_step=0.5, max_x=10.0)

    assert stats.full_window == (0.0, 10.0)
    assert stats.clamp_window(8.0, 2.0) == (2.0, 8.0)
    lo, hi = stats.clamp_window(3.0, 3.1)
    assert hi - lo == pytest.approx(0.5)
    assert (lo + hi) / 2 == pytest.approx(3.05)


def test_clamp_window_clips_to_data_bounds():
    stats = SeriesStatistics(min_step=0.5, max_x=10.0)

    assert stats.clamp_window(-50.0, 5.0) == (0.0, 5.0)
    assert stats.clamp_window(-5.0, 20.0) == (0.0, 10.0)
    # widened windows are shifted back inside [0, max_x]
    assert stats.clamp_window(0.0, 0.1) == pytest.approx((0.0, 0.5))
    assert stats.clamp_window(9.95, 10.0) == pytest.approx((9.5, 10.0))


def test_clamp_window_outside_data_is_none():
    stats = SeriesStatistics(min_step=0.5, max_x=10.0)

    assert stats.clamp_window(12.0, 15.0) is None
    assert stats.clamp_window(-3.0, -1.0) is None
    assert stats.clamp_window(4.0, 4.0) is None
    assert SeriesStatistics().clamp_window(0.0, 1.0) is None


def test_group_range_subset():
    series = [_s([1.0, 2.0]), _s([10.0, 30.0]), _s([7.0, 7.0])]

    assert group_range(series, [0, 1]) == (1.0, 30.0)
    assert group_range(series, [2]) == pytest.approx((6.3, 7.7))
    assert group_range(series, [0, 99, -1]) == (1.0, 2.0)
    assert group_range(series, []) is None

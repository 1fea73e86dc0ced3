import pytest

from tradescope.indicators import IndicatorType
from tradescope.indicators.results import DynamicPivot
from tradescope.marketdata import TimeSeries


HIGHS = [1, 3, 2, 5, 4, 6]


@pytest.fixture
def pivot_series(make_series):
    return make_series(HIGHS, highs=HIGHS, lows=[h - 1 for h in HIGHS])


def _pivots(series, k):
    return [c.get_indicator(IndicatorType.dynamic_pivot(k)).as_dynamic_pivot() for c in series.candles]


def test_pivot_levels(pivot_series) -> None:
    pivot_series.populate(IndicatorType.dynamic_pivot(1))

    assert _pivots(pivot_series, 1) == [
        None,
        DynamicPivot(high=3, low=2, is_high=True, is_low=False),
        DynamicPivot(high=3, low=1, is_high=False, is_low=True),
        DynamicPivot(high=5, low=1, is_high=True, is_low=False),
        DynamicPivot(high=5, low=3, is_high=False, is_low=True),
        None,
    ]


def test_pivot_seed_uses_centre_levels(make_series) -> None:
    # the first centre is neither a high nor a low pivot
    highs = [5, 3, 4]
    series = make_series(highs, highs=highs, lows=[0, 2, 1])
    series.populate(IndicatorType.dynamic_pivot(1))

    assert _pivots(series, 1)[1] == DynamicPivot(high=3, low=2, is_high=False, is_low=False)

def test_pivot_ties_count(make_series) -> None:
    highs = [2, 3, 3, 2]
    series = make_series(highs, highs=highs, lows=[1, 1, 1, 1])
    series.populate(IndicatorType.dynamic_pivot(1))

    pivots = _pivots(series, 1)
    assert pivots[1].is_high and pivots[2].is_high
    assert pivots[1].is_low and pivots[2].is_low


def test_pivot_is_written_k_bars_late(pivot_series, make_candles) -> None:
    itype = IndicatorType.dynamic_pivot(1)
    candles = make_candles(HIGHS, HIGHS, [h - 1 for h in HIGHS])
    live = TimeSeries("TEST", pivot_series.interval)
    live.populate(itype)

    live.add_candle(candles[0])
    live.add_candle(candles[1])
    assert live.candles[1].get_indicator(itype).result is None

    live.add_candle(candles[2])
    assert live.candles[1].get_indicator(itype).as_dynamic_pivot() == DynamicPivot(3, 2, True, False)
    assert live.candles[2].get_indicator(itype).result is None

    for candle in candles[3:]:
        live.add_candle(candle)
    pivot_series.populate(itype)
    assert _pivots(live, 1) == _pivots(pivot_series, 1)


def test_pivot_needs_a_full_window(make_series) -> None:
    series = make_series([1, 2, 3, 4])
    series.populate(IndicatorType.dynamic_pivot(2))
    assert all(p is None for p in _pivots(series, 2))


def test_zero_length_pivot_marks_every_candle(make_series) -> None:
    series = make_series([3, 1, 2])
    series.populate(IndicatorType.dynamic_pivot(0))
    pivots = _pivots(series, 0)
    assert all(p.is_high and p.is_low for p in pivots)
    assert [p.high for p in pivots] == [4.0, 2.0, 3.0]

import logging
from datetime import timedelta

import numpy as np
import pytest

from tradescope.errors import CandleOrderError
from tradescope.indicators import IndicatorType, MAType
from tradescope.marketdata import Candle, Interval, TimeSeries


def test_add_candle_rejects_duplicates_and_out_of_order(make_candles) -> None:
    c = make_candles([1, 2, 3])
    series = TimeSeries("TEST", Interval.DAY_1, c[:2])

    with pytest.raises(CandleOrderError, match="Duplicate"):
        series.add_candle(c[1])
    with pytest.raises(CandleOrderError, match="Out of order"):
        series.add_candle(c[0])
    assert len(series) == 2


def test_add_candles_is_atomic(make_candles) -> None:
    c = make_candles([1, 2, 3, 4])
    series = TimeSeries("TEST", Interval.DAY_1, c[:1])

    with pytest.raises(CandleOrderError):
        series.add_candles([c[1], c[3], c[2]])

    assert len(series) == 1
    series.add_candles(c[1:])
    assert len(series) == 4


def test_add_candles_rejects_stale_batch(make_candles) -> None:
    c = make_candles([1, 2, 3])
    series = TimeSeries("TEST", Interval.DAY_1, c)
    with pytest.raises(CandleOrderError):
        series.add_candles(make_candles([9, 9]))
    assert len(series) == 3


def test_interval_accepts_code() -> None:
    assert TimeSeries("TEST", "1h").interval is Interval.HOUR_1


def test_latest_and_last(make_series) -> None:
    series = make_series([1, 2, 3, 4])
    assert [c.close for c in series.latest(2)] == [3.0, 4.0]
    assert series.latest(0) == []
    assert series.last.close == 4.0
    assert TimeSeries("EMPTY", Interval.DAY_1).last is None


def test_numpy_accessors(make_series) -> None:
    series = make_series([1, 2, 3], volumes=[5, 6, 7])
    np.testing.assert_array_equal(series.closes(), [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(series.highs(count=2), [3.0, 4.0])
    np.testing.assert_array_equal(series.lows(count=1), [2.0])
    np.testing.assert_array_equal(series.volumes(), [5.0, 6.0, 7.0])
    np.testing.assert_array_equal(series.opens(), [1.0, 1.0, 2.0])
    np.testing.assert_allclose(series.typical_prices(), [1.0, 2.0, 3.0])
    assert series.closes().dtype == np.float64


def test_populate_resolves_dependencies(random_series) -> None:
    pmarp = IndicatorType.pmarp(5, 10, MAType.EMA)
    random_series.populate(pmarp)

    assert random_series.indicators == {
        IndicatorType.ema(5),
        IndicatorType.pmar(5, MAType.EMA),
        pmarp,
    }


def test_tracked_indicators_roll_forward_on_add(make_series, make_candles) -> None:
    series = make_series([10, 20, 30])
    series.populate(IndicatorType.sma(3))

    series.add_candle(make_candles([10, 20, 30, 60])[-1])

    assert series.last.get_indicator(IndicatorType.sma(3)).as_sma().value == pytest.approx(
        (20 + 30 + 60) / 3
    )


def test_eviction_keeps_absolute_position(make_candles) -> None:
    candles = make_candles([float(i) for i in range(1, 9)])
    series = TimeSeries("TEST", Interval.DAY_1, max_length=5)
    series.populate(IndicatorType.sma(3))

    series.add_candles(candles)

    assert len(series) == 5
    assert series.evicted == 3
    assert series.candles[0].close == 4.0
    assert series.last.get_indicator(IndicatorType.sma(3)).as_sma().value == pytest.approx(7.0)


def test_values_uses_nan_for_missing(make_series) -> None:
    series = make_series([1, 2, 3])
    series.populate(IndicatorType.sma(2))

    values = series.values(IndicatorType.sma(2))
    assert np.isnan(values[0])
    np.testing.assert_allclose(values[1:], [1.5, 2.5])
    assert np.isnan(series.values(IndicatorType.sma(3))).all()


def test_invalid_max_length() -> None:
    with pytest.raises(ValueError):
        TimeSeries("TEST", Interval.DAY_1, max_length=0)


def test_gaps_are_accepted_and_logged(make_candles, caplog) -> None:
    candles = make_candles([1, 2, 3])
    series = TimeSeries("TEST", Interval.DAY_1, candles[:1])

    with caplog.at_level(logging.DEBUG, logger="tradescope.marketdata.timeseries"):
        series.add_candle(candles[1])
        assert "Gap" not in caplog.text
        series.add_candle(Candle(candles[1].timestamp + timedelta(days=3), 2, 3, 1, 2))

    assert len(series) == 3
    assert "Gap in TEST 1d" in caplog.text

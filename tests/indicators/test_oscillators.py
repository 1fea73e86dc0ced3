import numpy as np
import pytest

from tradescope.indicators import IndicatorType


def test_atr_constant_true_range(make_series) -> None:
    closes = [110, 120, 130, 140, 150, 160]
    series = make_series(closes, highs=closes, lows=[c - 10 for c in closes])
    series.populate(IndicatorType.atr(5))

    values = series.values(IndicatorType.atr(5))
    assert np.isnan(values[:5]).all()
    assert values[5] == pytest.approx(10.0)


def test_atr_stays_at_constant_range(rising_series) -> None:
    rising_series.populate(IndicatorType.atr(5))
    np.testing.assert_allclose(rising_series.values(IndicatorType.atr(5))[5:], 10.0)


def test_rsi_all_gains_is_100(rising_series) -> None:
    rising_series.populate(IndicatorType.rsi(14))
    np.testing.assert_allclose(rising_series.values(IndicatorType.rsi(14))[14:], 100.0)


def test_rsi_flat_window_is_100(make_series) -> None:
    series = make_series([100.0] * 6)
    series.populate(IndicatorType.rsi(3))

    np.testing.assert_allclose(series.values(IndicatorType.rsi(3))[3:], 100.0)
    last = series.candles[-1].get_indicator(IndicatorType.rsi(3)).as_rsi()
    assert last.avg_gain == 0.0
    assert last.avg_loss == 0.0


def test_rsi_wilder_smoothing(make_series) -> None:
    series = make_series([10, 11, 10, 11])
    series.populate(IndicatorType.rsi(2))

    seed = series.candles[2].get_indicator(IndicatorType.rsi(2)).as_rsi()
    assert seed.value == pytest.approx(50.0)
    assert seed.avg_gain == pytest.approx(0.5)
    assert seed.avg_loss == pytest.approx(0.5)

    rolled = series.candles[3].get_indicator(IndicatorType.rsi(2)).as_rsi()
    assert rolled.avg_gain == pytest.approx(0.75)
    assert rolled.avg_loss == pytest.approx(0.25)
    assert rolled.value == pytest.approx(75.0)


def test_rsi_bounds(random_series) -> None:
    random_series.populate(IndicatorType.rsi(14))
    values = random_series.values(IndicatorType.rsi(14))[14:]
    assert ((values >= 0) & (values <= 100)).all()


def test_stochastic_flat_range_is_half(make_series) -> None:
    series = make_series([5.0] * 10, highs=[5.0] * 10, lows=[5.0] * 10)
    itype = IndicatorType.stochastic(3, 2, 2)
    series.populate(itype)

    last = series.last.get_indicator(itype).as_stochastic()
    assert last.k == pytest.approx(0.5)
    assert last.d == pytest.approx(0.5)


def test_stochastic_at_highs(rising_series) -> None:
    itype = IndicatorType.stochastic(5, 3, 3)
    rising_series.populate(itype)

    last = rising_series.last.get_indicator(itype).as_stochastic()
    assert last.k == pytest.approx(1.0)
    assert last.d == pytest.approx(1.0)


def test_stochastic_smoothing(make_series) -> None:
    # raw %K over the last window: 0.0, 1.0, 1.0
    closes = [10, 12, 11, 14, 16]
    series = make_series(closes, highs=closes, lows=closes)
    itype = IndicatorType.stochastic(2, 2, 2)
    series.populate(itype)

    values = series.candles[-1].get_indicator(itype).as_stochastic()
    # smoothed %K: 0.5 then 1.0
    assert values.k == pytest.approx(1.0)
    assert values.d == pytest.approx(0.75)


def test_stochastic_bounds(random_series) -> None:
    itype = IndicatorType.stochastic(14, 3, 3)
    random_series.populate(itype)
    for c in random_series.candles[itype.min_length() - 1 :]:
        s = c.get_indicator(itype).as_stochastic()
        assert 0.0 <= s.k <= 1.0
        assert 0.0 <= s.d <= 1.0

import numpy as np
import pytest

from tradescope.indicators import IndicatorType, get_calculator, IndicatorKind, LengthArgs


def _values(series, itype):
    return [c.get_indicator(itype).scalar() for c in series.candles]


def test_sma_value(make_series) -> None:
    series = make_series([100, 110, 120, 130, 140])
    series.populate(IndicatorType.sma(3))

    assert _values(series, IndicatorType.sma(3)) == [
        None,
        None,
        pytest.approx(110.0),
        pytest.approx(120.0),
        pytest.approx(130.0),
    ]


def test_sma_matches_numpy_rolling_mean(random_series, random_walk) -> None:
    closes = random_walk[0]
    random_series.populate(IndicatorType.sma(20))

    expected = np.convolve(closes, np.ones(20) / 20, mode="valid")
    got = random_series.values(IndicatorType.sma(20))[19:]
    np.testing.assert_allclose(got, expected, rtol=1e-10)


def test_sma_calculate_is_pure(make_candles) -> None:
    calc = get_calculator(IndicatorKind.SMA)
    segment = make_candles([120, 130, 140])

    assert calc.calculate(segment, LengthArgs(3)).value == pytest.approx(130.0)
    assert calc.calculate(segment[:2], LengthArgs(3)) is None
    assert all(not c.indicators for c in segment)


def test_ema_seed_and_recursion(make_series) -> None:
    series = make_series([1, 2, 3, 4, 5])
    series.populate(IndicatorType.ema(3))

    assert _values(series, IndicatorType.ema(3)) == [
        None,
        None,
        pytest.approx(2.0),
        pytest.approx(3.0),
        pytest.approx(4.0),
    ]


def test_ema_of_constant_series_is_constant(make_series) -> None:
    series = make_series([7.0] * 30)
    series.populate(IndicatorType.ema(10))
    np.testing.assert_allclose(series.values(IndicatorType.ema(10))[9:], 7.0)


def test_windows() -> None:
    sma = get_calculator(IndicatorKind.SMA)
    ema = get_calculator(IndicatorKind.EMA)
    assert sma.window_size(LengthArgs(8)) == 8
    assert sma.rolling_window_size(LengthArgs(8)) == 9
    assert ema.rolling_window_size(LengthArgs(8)) == 1

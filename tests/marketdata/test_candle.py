from datetime import datetime, timezone

import pytest

from tradescope.errors import IndicatorNotFoundError
from tradescope.indicators import SMA, Indicator, IndicatorKind, IndicatorType
from tradescope.marketdata import Candle


def test_timestamp_normalised_from_iso_string() -> None:
    c = Candle(timestamp="2025-01-15T12:30:00Z", open=1, high=2, low=0.5, close=1.5)
    assert c.timestamp == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)


def test_timestamp_normalised_from_ms() -> None:
    c = Candle(timestamp=1736899200000, open=1, high=2, low=0.5, close=1.5)
    assert c.timestamp == datetime(2025, 1, 15, tzinfo=timezone.utc)


def test_price_helpers() -> None:
    c = Candle(timestamp="2025-01-15", open=10, high=12, low=9, close=12)
    assert c.typical_price == pytest.approx(11.0)
    assert c.mid == pytest.approx(10.5)
    assert c.range == pytest.approx(3.0)


def test_get_indicator_absent_raises() -> None:
    c = Candle(timestamp="2025-01-15", open=1, high=1, low=1, close=1)
    with pytest.raises(IndicatorNotFoundError) as exc:
        c.get_indicator(IndicatorType.sma(3))
    assert "SMA(3)" in str(exc.value)
    # also a KeyError for callers treating the cache as a mapping
    assert isinstance(exc.value, KeyError)


def test_get_indicator_returns_not_computable_entry() -> None:
    c = Candle(timestamp="2025-01-15", open=1, high=1, low=1, close=1)
    c.indicators[IndicatorType.sma(3)] = Indicator(IndicatorKind.SMA, None)

    entry = c.get_indicator(IndicatorType.sma(3))
    assert not entry.is_ready
    assert c.has_indicator(IndicatorType.sma(3))


def test_indicators_do_not_affect_equality() -> None:
    a = Candle(timestamp="2025-01-15", open=1, high=2, low=0, close=1)
    b = Candle(timestamp="2025-01-15", open=1, high=2, low=0, close=1)
    a.indicators[IndicatorType.sma(1)] = Indicator(IndicatorKind.SMA, SMA(1.0))
    assert a == b

# tests/conftest.py
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from tradescope.events import reset_dispatcher
from tradescope.marketdata import Candle, Interval, TimeSeries

# 2024-01-01 is a Monday
BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _make_candles(closes, highs=None, lows=None, volumes=None, start=0):
    candles = []
    for i, close in enumerate(closes):
        close = float(close)
        candles.append(
            Candle(
                timestamp=BASE + timedelta(days=start + i),
                open=float(closes[i - 1]) if i else close,
                high=float(highs[i]) if highs is not None else close + 1.0,
                low=float(lows[i]) if lows is not None else close - 1.0,
                close=close,
                volume=float(volumes[i]) if volumes is not None else 1.0,
            )
        )
    return candles


@pytest.fixture(autouse=True)
def fresh_dispatcher():
    reset_dispatcher()
    yield
    reset_dispatcher()


@pytest.fixture
def make_candles():
    """Factory: daily candles from closes, high/low one point either side by default."""
    return _make_candles


@pytest.fixture
def make_series():
    def _make(closes, highs=None, lows=None, volumes=None, **kwargs):
        return TimeSeries(
            "TEST",
            Interval.DAY_1,
            _make_candles(closes, highs, lows, volumes),
            **kwargs,
        )

    return _make


@pytest.fixture
def rising_series(make_series):
    """Closes 100..390 in steps of 10, every true range exactly 10."""
    closes = [100 + 10 * i for i in range(30)]
    return make_series(closes, highs=closes, lows=[c - 10 for c in closes])


@pytest.fixture
def alternating_series(make_series):
    closes = [100 + (5 if i % 2 else 0) for i in range(40)]
    return make_series(closes)


@pytest.fixture
def random_walk():
    """Seeded OHLCV arrays for a 400-bar random walk."""
    rng = np.random.default_rng(42)
    n = 400
    closes = 100 + np.cumsum(rng.normal(0, 1, n))
    highs = closes + rng.uniform(0.1, 2.0, n)
    lows = closes - rng.uniform(0.1, 2.0, n)
    volumes = rng.uniform(1.0, 10.0, n)
    return closes, highs, lows, volumes


@pytest.fixture
def random_series(make_series, random_walk):
    closes, highs, lows, volumes = random_walk
    return make_series(closes, highs, lows, volumes)

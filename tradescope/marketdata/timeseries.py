from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from tradescope.config import default_config
from tradescope.errors import CandleOrderError
from tradescope.indicators.registry import dependency_order, populate_all, populate_last
from tradescope.indicators.types import IndicatorType
from tradescope.marketdata.candle import Candle
from tradescope.marketdata.interval import Interval
from tradescope.marketdata.loader import read_candles_csv
from tradescope.time_utils import to_iso

log = logging.getLogger(__name__)


class TimeSeries:
    """
    Ordered candles for one ticker and interval, plus the indicator types
    populated on them.

    Every type in ``indicators`` is kept up to date as candles are added.
    When ``max_length`` is set the oldest candles are evicted once it is
    exceeded; ``evicted`` counts them so ``evicted + i`` is the absolute
    position of ``candles[i]``.

    Example:
        series = TimeSeries("BTCUSD", Interval.HOUR_1, max_length=800)
        series.add_candles(history)
        series.populate(IndicatorType.rsi(14), IndicatorType.bbwp(13, 252))
        series.add_candle(candle)  # RSI and BBWP (and BBW) roll forward

        closes = series.closes(count=20)  # last 20 closes
    """

    def __init__(
        self,
        ticker: str,
        interval: Interval,
        candles: Optional[Iterable[Candle]] = None,
        max_length: Optional[int] = None,
        reseed_interval: Optional[int] = None,
    ):
        if max_length is not None and max_length < 1:
            raise ValueError("max_length must be >= 1")
        self.ticker = ticker
        self.interval = Interval(interval)
        self.max_length = max_length
        self.reseed_interval = reseed_interval or default_config().reseed_interval
        self.candles: list[Candle] = []
        self.indicators: set[IndicatorType] = set()
        self.evicted = 0
        if candles is not None:
            self.add_candles(candles)

    @classmethod
    def from_csv(
        cls,
        path: Path | str,
        ticker: str,
        interval: Interval,
        max_length: Optional[int] = None,
    ) -> TimeSeries:
        return cls(ticker, interval, read_candles_csv(path), max_length=max_length)

    def _check_after(self, previous: Optional[Candle], candle: Candle) -> None:
        if previous is not None and candle.timestamp <= previous.timestamp:
            kind = "Duplicate" if candle.timestamp == previous.timestamp else "Out of order"
            raise CandleOrderError(
                f"{kind} candle for {self.ticker}: {to_iso(candle.timestamp)} "
                f"is not after {to_iso(previous.timestamp)}"
            )

    def add_candle(self, candle: Candle) -> None:
        """
        Append a candle and roll every tracked indicator forward onto it.

        Raises ``CandleOrderError`` unless the candle is strictly newer than
        the current last candle.
        """
        previous = self.last
        self._check_after(previous, candle)
        if previous is not None and not self.interval.is_subsequent(
            previous.timestamp, candle.timestamp
        ):
            log.debug(
                "Gap in %s %s before %s",
                self.ticker,
                self.interval.value,
                to_iso(candle.timestamp),
            )
        self.candles.append(candle)
        for itype in dependency_order(self.indicators):
            populate_last(self, itype)
        self._evict()

    def add_candles(self, candles: Iterable[Candle]) -> None:
        """
        Append a batch of candles atomically.

        The whole batch is validated before anything is applied; a rejected
        batch leaves the series untouched.
        """
        batch = list(candles)
        previous = self.last
        for candle in batch:
            self._check_after(previous, candle)
            previous = candle
        for candle in batch:
            self.add_candle(candle)

    def populate(self, *types: IndicatorType) -> None:
        """
        Compute ``types`` over every candle, populating missing dependencies
        first. Requested types are always recomputed.
        """
        requested = set(types)
        for itype in dependency_order(requested):
            if itype in requested or itype not in self.indicators:
                populate_all(self, itype)

    def _evict(self) -> None:
        if self.max_length is None:
            return
        excess = len(self.candles) - self.max_length
        if excess > 0:
            del self.candles[:excess]
            self.evicted += excess

    def latest(self, n: int) -> list[Candle]:
        """Return the last ``n`` candles, oldest first."""
        if n <= 0:
            return []
        return self.candles[-n:]

    @property
    def last(self) -> Optional[Candle]:
        """Get the most recent candle, or None if empty."""
        return self.candles[-1] if self.candles else None

    def _window(self, count: Optional[int]) -> list[Candle]:
        return self.candles if count is None else self.latest(count)

    def opens(self, count: Optional[int] = None) -> np.ndarray:
        return np.array([c.open for c in self._window(count)], dtype=np.float64)

    def highs(self, count: Optional[int] = None) -> np.ndarray:
        return np.array([c.high for c in self._window(count)], dtype=np.float64)

    def lows(self, count: Optional[int] = None) -> np.ndarray:
        return np.array([c.low for c in self._window(count)], dtype=np.float64)

    def closes(self, count: Optional[int] = None) -> np.ndarray:
        """Get array of closing prices, oldest first."""
        return np.array([c.close for c in self._window(count)], dtype=np.float64)

    def volumes(self, count: Optional[int] = None) -> np.ndarray:
        return np.array([c.volume for c in self._window(count)], dtype=np.float64)

    def typical_prices(self, count: Optional[int] = None) -> np.ndarray:
        """Get array of typical prices (HLC/3)."""
        return np.array([c.typical_price for c in self._window(count)], dtype=np.float64)

    def values(self, indicator_type: IndicatorType, count: Optional[int] = None) -> np.ndarray:
        """Headline indicator values as floats, NaN where not computable or absent."""
        out = []
        for c in self._window(count):
            entry = c.indicators.get(indicator_type)
            value = entry.scalar() if entry is not None else None
            out.append(np.nan if value is None else value)
        return np.array(out, dtype=np.float64)

    def __len__(self) -> int:
        return len(self.candles)

    def __repr__(self) -> str:
        return (
            f"TimeSeries(ticker={self.ticker}, interval={self.interval.value}, "
            f"candles={len(self)}, indicators={len(self.indicators)})"
        )

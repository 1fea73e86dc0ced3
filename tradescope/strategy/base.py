"""
Base framework for trading strategies.

A strategy looks at a trailing window of candles whose indicators are
already populated and decides whether the last candle opens a setup.
Subclasses implement ``signal_indicators`` and ``detect``; everything else
(trading-day filtering, setup construction, scanning a series) lives here.
"""

import abc
import logging
from typing import ClassVar, Iterable, Optional, Sequence

from tradescope.indicators.types import IndicatorType
from tradescope.marketdata.candle import Candle
from tradescope.marketdata.interval import Interval
from tradescope.marketdata.timeseries import TimeSeries
from tradescope.resolution.base import ResolutionStrategy
from tradescope.setups import Setup
from tradescope.types import Orientation


log = logging.getLogger(__name__)


__all__ = ["ALL_DAYS", "TradingStrategy"]


# datetime.weekday() numbering, Monday == 0
ALL_DAYS = frozenset(range(7))


class TradingStrategy(abc.ABC):
    """
    Base class for all trading strategies.

    Example:
        class Breakout(TradingStrategy):
            name = "Breakout"

            def signal_indicators(self):
                return (IndicatorType.atr(14),)

            def detect(self, window):
                if window[-1].close > window[-2].high:
                    return Orientation.LONG
                return None

            def default_resolution_strategy(self):
                return AtrResolution(14, 1.0, 2.0)
    """

    name: ClassVar[str] = "Strategy"
    interval: ClassVar[Interval] = Interval.DAY_1

    def __init__(self, trading_days: Optional[Iterable[int]] = None):
        self._trading_days = frozenset(trading_days) if trading_days is not None else ALL_DAYS

    @property
    def trading_days(self) -> frozenset[int]:
        """Weekdays (Monday == 0) on which setups may open."""
        return self._trading_days

    @abc.abstractmethod
    def signal_indicators(self) -> tuple[IndicatorType, ...]:
        """Indicators read by ``detect``."""

    @abc.abstractmethod
    def detect(self, window: Sequence[Candle]) -> Optional[Orientation]:
        """Return the orientation of a setup on ``window[-1]``, or None."""

    @abc.abstractmethod
    def default_resolution_strategy(self) -> ResolutionStrategy:
        """
        A new, unbound resolution strategy.

        Must return a fresh instance on every call: each setup binds its own.
        """

    def required_indicators(self) -> tuple[IndicatorType, ...]:
        """Indicators for detection plus those the default resolution reads."""
        combined = list(self.signal_indicators())
        for t in self.default_resolution_strategy().required_indicators():
            if t not in combined:
                combined.append(t)
        return tuple(combined)

    def candles_needed_for_setup(self) -> int:
        return 2

    def min_length(self) -> int:
        """Candles a series needs before the first setup can possibly fire."""
        longest = max((t.min_length() for t in self.required_indicators()), default=1)
        return longest + self.candles_needed_for_setup() - 1

    def check_last_for_setup(self, window: Sequence[Candle]) -> Optional[Orientation]:
        """Check whether the last candle of ``window`` opens a setup."""
        if len(window) < self.candles_needed_for_setup():
            return None
        if window[-1].timestamp.weekday() not in self._trading_days:
            return None
        return self.detect(window)

    def build_setup(
        self, candle: Candle, orientation: Orientation, ticker: str, interval: Interval
    ) -> Setup:
        return Setup.create(
            candle, ticker, interval, orientation, self.default_resolution_strategy()
        )

    def find_setups(self, series: TimeSeries) -> list[Setup]:
        """Scan every window of ``series`` and return all setups, oldest first.

        Missing indicators are populated on the series first.
        """
        missing = [t for t in self.required_indicators() if t not in series.indicators]
        if missing:
            series.populate(*missing)

        needed = self.candles_needed_for_setup()
        setups = []
        for end in range(needed, len(series.candles) + 1):
            window = series.candles[end - needed : end]
            orientation = self.check_last_for_setup(window)
            if orientation is not None:
                setups.append(
                    self.build_setup(window[-1], orientation, series.ticker, series.interval)
                )

        log.debug("%s found %d setups in %s", self.name, len(setups), series.ticker)
        return setups

    def __str__(self) -> str:
        return self.name

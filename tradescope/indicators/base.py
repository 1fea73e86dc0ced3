"""
Shared population machinery for indicator calculators.

A calculator knows how to compute one indicator kind from a window of
candles (``calculate``) and how to advance a previous value by one bar
(``calculate_rolling``). ``populate_all`` and ``populate_last`` drive those
two primitives over a series and write the results into each candle's
indicator cache.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Optional, Sequence

from tradescope.errors import MissingDependencyError, PopulationError
from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.results import Indicator, IndicatorResult
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle
    from tradescope.marketdata.timeseries import TimeSeries

log = logging.getLogger(__name__)


class IndicatorCalculator(ABC):
    """Computes one indicator kind over a time series.

    Subclasses set ``kind`` and implement ``window_size``, ``calculate`` and
    ``indicator_type``. Kinds with an O(1) update override
    ``rolling_window_size`` and ``calculate_rolling``; the default rolling
    step recomputes from scratch. Kinds whose rolling update accumulates
    floating point drift over a finite window set ``reseeds`` so population
    recomputes them periodically.
    """

    kind: ClassVar[IndicatorKind]
    reseeds: ClassVar[bool] = False

    @abstractmethod
    def window_size(self, args: IndicatorArgs) -> int:
        """Number of candles ``calculate`` needs."""

    def rolling_window_size(self, args: IndicatorArgs) -> int:
        """Number of trailing candles ``calculate_rolling`` needs."""
        return self.window_size(args)

    @abstractmethod
    def calculate(
        self, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[IndicatorResult]:
        """Compute the value for the last candle of ``segment`` from scratch."""

    def calculate_rolling(
        self,
        previous: IndicatorResult,
        segment: Sequence[Candle],
        args: IndicatorArgs,
    ) -> Optional[IndicatorResult]:
        """Advance ``previous`` by one bar; ``segment`` ends at the new candle."""
        return self.calculate(segment[-self.window_size(args):], args)

    @abstractmethod
    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        """Cache key under which results for ``args`` are stored."""

    def required_types(self, args: IndicatorArgs) -> tuple[IndicatorType, ...]:
        return self.indicator_type(args).dependencies()

    def check_dependencies(self, series: TimeSeries, args: IndicatorArgs) -> None:
        missing = [t for t in self.required_types(args) if t not in series.indicators]
        if missing:
            raise MissingDependencyError(self.indicator_type(args), missing)

    def populate_all(self, series: TimeSeries, args: IndicatorArgs) -> None:
        """Compute the indicator for every candle of ``series``."""
        itype = self.indicator_type(args)
        self.check_dependencies(series, args)

        previous: Optional[IndicatorResult] = None
        for i, candle in enumerate(series.candles):
            result = self._step(series, i, previous, args, itype)
            candle.indicators[itype] = Indicator(self.kind, result)
            previous = result

        series.indicators.add(itype)
        log.debug("Populated %s over %d candles of %s", itype, len(series), series.ticker)

    def populate_last(self, series: TimeSeries, args: IndicatorArgs) -> None:
        """Compute the indicator for the newest candle only.

        Rolls forward from the previous candle's cached value, falling back
        to a full ``calculate`` when there is none.
        """
        itype = self.indicator_type(args)
        self.check_dependencies(series, args)

        candles = series.candles
        if not candles:
            return
        i = len(candles) - 1
        previous = self.cached(candles[i - 1], itype) if i > 0 else None
        candles[i].indicators[itype] = Indicator(
            self.kind, self._step(series, i, previous, args, itype)
        )
        series.indicators.add(itype)

    @staticmethod
    def cached(candle: Candle, itype: IndicatorType) -> Optional[IndicatorResult]:
        entry = candle.indicators.get(itype)
        return entry.result if entry is not None else None

    def _step(
        self,
        series: TimeSeries,
        i: int,
        previous: Optional[IndicatorResult],
        args: IndicatorArgs,
        itype: IndicatorType,
    ) -> Optional[IndicatorResult]:
        window = self.window_size(args)
        if i + 1 < window:
            return None

        candles = series.candles
        try:
            if previous is None or self._reseed_due(series, i):
                return self.calculate(candles[i + 1 - window : i + 1], args)
            start = max(0, i + 1 - self.rolling_window_size(args))
            return self.calculate_rolling(previous, candles[start : i + 1], args)
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise PopulationError(itype, i, str(exc)) from exc

    def _reseed_due(self, series: TimeSeries, i: int) -> bool:
        return self.reseeds and (series.evicted + i) % series.reseed_interval == 0

"""
Walk-forward backtester.

For every bar where the strategy fires, the setup is stepped forward one bar
at a time until its resolution strategy stops it out or takes profit. Stop
loss is checked before take profit on each bar, so a bar that touches both
counts as a loss. Setups that stay open for ``max_bars`` or run off the end
of the data are dropped. Scanning resumes after the last examined bar, so
positions never overlap.
"""

import asyncio
import logging
from typing import Iterable, Optional

from tradescope.backtest.result import (
    Outcome,
    OutcomeKind,
    StrategyTestResult,
    StrategyTestResultBuilder,
)
from tradescope.config import EngineConfig, default_config
from tradescope.marketdata.candle import Candle
from tradescope.marketdata.timeseries import TimeSeries
from tradescope.setups import Setup
from tradescope.strategy.base import TradingStrategy

log = logging.getLogger(__name__)


def _trailing(candles: list[Candle], end: int, n: int) -> Optional[list[Candle]]:
    """The ``n`` candles ending at ``end``, or None when the series is too short."""
    n = max(n, 1)
    if end + 1 < n:
        return None
    return candles[end + 1 - n : end + 1]


class StrategyTester:
    def __init__(
        self,
        max_bars: Optional[int] = None,
        initial_account: Optional[float] = None,
        config: Optional[EngineConfig] = None,
    ):
        config = config or default_config()
        self.max_bars = max_bars if max_bars is not None else config.max_bars
        self.initial_account = (
            initial_account if initial_account is not None else config.initial_account
        )
        if self.max_bars < 1:
            raise ValueError("max_bars must be >= 1")

    def test_strategy(
        self, strategy: TradingStrategy, series: TimeSeries
    ) -> StrategyTestResult:
        """Backtest ``strategy`` over every candle of ``series``.

        Indicators the strategy needs are populated first when missing;
        otherwise the series is only read.
        """
        missing = [t for t in strategy.required_indicators() if t not in series.indicators]
        if missing:
            series.populate(*missing)

        candles = series.candles
        needed = strategy.candles_needed_for_setup()
        builder = StrategyTestResultBuilder(self.initial_account)

        i = needed - 1
        while i < len(candles):
            orientation = strategy.check_last_for_setup(candles[i + 1 - needed : i + 1])
            if orientation is None:
                i += 1
                continue

            setup = strategy.build_setup(candles[i], orientation, series.ticker, series.interval)
            i = self._resolve(setup, candles, i, builder) + 1

        result = builder.build()
        if result.n_dropped:
            log.warning(
                "%s on %s: %d setups dropped unresolved (max_bars=%d)",
                strategy,
                series.ticker,
                result.n_dropped,
                self.max_bars,
            )
        log.info(
            "%s on %s: %d setups, accuracy %.2f, ending account %.2f",
            strategy,
            series.ticker,
            result.n_setups,
            result.accuracy,
            result.ending_account,
        )
        return result

    def _resolve(
        self,
        setup: Setup,
        candles: list[Candle],
        start: int,
        builder: StrategyTestResultBuilder,
    ) -> int:
        """Step ``setup`` forward from ``start``; return the last index examined."""
        resolution = setup.resolution_strategy
        orientation = setup.orientation
        n_sl = resolution.n_candles_stop_loss()
        n_tp = resolution.n_candles_take_profit()

        for bars in range(1, self.max_bars + 1):
            end = start + bars
            if end >= len(candles):
                log.debug("Setup at %s ran out of data", setup.candle.timestamp)
                builder.add_dropped()
                return len(candles) - 1

            # a check whose trailing window reaches before the series start is not reached
            stop_window = _trailing(candles, end, n_sl)
            profit_window = _trailing(candles, end, n_tp)
            kind = None
            if stop_window is not None and resolution.stop_loss_reached(orientation, stop_window):
                kind = OutcomeKind.LOSS
            elif profit_window is not None and resolution.take_profit_reached(
                orientation, profit_window
            ):
                kind = OutcomeKind.WIN

            if kind is not None:
                change = candles[end].close / setup.entry_price - 1.0
                builder.add_outcome(
                    Outcome(
                        timestamp=setup.candle.timestamp,
                        orientation=orientation,
                        kind=kind,
                        profitability=change * orientation.sign,
                        bars=bars,
                    )
                )
                return end

        log.debug("Setup at %s timed out after %d bars", setup.candle.timestamp, self.max_bars)
        builder.add_dropped()
        return start + self.max_bars


async def test_strategies(
    strategies: Iterable[TradingStrategy],
    series: TimeSeries,
    tester: Optional[StrategyTester] = None,
) -> list[StrategyTestResult]:
    """
    Backtest several strategies over the same series concurrently.

    All required indicators are populated up front so the worker threads
    only read the series. Results are returned in strategy order.
    """
    strategies = list(strategies)
    tester = tester or StrategyTester()

    required = []
    for s in strategies:
        required += [t for t in s.required_indicators() if t not in series.indicators]
    if required:
        series.populate(*required)

    return list(
        await asyncio.gather(
            *(asyncio.to_thread(tester.test_strategy, s, series) for s in strategies)
        )
    )

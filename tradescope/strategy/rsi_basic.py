from typing import Iterable, Optional, Sequence

from tradescope.indicators.types import IndicatorType
from tradescope.marketdata.candle import Candle
from tradescope.resolution.base import ResolutionStrategy
from tradescope.resolution.percentage import PercentageResolution
from tradescope.strategy.base import TradingStrategy
from tradescope.types import Orientation


class RsiBasic(TradingStrategy):
    """
    Enters when RSI returns from an extreme.

    A long fires when RSI crosses back above ``lower_band``. With
    ``allow_short`` a short fires when it crosses back below ``upper_band``.
    Resolved at +/-5% of entry.
    """

    name = "RSI Basic"

    def __init__(
        self,
        length: int = 14,
        upper_band: float = 70.0,
        lower_band: float = 30.0,
        allow_short: bool = False,
        trading_days: Optional[Iterable[int]] = None,
    ):
        super().__init__(trading_days)
        self.length = length
        self.upper_band = upper_band
        self.lower_band = lower_band
        self.allow_short = allow_short

    def signal_indicators(self) -> tuple[IndicatorType, ...]:
        return (IndicatorType.rsi(self.length),)

    def detect(self, window: Sequence[Candle]) -> Optional[Orientation]:
        key = IndicatorType.rsi(self.length)
        prev = window[-2].indicators.get(key)
        current = window[-1].indicators.get(key)
        if prev is None or current is None:
            return None
        prev_rsi = prev.as_rsi()
        current_rsi = current.as_rsi()
        if prev_rsi is None or current_rsi is None:
            return None

        if prev_rsi.value < self.lower_band < current_rsi.value:
            return Orientation.LONG
        if self.allow_short and prev_rsi.value > self.upper_band > current_rsi.value:
            return Orientation.SHORT
        return None

    def default_resolution_strategy(self) -> ResolutionStrategy:
        return PercentageResolution(drawdown=5.0, take_profit=5.0)

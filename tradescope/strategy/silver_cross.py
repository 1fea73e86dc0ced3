from typing import Iterable, Optional, Sequence

from tradescope.indicators.types import IndicatorType
from tradescope.marketdata.candle import Candle
from tradescope.resolution.atr import AtrResolution
from tradescope.resolution.base import ResolutionStrategy
from tradescope.strategy.base import TradingStrategy
from tradescope.types import Orientation


class SilverCross(TradingStrategy):
    """The fast SMA (21) crossing the slow SMA (55), in either direction."""

    name = "Silver Cross"

    def __init__(
        self,
        short_length: int = 21,
        long_length: int = 55,
        trading_days: Optional[Iterable[int]] = None,
    ):
        super().__init__(trading_days)
        if short_length >= long_length:
            raise ValueError("short_length must be below long_length")
        self.short_length = short_length
        self.long_length = long_length

    def signal_indicators(self) -> tuple[IndicatorType, ...]:
        return (IndicatorType.sma(self.short_length), IndicatorType.sma(self.long_length))

    def _smas(self, candle: Candle) -> Optional[tuple[float, float]]:
        fast = candle.indicators.get(IndicatorType.sma(self.short_length))
        slow = candle.indicators.get(IndicatorType.sma(self.long_length))
        if fast is None or slow is None or not (fast.is_ready and slow.is_ready):
            return None
        return fast.as_sma().value, slow.as_sma().value

    def detect(self, window: Sequence[Candle]) -> Optional[Orientation]:
        prev = self._smas(window[-2])
        current = self._smas(window[-1])
        if prev is None or current is None:
            return None

        (prev_fast, prev_slow), (fast, slow) = prev, current
        if prev_fast < prev_slow and fast >= slow:
            return Orientation.LONG
        if prev_fast > prev_slow and fast <= slow:
            return Orientation.SHORT
        return None

    def default_resolution_strategy(self) -> ResolutionStrategy:
        return AtrResolution(length=14, stop_loss_multiple=1.0, take_profit_multiple=1.5)

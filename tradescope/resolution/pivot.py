from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from tradescope.indicators.types import IndicatorType
from tradescope.resolution.base import ResolutionStrategy
from tradescope.types import Orientation

if TYPE_CHECKING:
    from tradescope.indicators.results import DynamicPivot
    from tradescope.marketdata.candle import Candle


class DynamicPivotResolution(ResolutionStrategy):
    """
    Resolves against the most recently confirmed pivot levels.

    A pivot of length ``k`` is only known ``k`` bars after its centre, so the
    levels are read from the candle ``k`` bars before the one being checked.
    Longs stop on a close below the pivot low and take profit on a high above
    the pivot high; shorts mirror that.
    """

    def __init__(self, length: int = 15):
        super().__init__()
        if length < 0:
            raise ValueError("length must be >= 0")
        self.length = length

    @property
    def indicator_type(self) -> IndicatorType:
        return IndicatorType.dynamic_pivot(self.length)

    def n_candles_stop_loss(self) -> int:
        return self.length + 1

    def n_candles_take_profit(self) -> int:
        return self.length + 1

    def required_indicators(self) -> tuple[IndicatorType, ...]:
        return (self.indicator_type,)

    def _pivots(self, window: Sequence[Candle]) -> DynamicPivot | None:
        confirmed = window[-(self.length + 1)]
        return self._indicator(confirmed, self.indicator_type).as_dynamic_pivot()

    def _stop_loss_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        pivots = self._pivots(window)
        if pivots is None:
            return False
        close = window[-1].close
        if orientation == Orientation.LONG:
            return close < pivots.low
        return close > pivots.high

    def _take_profit_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        pivots = self._pivots(window)
        if pivots is None:
            return False
        candle = window[-1]
        if orientation == Orientation.LONG:
            return candle.high > pivots.high
        return candle.low < pivots.low

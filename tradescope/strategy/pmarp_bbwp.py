from typing import Iterable, Optional, Sequence

from tradescope.indicators.types import IndicatorType, MAType
from tradescope.marketdata.candle import Candle
from tradescope.marketdata.interval import Interval
from tradescope.resolution.base import ResolutionStrategy
from tradescope.resolution.composite import pmarp_or_bbwp_vs_percentage
from tradescope.strategy.base import TradingStrategy
from tradescope.types import Orientation


# Monday, Tuesday, Wednesday, Friday, Saturday
DEFAULT_TRADING_DAYS = frozenset({0, 1, 2, 4, 5})


class PmarpBbwpReversal(TradingStrategy):
    """
    Long entries out of quiet, depressed markets.

    Entry when BBWP is below 0.5 with its SMA sloping down and PMARP is
    below 0.2. Takes profit when PMARP rises above 0.65 or BBWP above 0.80,
    stops out on a 3% drawdown. Skips Thursdays and Sundays by default.
    """

    name = "PMARP/BBWP Reversal"
    interval = Interval.MINUTE_15

    def __init__(
        self,
        pmarp_length: int = 21,
        pmarp_lookback: int = 100,
        pmarp_ma_type: MAType = MAType.EMA,
        bbwp_length: int = 13,
        bbwp_lookback: int = 252,
        bbwp_sma_length: int = 5,
        trading_days: Optional[Iterable[int]] = DEFAULT_TRADING_DAYS,
    ):
        super().__init__(trading_days)
        self.pmarp = IndicatorType.pmarp(pmarp_length, pmarp_lookback, pmarp_ma_type)
        self.bbwp = IndicatorType.bbwp(bbwp_length, bbwp_lookback, bbwp_sma_length)

    def signal_indicators(self) -> tuple[IndicatorType, ...]:
        return (self.pmarp, self.bbwp)

    def detect(self, window: Sequence[Candle]) -> Optional[Orientation]:
        current, previous = window[-1], window[-2]
        entries = (
            current.indicators.get(self.pmarp),
            current.indicators.get(self.bbwp),
            previous.indicators.get(self.bbwp),
        )
        if any(e is None or not e.is_ready for e in entries):
            return None

        pmarp = entries[0].as_pmarp()
        bbwp = entries[1].as_bbwp()
        prev_bbwp = entries[2].as_bbwp()
        if bbwp.sma is None or prev_bbwp.sma is None:
            return None

        if bbwp.sma < prev_bbwp.sma and bbwp.value < 0.5 and pmarp.value < 0.2:
            return Orientation.LONG
        return None

    def default_resolution_strategy(self) -> ResolutionStrategy:
        return pmarp_or_bbwp_vs_percentage(
            drawdown=3.0,
            pmarp_threshold=0.65,
            bbwp_threshold=0.80,
            pmarp=self.pmarp,
            bbwp=self.bbwp,
        )

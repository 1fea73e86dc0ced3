"""Bollinger Band Width Percentile."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.percentile import percent_rank
from tradescope.indicators.results import BBWP
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


class BBWPCalculator(IndicatorCalculator):
    """
    Percentile of the current BBW within the preceding ``lookback`` values.

    ``sma`` averages the last ``sma_length`` BBWP values and stays None until
    that many exist. The rolling step reads earlier BBWP values from the
    candles' own cache.
    """

    kind = IndicatorKind.BBWP

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        a = args.extract_bbwp()
        return IndicatorType.bbwp(a.length, a.lookback, a.sma_length)

    def window_size(self, args: IndicatorArgs) -> int:
        return args.extract_bbwp().lookback + 1

    def rolling_window_size(self, args: IndicatorArgs) -> int:
        a = args.extract_bbwp()
        return max(a.lookback + 1, a.sma_length)

    def calculate(self, segment: Sequence[Candle], args: IndicatorArgs) -> Optional[BBWP]:
        a = args.extract_bbwp()
        value = percent_rank(segment, IndicatorType.bbw(a.length), a.lookback)
        if value is None:
            return None
        return BBWP(value, value if a.sma_length == 1 else None)

    def calculate_rolling(
        self, previous: BBWP, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[BBWP]:
        a = args.extract_bbwp()
        value = percent_rank(segment, IndicatorType.bbw(a.length), a.lookback)
        if value is None:
            return None

        itype = self.indicator_type(args)
        history = [value]
        for candle in segment[max(0, len(segment) - a.sma_length) : -1]:
            earlier = self.cached(candle, itype)
            if earlier is None:
                return BBWP(value, None)
            history.append(earlier.value)
        if len(history) < a.sma_length:
            return BBWP(value, None)
        return BBWP(value, sum(history) / a.sma_length)

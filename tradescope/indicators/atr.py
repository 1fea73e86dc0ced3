from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.results import ATR
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


def true_range(previous: Candle, current: Candle) -> float:
    return max(
        current.high - current.low,
        abs(current.high - previous.close),
        abs(current.low - previous.close),
    )


class ATRCalculator(IndicatorCalculator):
    """Average True Range with Wilder smoothing. Needs L true ranges, so L + 1 candles."""

    kind = IndicatorKind.ATR

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        return IndicatorType.atr(args.extract_len())

    def window_size(self, args: IndicatorArgs) -> int:
        return args.extract_len() + 1

    def rolling_window_size(self, args: IndicatorArgs) -> int:
        return 2

    def calculate(self, segment: Sequence[Candle], args: IndicatorArgs) -> Optional[ATR]:
        length = args.extract_len()
        if len(segment) < length + 1:
            return None
        window = segment[-(length + 1):]
        ranges = [true_range(p, c) for p, c in zip(window, window[1:])]
        return ATR(sum(ranges) / length)

    def calculate_rolling(
        self, previous: ATR, segment: Sequence[Candle], args: IndicatorArgs
    ) -> ATR:
        length = args.extract_len()
        tr = true_range(segment[-2], segment[-1])
        return ATR((previous.value * (length - 1) + tr) / length)

"""Relative Strength Index with Wilder smoothing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.results import RSI
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


def rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


class RSICalculator(IndicatorCalculator):
    kind = IndicatorKind.RSI

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        return IndicatorType.rsi(args.extract_len())

    def window_size(self, args: IndicatorArgs) -> int:
        # L deltas need L + 1 closes
        return args.extract_len() + 1

    def rolling_window_size(self, args: IndicatorArgs) -> int:
        return 2

    def calculate(self, segment: Sequence[Candle], args: IndicatorArgs) -> Optional[RSI]:
        length = args.extract_len()
        if len(segment) < length + 1:
            return None
        window = segment[-(length + 1):]
        gains = 0.0
        losses = 0.0
        for prev, cur in zip(window, window[1:]):
            delta = cur.close - prev.close
            if delta > 0:
                gains += delta
            else:
                losses -= delta
        avg_gain = gains / length
        avg_loss = losses / length
        return RSI(rsi_value(avg_gain, avg_loss), avg_gain, avg_loss)

    def calculate_rolling(
        self, previous: RSI, segment: Sequence[Candle], args: IndicatorArgs
    ) -> RSI:
        length = args.extract_len()
        delta = segment[-1].close - segment[-2].close
        avg_gain = (previous.avg_gain * (length - 1) + max(delta, 0.0)) / length
        avg_loss = (previous.avg_loss * (length - 1) + max(-delta, 0.0)) / length
        return RSI(rsi_value(avg_gain, avg_loss), avg_gain, avg_loss)

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.results import EMA
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


def smoothing(length: int) -> float:
    return 2.0 / (length + 1)


class EMACalculator(IndicatorCalculator):
    """Exponential moving average of closes, seeded with the SMA of the first window."""

    kind = IndicatorKind.EMA

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        return IndicatorType.ema(args.extract_len())

    def window_size(self, args: IndicatorArgs) -> int:
        return args.extract_len()

    def rolling_window_size(self, args: IndicatorArgs) -> int:
        return 1

    def calculate(self, segment: Sequence[Candle], args: IndicatorArgs) -> Optional[EMA]:
        length = args.extract_len()
        if len(segment) < length:
            return None
        closes = np.array([c.close for c in segment[-length:]], dtype=np.float64)
        return EMA(float(closes.mean()))

    def calculate_rolling(
        self, previous: EMA, segment: Sequence[Candle], args: IndicatorArgs
    ) -> EMA:
        price = segment[-1].close
        return EMA(previous.value + (price - previous.value) * smoothing(args.extract_len()))

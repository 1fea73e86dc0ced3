from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.results import SMA
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


class SMACalculator(IndicatorCalculator):
    """Simple moving average of closes."""

    kind = IndicatorKind.SMA
    reseeds = True

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        return IndicatorType.sma(args.extract_len())

    def window_size(self, args: IndicatorArgs) -> int:
        return args.extract_len()

    def rolling_window_size(self, args: IndicatorArgs) -> int:
        # one extra candle to see the close leaving the window
        return args.extract_len() + 1

    def calculate(self, segment: Sequence[Candle], args: IndicatorArgs) -> Optional[SMA]:
        length = args.extract_len()
        if len(segment) < length:
            return None
        closes = np.array([c.close for c in segment[-length:]], dtype=np.float64)
        return SMA(float(closes.mean()))

    def calculate_rolling(
        self, previous: SMA, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[SMA]:
        length = args.extract_len()
        if len(segment) < length + 1:
            return self.calculate(segment, args)
        entering = segment[-1].close
        leaving = segment[-length - 1].close
        return SMA(previous.value + (entering - leaving) / length)

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.results import Stochastic
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


def raw_k(window: Sequence[Candle]) -> float:
    highest = max(c.high for c in window)
    lowest = min(c.low for c in window)
    if highest == lowest:
        return 0.5
    return (window[-1].close - lowest) / (highest - lowest)


class StochasticCalculator(IndicatorCalculator):
    """
    Slow stochastic oscillator scaled to [0, 1].

    Raw %K over ``k_length`` bars, smoothed %K as the mean of the last
    ``k_smoothing`` raw values and %D as the mean of the last ``d_smoothing``
    smoothed values. Recomputed from its window every bar.
    """

    kind = IndicatorKind.STOCHASTIC

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        s = args.extract_stochastic()
        return IndicatorType.stochastic(s.k_length, s.k_smoothing, s.d_smoothing)

    def window_size(self, args: IndicatorArgs) -> int:
        return args.extract_stochastic().window()

    def calculate(
        self, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[Stochastic]:
        s = args.extract_stochastic()
        n = s.window()
        if len(segment) < n:
            return None
        window = segment[-n:]

        raws = np.array(
            [raw_k(window[end - s.k_length + 1 : end + 1]) for end in range(s.k_length - 1, n)],
            dtype=np.float64,
        )
        smoothed = np.array(
            [raws[j : j + s.k_smoothing].mean() for j in range(s.d_smoothing)],
            dtype=np.float64,
        )
        return Stochastic(k=float(smoothed[-1]), d=float(smoothed.mean()))

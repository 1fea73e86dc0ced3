from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.percentile import percent_rank
from tradescope.indicators.results import PMARP
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


class PMARPCalculator(IndicatorCalculator):
    """Price Moving Average Ratio Percentile: percent rank of PMAR over ``lookback`` bars."""

    kind = IndicatorKind.PMARP

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        a = args.extract_pmarp()
        return IndicatorType.pmarp(a.length, a.lookback, a.ma_type)

    def window_size(self, args: IndicatorArgs) -> int:
        return args.extract_pmarp().lookback + 1

    def calculate(self, segment: Sequence[Candle], args: IndicatorArgs) -> Optional[PMARP]:
        a = args.extract_pmarp()
        value = percent_rank(segment, IndicatorType.pmar(a.length, a.ma_type), a.lookback)
        return PMARP(value) if value is not None else None

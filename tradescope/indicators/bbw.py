from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.bollinger import compute_bands, roll_bands
from tradescope.indicators.results import BBW, BollingerBands
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


def _width(bands: Optional[BollingerBands]) -> Optional[BBW]:
    if bands is None or bands.mean == 0:
        return None
    return BBW((bands.upper - bands.lower) / bands.mean, bands)


class BBWCalculator(IndicatorCalculator):
    """Bollinger Band Width. Carries its own bands, so it has no dependency."""

    kind = IndicatorKind.BBW
    reseeds = True

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        bb = args.extract_bb()
        return IndicatorType.bbw(bb.length, bb.std_n)

    def window_size(self, args: IndicatorArgs) -> int:
        return args.extract_bb().length

    def rolling_window_size(self, args: IndicatorArgs) -> int:
        return args.extract_bb().length + 1

    def calculate(self, segment: Sequence[Candle], args: IndicatorArgs) -> Optional[BBW]:
        return _width(compute_bands(segment, args.extract_bb()))

    def calculate_rolling(
        self, previous: BBW, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[BBW]:
        return _width(roll_bands(previous.bands, segment, args.extract_bb()))

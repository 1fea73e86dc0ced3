"""Dynamic pivot levels.

The centre of a ``2k + 1`` window is a pivot high when no bar in the window
has a strictly higher high, and a pivot low when none has a strictly lower
low. A centre is only confirmed once ``k`` bars have closed after it, so the
value for candle ``c`` is written when candle ``c + k`` arrives and the
newest ``k`` candles are always not computable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from tradescope.indicators.args import IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.results import DynamicPivot, Indicator
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle
    from tradescope.marketdata.timeseries import TimeSeries

log = logging.getLogger(__name__)


def _pivot_flags(window: Sequence[Candle]) -> tuple[bool, bool]:
    centre = window[len(window) // 2]
    is_high = all(c.high <= centre.high for c in window)
    is_low = all(c.low >= centre.low for c in window)
    return is_high, is_low


class DynamicPivotCalculator(IndicatorCalculator):
    kind = IndicatorKind.DYNAMIC_PIVOT

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        return IndicatorType.dynamic_pivot(args.extract_len())

    def window_size(self, args: IndicatorArgs) -> int:
        return 2 * args.extract_len() + 1

    def calculate(
        self, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[DynamicPivot]:
        """Seed both levels from the centre candle, whatever its flags."""
        n = self.window_size(args)
        if len(segment) < n:
            return None
        window = segment[-n:]
        centre = window[len(window) // 2]
        is_high, is_low = _pivot_flags(window)
        return DynamicPivot(
            high=centre.high,
            low=centre.low,
            is_high=is_high,
            is_low=is_low,
        )

    def calculate_rolling(
        self, previous: DynamicPivot, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[DynamicPivot]:
        n = self.window_size(args)
        if len(segment) < n:
            return None
        window = segment[-n:]
        centre = window[len(window) // 2]
        is_high, is_low = _pivot_flags(window)
        return DynamicPivot(
            high=centre.high if is_high else previous.high,
            low=centre.low if is_low else previous.low,
            is_high=is_high,
            is_low=is_low,
        )

    def populate_all(self, series: TimeSeries, args: IndicatorArgs) -> None:
        k = args.extract_len()
        itype = self.indicator_type(args)
        candles = series.candles
        n = len(candles)

        previous: Optional[DynamicPivot] = None
        for c, candle in enumerate(candles):
            result = None
            if k <= c <= n - 1 - k:
                result = self._step(series, c + k, previous, args, itype)
            candle.indicators[itype] = Indicator(self.kind, result)
            previous = result

        series.indicators.add(itype)
        log.debug("Populated %s over %d candles of %s", itype, n, series.ticker)

    def populate_last(self, series: TimeSeries, args: IndicatorArgs) -> None:
        k = args.extract_len()
        itype = self.indicator_type(args)
        candles = series.candles
        if not candles:
            return
        cursor = len(candles) - 1

        if k > 0:
            candles[cursor].indicators[itype] = Indicator(self.kind, None)

        centre = cursor - k
        if centre >= k:
            previous = self.cached(candles[centre - 1], itype) if centre > 0 else None
            candles[centre].indicators[itype] = Indicator(
                self.kind, self._step(series, cursor, previous, args, itype)
            )
        series.indicators.add(itype)

"""Price Moving Average Ratio: close over a moving average of closes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from tradescope.indicators.args import IndicatorArgs, PMARArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.results import PMAR
from tradescope.indicators.types import IndicatorKind, IndicatorType, MAType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


def _weights(candle: Candle, ma_type: MAType) -> tuple[float, float]:
    if ma_type == MAType.VWMA:
        return candle.close * candle.volume, candle.volume
    return candle.close, 1.0


def _ratio(close: float, pv_sum: float, v_sum: float) -> Optional[PMAR]:
    if v_sum <= 0:
        return None
    ma = pv_sum / v_sum
    if ma == 0:
        return None
    return PMAR(close / ma, ma, pv_sum, v_sum)


class PMARCalculator(IndicatorCalculator):
    """
    SMA and VWMA keep running window sums in the result. EMA reads the
    already populated ``EMA(length)`` from the candle, so that type must be
    on the series first.
    """

    kind = IndicatorKind.PMAR
    reseeds = True

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        a = args.extract_pmar()
        return IndicatorType.pmar(a.length, a.ma_type)

    def window_size(self, args: IndicatorArgs) -> int:
        return args.extract_pmar().length

    def rolling_window_size(self, args: IndicatorArgs) -> int:
        a = args.extract_pmar()
        return 1 if a.ma_type == MAType.EMA else a.length + 1

    def calculate(self, segment: Sequence[Candle], args: IndicatorArgs) -> Optional[PMAR]:
        a = args.extract_pmar()
        if len(segment) < a.length:
            return None
        if a.ma_type == MAType.EMA:
            return self._from_ema(segment[-1], a)

        pv_sum = 0.0
        v_sum = 0.0
        for candle in segment[-a.length:]:
            pv, v = _weights(candle, a.ma_type)
            pv_sum += pv
            v_sum += v
        return _ratio(segment[-1].close, pv_sum, v_sum)

    def calculate_rolling(
        self, previous: PMAR, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[PMAR]:
        a = args.extract_pmar()
        if a.ma_type == MAType.EMA:
            return self._from_ema(segment[-1], a)
        if len(segment) < a.length + 1:
            return self.calculate(segment, args)

        pv_in, v_in = _weights(segment[-1], a.ma_type)
        pv_out, v_out = _weights(segment[-a.length - 1], a.ma_type)
        return _ratio(
            segment[-1].close,
            previous.pv_sum + pv_in - pv_out,
            previous.v_sum + v_in - v_out,
        )

    @staticmethod
    def _from_ema(candle: Candle, a: PMARArgs) -> Optional[PMAR]:
        ema = candle.get_indicator(IndicatorType.ema(a.length)).as_ema()
        if ema is None or ema.value == 0:
            return None
        return PMAR(candle.close / ema.value, ema.value)

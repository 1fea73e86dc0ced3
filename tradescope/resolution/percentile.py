from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional, Sequence

from tradescope.indicators.types import IndicatorKind, IndicatorType
from tradescope.resolution.base import ResolutionStrategy
from tradescope.types import Orientation

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


_PERCENTILE_KINDS = (IndicatorKind.BBWP, IndicatorKind.PMARP)


def _mirror(value: float) -> float:
    # percentiles are k/lookback, so 1 - value must land back on the exact fraction
    return round(1.0 - value, 12)


class PercentileResolution(ResolutionStrategy):
    """
    Takes profit when any configured percentile indicator crosses its threshold.

    Thresholds are in [0, 1]. A long takes profit once a value rises above
    its threshold; a short once a value falls below ``1 - threshold``. With
    ``stop_threshold`` set the rule also stops out: a long once any value
    drops below it, a short once any value rises above ``1 - stop_threshold``.
    Values that are not computable on the checked candle never fire.
    """

    def __init__(
        self,
        thresholds: Mapping[IndicatorType, float],
        stop_threshold: Optional[float] = None,
    ):
        super().__init__()
        if not thresholds:
            raise ValueError("at least one percentile threshold is required")
        for itype, threshold in thresholds.items():
            if itype.kind not in _PERCENTILE_KINDS:
                raise ValueError(f"{itype} is not a percentile indicator")
            if not 0.0 <= threshold <= 1.0:
                raise ValueError(f"threshold for {itype} must be within [0, 1]")
        if stop_threshold is not None and not 0.0 <= stop_threshold <= 1.0:
            raise ValueError("stop_threshold must be within [0, 1]")
        self.thresholds = dict(thresholds)
        self.stop_threshold = stop_threshold

    def required_indicators(self) -> tuple[IndicatorType, ...]:
        return tuple(self.thresholds)

    def _values(self, candle: Candle):
        for itype, threshold in self.thresholds.items():
            value = self._indicator(candle, itype).scalar()
            if value is not None:
                yield value, threshold

    def _take_profit_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        for value, threshold in self._values(window[-1]):
            if orientation == Orientation.LONG and value > threshold:
                return True
            if orientation == Orientation.SHORT and _mirror(value) > threshold:
                return True
        return False

    def _stop_loss_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        if self.stop_threshold is None:
            return False
        for value, _ in self._values(window[-1]):
            if orientation == Orientation.LONG and value < self.stop_threshold:
                return True
            if orientation == Orientation.SHORT and _mirror(value) < self.stop_threshold:
                return True
        return False

"""Calculator lookup and dependency ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from tradescope.indicators.atr import ATRCalculator
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.bbw import BBWCalculator
from tradescope.indicators.bbwp import BBWPCalculator
from tradescope.indicators.bollinger import BollingerCalculator
from tradescope.indicators.ema import EMACalculator
from tradescope.indicators.pivots import DynamicPivotCalculator
from tradescope.indicators.pmar import PMARCalculator
from tradescope.indicators.pmarp import PMARPCalculator
from tradescope.indicators.rsi import RSICalculator
from tradescope.indicators.sma import SMACalculator
from tradescope.indicators.stochastic import StochasticCalculator
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.timeseries import TimeSeries


__all__ = [
    "dependency_order",
    "get_calculator",
    "populate_all",
    "populate_last",
]


_CALCULATORS: dict[IndicatorKind, IndicatorCalculator] = {
    calc.kind: calc
    for calc in (
        SMACalculator(),
        EMACalculator(),
        RSICalculator(),
        ATRCalculator(),
        BollingerCalculator(),
        BBWCalculator(),
        BBWPCalculator(),
        PMARCalculator(),
        PMARPCalculator(),
        DynamicPivotCalculator(),
        StochasticCalculator(),
    )
}


def get_calculator(kind: IndicatorKind) -> IndicatorCalculator:
    return _CALCULATORS[kind]


def populate_all(series: TimeSeries, indicator_type: IndicatorType) -> None:
    """Populate one type over the whole series. Dependencies must already be present."""
    get_calculator(indicator_type.kind).populate_all(series, indicator_type.args())


def populate_last(series: TimeSeries, indicator_type: IndicatorType) -> None:
    get_calculator(indicator_type.kind).populate_last(series, indicator_type.args())


def dependency_order(types: Iterable[IndicatorType]) -> list[IndicatorType]:
    """
    Expand ``types`` with their transitive dependencies and return them so
    every type comes after the types it reads.

    The order is deterministic: siblings are visited in sorted order.
    """
    ordered: list[IndicatorType] = []
    seen: set[IndicatorType] = set()

    def visit(t: IndicatorType) -> None:
        if t in seen:
            return
        seen.add(t)
        for dep in sorted(t.dependencies()):
            visit(dep)
        ordered.append(t)

    for t in sorted(set(types)):
        visit(t)
    return ordered

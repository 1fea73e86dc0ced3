from .args import (
    BBWPArgs,
    BollingerArgs,
    IndicatorArgs,
    LengthArgs,
    PMARArgs,
    PMARPArgs,
    StochasticArgs,
)
from .base import IndicatorCalculator
from .registry import dependency_order, get_calculator, populate_all, populate_last
from .results import (
    ATR,
    BBW,
    BBWP,
    EMA,
    PMAR,
    PMARP,
    RSI,
    SMA,
    BollingerBands,
    DynamicPivot,
    Indicator,
    Stochastic,
)
from .types import IndicatorKind, IndicatorType, MAType

__all__ = [
    "ATR",
    "BBW",
    "BBWP",
    "BBWPArgs",
    "BollingerArgs",
    "BollingerBands",
    "DynamicPivot",
    "EMA",
    "Indicator",
    "IndicatorArgs",
    "IndicatorCalculator",
    "IndicatorKind",
    "IndicatorType",
    "LengthArgs",
    "MAType",
    "PMAR",
    "PMARArgs",
    "PMARP",
    "PMARPArgs",
    "RSI",
    "SMA",
    "Stochastic",
    "StochasticArgs",
    "dependency_order",
    "get_calculator",
    "populate_all",
    "populate_last",
]

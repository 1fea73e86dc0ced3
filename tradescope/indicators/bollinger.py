"""Bollinger Bands over typical price, with a running mean and sum of squares."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from tradescope.indicators.args import BollingerArgs, IndicatorArgs
from tradescope.indicators.base import IndicatorCalculator
from tradescope.indicators.results import BollingerBands
from tradescope.indicators.types import IndicatorKind, IndicatorType

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle


def _bands(mean: float, m2: float, bb: BollingerArgs) -> BollingerBands:
    m2 = max(m2, 0.0)
    std = math.sqrt(m2 / (bb.length - 1)) if bb.length > 1 else 0.0
    return BollingerBands(
        upper=mean + bb.std_n * std,
        lower=mean - bb.std_n * std,
        mean=mean,
        std=std,
        m2=m2,
    )


def compute_bands(segment: Sequence[Candle], bb: BollingerArgs) -> Optional[BollingerBands]:
    if len(segment) < bb.length:
        return None
    prices = np.array([c.typical_price for c in segment[-bb.length:]], dtype=np.float64)
    mean = float(prices.mean())
    m2 = float(((prices - mean) ** 2).sum())
    return _bands(mean, m2, bb)


def roll_bands(
    previous: BollingerBands, segment: Sequence[Candle], bb: BollingerArgs
) -> Optional[BollingerBands]:
    if len(segment) < bb.length + 1:
        return compute_bands(segment, bb)
    entering = segment[-1].typical_price
    leaving = segment[-bb.length - 1].typical_price
    mean = previous.mean + (entering - leaving) / bb.length
    m2 = previous.m2 + (entering - leaving) * (entering - mean + leaving - previous.mean)
    return _bands(mean, m2, bb)


class BollingerCalculator(IndicatorCalculator):
    kind = IndicatorKind.BOLLINGER
    reseeds = True

    def indicator_type(self, args: IndicatorArgs) -> IndicatorType:
        bb = args.extract_bb()
        return IndicatorType.bollinger(bb.length, bb.std_n)

    def window_size(self, args: IndicatorArgs) -> int:
        return args.extract_bb().length

    def rolling_window_size(self, args: IndicatorArgs) -> int:
        return args.extract_bb().length + 1

    def calculate(
        self, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[BollingerBands]:
        return compute_bands(segment, args.extract_bb())

    def calculate_rolling(
        self, previous: BollingerBands, segment: Sequence[Candle], args: IndicatorArgs
    ) -> Optional[BollingerBands]:
        return roll_bands(previous, segment, args.extract_bb())

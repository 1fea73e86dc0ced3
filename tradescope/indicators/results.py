"""Per-candle indicator values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from tradescope.errors import IndicatorKindError
from tradescope.indicators.types import IndicatorKind


__all__ = [
    "ATR",
    "BBW",
    "BBWP",
    "EMA",
    "PMAR",
    "PMARP",
    "RSI",
    "SMA",
    "BollingerBands",
    "DynamicPivot",
    "Indicator",
    "IndicatorResult",
    "Stochastic",
]


@dataclass(frozen=True)
class SMA:
    value: float


@dataclass(frozen=True)
class EMA:
    value: float


@dataclass(frozen=True)
class RSI:
    """RSI value in [0, 100] plus the Wilder-smoothed averages it came from."""

    value: float
    avg_gain: float
    avg_loss: float


@dataclass(frozen=True)
class ATR:
    value: float


@dataclass(frozen=True)
class BollingerBands:
    """
    Bands around the typical-price mean.

    ``m2`` is the running sum of squared deviations over the window, kept so
    the next bar can update the variance without rescanning.
    """

    upper: float
    lower: float
    mean: float
    std: float
    m2: float


@dataclass(frozen=True)
class BBW:
    value: float
    bands: BollingerBands


@dataclass(frozen=True)
class BBWP:
    value: float
    sma: Optional[float]


@dataclass(frozen=True)
class PMAR:
    """
    Price over moving average.

    ``pv_sum``/``v_sum`` hold the running window sums for SMA (sum of closes
    and count) and VWMA (sum of close*volume and sum of volume). Both are 0
    for EMA, which is read from the candle instead.
    """

    value: float
    ma: float
    pv_sum: float = 0.0
    v_sum: float = 0.0


@dataclass(frozen=True)
class PMARP:
    value: float


@dataclass(frozen=True)
class DynamicPivot:
    """Latest confirmed pivot levels as of a centre candle."""

    high: float
    low: float
    is_high: bool
    is_low: bool


@dataclass(frozen=True)
class Stochastic:
    k: float
    d: float


IndicatorResult = Union[
    SMA, EMA, RSI, ATR, BollingerBands, BBW, BBWP, PMAR, PMARP, DynamicPivot, Stochastic
]


@dataclass(frozen=True)
class Indicator:
    """
    Tagged indicator value stored on a candle.

    ``result`` is None when the indicator is not computable for the candle
    (not enough history, degenerate input). The typed accessors raise
    ``IndicatorKindError`` for the wrong kind and return None when not
    computable.
    """

    kind: IndicatorKind
    result: Optional[IndicatorResult]

    @property
    def is_ready(self) -> bool:
        return self.result is not None

    def _as(self, kind: IndicatorKind) -> Any:
        if self.kind != kind:
            raise IndicatorKindError(
                f"Indicator is {self.kind.value}, not {kind.value}"
            )
        return self.result

    def as_sma(self) -> Optional[SMA]:
        return self._as(IndicatorKind.SMA)

    def as_ema(self) -> Optional[EMA]:
        return self._as(IndicatorKind.EMA)

    def as_rsi(self) -> Optional[RSI]:
        return self._as(IndicatorKind.RSI)

    def as_atr(self) -> Optional[ATR]:
        return self._as(IndicatorKind.ATR)

    def as_bollinger(self) -> Optional[BollingerBands]:
        return self._as(IndicatorKind.BOLLINGER)

    def as_bbw(self) -> Optional[BBW]:
        return self._as(IndicatorKind.BBW)

    def as_bbwp(self) -> Optional[BBWP]:
        return self._as(IndicatorKind.BBWP)

    def as_pmar(self) -> Optional[PMAR]:
        return self._as(IndicatorKind.PMAR)

    def as_pmarp(self) -> Optional[PMARP]:
        return self._as(IndicatorKind.PMARP)

    def as_dynamic_pivot(self) -> Optional[DynamicPivot]:
        return self._as(IndicatorKind.DYNAMIC_PIVOT)

    def as_stochastic(self) -> Optional[Stochastic]:
        return self._as(IndicatorKind.STOCHASTIC)

    def scalar(self) -> Optional[float]:
        """Headline value: ``value`` for most kinds, the mean for Bollinger,
        %K for stochastic and None for pivots."""
        r = self.result
        if r is None or isinstance(r, DynamicPivot):
            return None
        if isinstance(r, BollingerBands):
            return r.mean
        if isinstance(r, Stochastic):
            return r.k
        return r.value

"""Indicator identity: kind plus parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from tradescope.indicators.args import (
    BBWPArgs,
    BollingerArgs,
    IndicatorArgs,
    LengthArgs,
    PMARArgs,
    PMARPArgs,
    StochasticArgs,
)


__all__ = ["IndicatorKind", "IndicatorType", "MAType"]


class IndicatorKind(str, Enum):
    SMA = "sma"
    EMA = "ema"
    RSI = "rsi"
    ATR = "atr"
    BOLLINGER = "bollinger"
    BBW = "bbw"
    BBWP = "bbwp"
    PMAR = "pmar"
    PMARP = "pmarp"
    DYNAMIC_PIVOT = "dynamic_pivot"
    STOCHASTIC = "stochastic"


class MAType(str, Enum):
    """Moving average used as the PMAR denominator."""

    SMA = "sma"
    EMA = "ema"
    VWMA = "vwma"


@dataclass(frozen=True, order=True)
class IndicatorType:
    """
    Hashable key identifying an indicator by kind and parameters.

    Two types with the same kind and parameters are the same cache entry on
    every candle. Use the named constructors rather than building ``params``
    by hand.
    """

    kind: IndicatorKind
    params: tuple[Any, ...]

    @classmethod
    def sma(cls, length: int) -> IndicatorType:
        return cls(IndicatorKind.SMA, LengthArgs(length).as_params())

    @classmethod
    def ema(cls, length: int) -> IndicatorType:
        return cls(IndicatorKind.EMA, LengthArgs(length).as_params())

    @classmethod
    def rsi(cls, length: int) -> IndicatorType:
        return cls(IndicatorKind.RSI, LengthArgs(length).as_params())

    @classmethod
    def atr(cls, length: int) -> IndicatorType:
        return cls(IndicatorKind.ATR, LengthArgs(length).as_params())

    @classmethod
    def bollinger(cls, length: int, std_n: float = 2.0) -> IndicatorType:
        return cls(IndicatorKind.BOLLINGER, BollingerArgs(length, std_n).as_params())

    @classmethod
    def bbw(cls, length: int, std_n: float = 2.0) -> IndicatorType:
        return cls(IndicatorKind.BBW, BollingerArgs(length, std_n).as_params())

    @classmethod
    def bbwp(cls, length: int, lookback: int, sma_length: int = 5) -> IndicatorType:
        return cls(IndicatorKind.BBWP, BBWPArgs(length, lookback, sma_length).as_params())

    @classmethod
    def pmar(cls, length: int, ma_type: MAType = MAType.EMA) -> IndicatorType:
        return cls(IndicatorKind.PMAR, PMARArgs(length, MAType(ma_type)).as_params())

    @classmethod
    def pmarp(
        cls, length: int, lookback: int, ma_type: MAType = MAType.EMA
    ) -> IndicatorType:
        return cls(
            IndicatorKind.PMARP, PMARPArgs(length, lookback, MAType(ma_type)).as_params()
        )

    @classmethod
    def dynamic_pivot(cls, length: int) -> IndicatorType:
        return cls(IndicatorKind.DYNAMIC_PIVOT, LengthArgs(length, minimum=0).as_params())

    @classmethod
    def stochastic(
        cls, k_length: int = 14, k_smoothing: int = 3, d_smoothing: int = 3
    ) -> IndicatorType:
        return cls(
            IndicatorKind.STOCHASTIC,
            StochasticArgs(k_length, k_smoothing, d_smoothing).as_params(),
        )

    def args(self) -> IndicatorArgs:
        """Return the argument shape matching this kind."""
        p = self.params
        if self.kind in (IndicatorKind.BOLLINGER, IndicatorKind.BBW):
            return BollingerArgs(*p)
        if self.kind == IndicatorKind.BBWP:
            return BBWPArgs(*p)
        if self.kind == IndicatorKind.PMAR:
            return PMARArgs(p[0], MAType(p[1]))
        if self.kind == IndicatorKind.PMARP:
            return PMARPArgs(p[0], p[1], MAType(p[2]))
        if self.kind == IndicatorKind.STOCHASTIC:
            return StochasticArgs(*p)
        if self.kind == IndicatorKind.DYNAMIC_PIVOT:
            return LengthArgs(p[0], minimum=0)
        return LengthArgs(p[0])

    def dependencies(self) -> tuple[IndicatorType, ...]:
        """Types that must be populated on a series before this one."""
        if self.kind == IndicatorKind.BBWP:
            a = self.args().extract_bbwp()
            return (IndicatorType.bbw(a.length),)
        if self.kind == IndicatorKind.PMARP:
            a = self.args().extract_pmarp()
            return (IndicatorType.pmar(a.length, a.ma_type),)
        if self.kind == IndicatorKind.PMAR:
            a = self.args().extract_pmar()
            if a.ma_type == MAType.EMA:
                return (IndicatorType.ema(a.length),)
        return ()

    def min_length(self) -> int:
        """Fewest candles a series needs before the first computable value."""
        a = self.args()
        k = self.kind
        if k in (IndicatorKind.RSI, IndicatorKind.ATR):
            return a.extract_len() + 1
        if k == IndicatorKind.BBWP:
            b = a.extract_bbwp()
            return b.length + b.lookback
        if k == IndicatorKind.PMARP:
            m = a.extract_pmarp()
            return m.length + m.lookback
        if k == IndicatorKind.STOCHASTIC:
            return a.extract_stochastic().window()
        if k == IndicatorKind.DYNAMIC_PIVOT:
            return 2 * a.extract_len() + 1
        if k in (IndicatorKind.BOLLINGER, IndicatorKind.BBW):
            return a.extract_bb().length
        if k == IndicatorKind.PMAR:
            return a.extract_pmar().length
        return a.extract_len()

    def __str__(self) -> str:
        inner = ", ".join(
            p.value.upper() if isinstance(p, Enum) else f"{p:g}" if isinstance(p, float) else str(p)
            for p in self.params
        )
        return f"{self.kind.value.upper()}({inner})"

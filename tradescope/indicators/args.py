"""Argument shapes accepted by the indicator calculators.

Each calculator reads its parameters through one ``extract_*`` accessor.
Asking a shape for the wrong accessor raises ``IndicatorArgsError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tradescope.errors import IndicatorArgsError

if TYPE_CHECKING:
    from tradescope.indicators.types import MAType


__all__ = [
    "BBWPArgs",
    "BollingerArgs",
    "IndicatorArgs",
    "LengthArgs",
    "PMARArgs",
    "PMARPArgs",
    "StochasticArgs",
]


def _positive(name: str, value: int, minimum: int = 1) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
        raise IndicatorArgsError(f"{name} must be an integer >= {minimum}, got {value!r}")


class IndicatorArgs:
    """Base class for argument shapes."""

    def _wrong(self, wanted: str) -> IndicatorArgsError:
        return IndicatorArgsError(
            f"{type(self).__name__} does not carry {wanted} arguments"
        )

    def extract_len(self) -> int:
        raise self._wrong("length")

    def extract_bb(self) -> BollingerArgs:
        raise self._wrong("Bollinger")

    def extract_bbwp(self) -> BBWPArgs:
        raise self._wrong("BBWP")

    def extract_pmar(self) -> PMARArgs:
        raise self._wrong("PMAR")

    def extract_pmarp(self) -> PMARPArgs:
        raise self._wrong("PMARP")

    def extract_stochastic(self) -> StochasticArgs:
        raise self._wrong("stochastic")

    def as_params(self) -> tuple[Any, ...]:
        raise NotImplementedError


@dataclass(frozen=True)
class LengthArgs(IndicatorArgs):
    length: int
    minimum: int = field(default=1, repr=False, compare=False)

    def __post_init__(self) -> None:
        _positive("length", self.length, self.minimum)

    def extract_len(self) -> int:
        return self.length

    def as_params(self) -> tuple[Any, ...]:
        return (self.length,)


@dataclass(frozen=True)
class BollingerArgs(IndicatorArgs):
    length: int
    std_n: float = 2.0

    def __post_init__(self) -> None:
        _positive("length", self.length)
        if self.std_n <= 0:
            raise IndicatorArgsError(f"std_n must be > 0, got {self.std_n!r}")

    def extract_bb(self) -> BollingerArgs:
        return self

    def as_params(self) -> tuple[Any, ...]:
        return (self.length, float(self.std_n))


@dataclass(frozen=True)
class BBWPArgs(IndicatorArgs):
    length: int
    lookback: int
    sma_length: int = 5

    def __post_init__(self) -> None:
        _positive("length", self.length)
        _positive("lookback", self.lookback)
        _positive("sma_length", self.sma_length)

    def extract_bbwp(self) -> BBWPArgs:
        return self

    def as_params(self) -> tuple[Any, ...]:
        return (self.length, self.lookback, self.sma_length)


@dataclass(frozen=True)
class PMARArgs(IndicatorArgs):
    length: int
    ma_type: MAType

    def __post_init__(self) -> None:
        _positive("length", self.length)

    def extract_pmar(self) -> PMARArgs:
        return self

    def as_params(self) -> tuple[Any, ...]:
        return (self.length, self.ma_type)


@dataclass(frozen=True)
class PMARPArgs(IndicatorArgs):
    length: int
    lookback: int
    ma_type: MAType

    def __post_init__(self) -> None:
        _positive("length", self.length)
        _positive("lookback", self.lookback)

    def extract_pmarp(self) -> PMARPArgs:
        return self

    def as_params(self) -> tuple[Any, ...]:
        return (self.length, self.lookback, self.ma_type)


@dataclass(frozen=True)
class StochasticArgs(IndicatorArgs):
    k_length: int
    k_smoothing: int
    d_smoothing: int

    def __post_init__(self) -> None:
        _positive("k_length", self.k_length)
        _positive("k_smoothing", self.k_smoothing)
        _positive("d_smoothing", self.d_smoothing)

    def extract_stochastic(self) -> StochasticArgs:
        return self

    def window(self) -> int:
        """Candles needed for one %D value."""
        return self.k_length + self.k_smoothing + self.d_smoothing - 2

    def as_params(self) -> tuple[Any, ...]:
        return (self.k_length, self.k_smoothing, self.d_smoothing)

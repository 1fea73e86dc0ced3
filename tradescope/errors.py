"""Exception hierarchy for tradescope.

Insufficient history is never an error: indicators store an explicit
not-computable result instead. Everything below aborts the enclosing call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from tradescope.indicators.types import IndicatorType


__all__ = [
    "CandleOrderError",
    "ConfigError",
    "IndicatorArgsError",
    "IndicatorError",
    "IndicatorKindError",
    "IndicatorNotFoundError",
    "MissingDependencyError",
    "PopulationError",
    "ResolutionError",
    "ResolutionNotInitializedError",
    "TimeSeriesError",
    "TradescopeError",
]


class TradescopeError(Exception):
    """Base class for all tradescope errors."""


class ConfigError(TradescopeError, ValueError):
    """Raised when engine configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Indicators
# ---------------------------------------------------------------------------


class IndicatorError(TradescopeError):
    """Base class for indicator failures."""


class IndicatorArgsError(IndicatorError):
    """Raised when an argument accessor does not match the argument shape."""


class IndicatorKindError(IndicatorError):
    """Raised when an indicator is read through the wrong typed accessor."""


class IndicatorNotFoundError(IndicatorError, KeyError):
    """Raised when a candle has never had an indicator type populated."""

    def __init__(self, indicator_type: IndicatorType) -> None:
        self.indicator_type = indicator_type
        super().__init__(f"No {indicator_type} populated on candle")

    def __str__(self) -> str:
        return str(self.args[0])


class MissingDependencyError(IndicatorError):
    """Raised when an indicator is populated before the indicators it reads."""

    def __init__(
        self, indicator_type: IndicatorType, missing: Iterable[IndicatorType]
    ) -> None:
        self.indicator_type = indicator_type
        self.missing = tuple(missing)
        names = ", ".join(str(m) for m in self.missing)
        super().__init__(
            f"{indicator_type} requires {names} to be populated on the series first"
        )


class PopulationError(IndicatorError):
    """Wraps a failure raised while populating one candle of a series."""

    def __init__(self, indicator_type: IndicatorType, index: int, reason: str) -> None:
        self.indicator_type = indicator_type
        self.index = index
        super().__init__(f"Failed to populate {indicator_type} at index {index}: {reason}")


# ---------------------------------------------------------------------------
# Time series
# ---------------------------------------------------------------------------


class TimeSeriesError(TradescopeError):
    """Base class for time series failures."""


class CandleOrderError(TimeSeriesError, ValueError):
    """Raised for duplicate, stale or out-of-order candles."""


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class ResolutionError(TradescopeError):
    """Raised when a resolution strategy cannot evaluate a window."""


class ResolutionNotInitializedError(ResolutionError):
    """Raised when stop-loss/take-profit is checked before set_initial_values."""

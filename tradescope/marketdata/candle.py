from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from tradescope.errors import IndicatorNotFoundError
from tradescope.time_utils import parse_timestamp, to_iso

if TYPE_CHECKING:
    from tradescope.indicators.results import Indicator
    from tradescope.indicators.types import IndicatorType


@dataclass
class Candle:
    """
    Represents a single OHLCV candle.

    Attributes:
        timestamp: Bar open time. ISO 8601 strings and epoch milliseconds are
            normalised to an aware UTC datetime.
        open: Opening price
        high: Highest price during period
        low: Lowest price during period
        close: Closing price
        volume: Trading volume (or 0 if unavailable)
        indicators: Per-candle indicator cache, written only by the
            indicator framework. A missing key means the type was never
            populated on this candle.
    """

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    indicators: dict[IndicatorType, Indicator] = field(
        default_factory=dict, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.timestamp = parse_timestamp(self.timestamp)

    @property
    def typical_price(self) -> float:
        """
        Calculate typical price (HLC/3).
        Used by Bollinger Bands and the bandwidth indicators built on them.
        """
        return (self.high + self.low + self.close) / 3

    @property
    def mid(self) -> float:
        """Calculate midpoint between high and low."""
        return (self.high + self.low) / 2

    @property
    def range(self) -> float:
        """Calculate candle range (high - low)."""
        return self.high - self.low

    def get_indicator(self, indicator_type: IndicatorType) -> Indicator:
        """
        Look up a populated indicator.

        Returns the stored ``Indicator`` even when it is not computable for
        this candle; raises ``IndicatorNotFoundError`` when the type was never
        populated.
        """
        try:
            return self.indicators[indicator_type]
        except KeyError:
            raise IndicatorNotFoundError(indicator_type) from None

    def has_indicator(self, indicator_type: IndicatorType) -> bool:
        return indicator_type in self.indicators

    def __repr__(self) -> str:
        return (
            f"Candle(timestamp={to_iso(self.timestamp)}, "
            f"O={self.open:.5f}, H={self.high:.5f}, "
            f"L={self.low:.5f}, C={self.close:.5f}, "
            f"V={self.volume:.0f})"
        )

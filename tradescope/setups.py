from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tradescope.marketdata.candle import Candle
from tradescope.marketdata.interval import Interval
from tradescope.resolution.base import ResolutionStrategy
from tradescope.types import Orientation


__all__ = ["Setup"]


@dataclass(frozen=True)
class Setup:
    """
    A detected trade entry: the candle it fired on plus the rule that will
    resolve it.

    Build with ``Setup.create`` so the resolution strategy is bound to the
    setup exactly once.
    """

    candle: Candle
    ticker: str
    interval: Interval
    orientation: Orientation
    resolution_strategy: ResolutionStrategy

    @classmethod
    def create(
        cls,
        candle: Candle,
        ticker: str,
        interval: Interval,
        orientation: Orientation,
        resolution_strategy: ResolutionStrategy,
    ) -> Setup:
        setup = cls(candle, ticker, Interval(interval), Orientation(orientation), resolution_strategy)
        resolution_strategy.set_initial_values(setup)
        return setup

    @property
    def entry_price(self) -> float:
        return self.candle.close

    @property
    def stop_loss(self) -> Optional[float]:
        return self.resolution_strategy.stop_loss

    @property
    def take_profit(self) -> Optional[float]:
        return self.resolution_strategy.take_profit

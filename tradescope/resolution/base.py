"""
Resolution strategies decide when an open setup is stopped out or takes profit.

A strategy is attached to exactly one setup: ``set_initial_values`` is
called once when the setup is created, after which ``stop_loss_reached`` and
``take_profit_reached`` are evaluated against trailing candle windows ending
at the bar being checked.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Sequence

from tradescope.errors import (
    IndicatorNotFoundError,
    ResolutionError,
    ResolutionNotInitializedError,
)
from tradescope.types import Orientation

if TYPE_CHECKING:
    from tradescope.indicators.results import Indicator
    from tradescope.indicators.types import IndicatorType
    from tradescope.marketdata.candle import Candle
    from tradescope.setups import Setup

log = logging.getLogger(__name__)


class ResolutionStrategy(ABC):
    """Base class for stop-loss / take-profit rules."""

    def __init__(self) -> None:
        self._initialized = False

    def n_candles_stop_loss(self) -> int:
        """Candles needed to check whether stop-loss has been reached."""
        return 1

    def n_candles_take_profit(self) -> int:
        """Candles needed to check whether take-profit has been reached."""
        return 1

    def required_indicators(self) -> tuple[IndicatorType, ...]:
        return ()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def stop_loss(self) -> Optional[float]:
        """Concrete stop-loss price, or None when the rule is not a price level."""
        return None

    @property
    def take_profit(self) -> Optional[float]:
        """Concrete take-profit price, or None when the rule is not a price level."""
        return None

    def set_initial_values(self, setup: Setup) -> None:
        """Bind the rule to ``setup``. May only be called once."""
        if self._initialized:
            raise ResolutionError(
                f"{type(self).__name__} is already bound to a setup; "
                "create a fresh instance per setup"
            )
        self._on_setup(setup)
        self._initialized = True
        log.debug(
            "%s initialised for %s %s at %s",
            type(self).__name__,
            setup.ticker,
            setup.orientation.value,
            setup.candle.timestamp,
        )

    def _on_setup(self, setup: Setup) -> None:
        pass

    def stop_loss_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        """Check whether stop-loss has been reached on the last candle of ``window``."""
        self._check(window, self.n_candles_stop_loss())
        return self._stop_loss_reached(orientation, window)

    def take_profit_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        """Check whether take-profit has been reached on the last candle of ``window``."""
        self._check(window, self.n_candles_take_profit())
        return self._take_profit_reached(orientation, window)

    @abstractmethod
    def _stop_loss_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        ...

    @abstractmethod
    def _take_profit_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        ...

    def _check(self, window: Sequence[Candle], needed: int) -> None:
        if not self._initialized:
            raise ResolutionNotInitializedError(
                f"{type(self).__name__} checked before set_initial_values"
            )
        if len(window) < max(needed, 1):
            raise ResolutionError(
                f"{type(self).__name__} needs {needed} candles, got {len(window)}"
            )

    @staticmethod
    def _indicator(candle: Candle, indicator_type: IndicatorType) -> Indicator:
        try:
            return candle.get_indicator(indicator_type)
        except IndicatorNotFoundError as e:
            raise ResolutionError(str(e)) from e


class PriceLevelResolution(ResolutionStrategy):
    """
    Resolves against fixed price levels.

    Stop-loss compares the close against the stop level. Take-profit
    compares the bar's extreme: the high for longs, the low for shorts.
    A level of None never fires.
    """

    def __init__(self) -> None:
        super().__init__()
        self._stop_loss: Optional[float] = None
        self._take_profit: Optional[float] = None

    @property
    def stop_loss(self) -> Optional[float]:
        return self._stop_loss

    @property
    def take_profit(self) -> Optional[float]:
        return self._take_profit

    def _stop_loss_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        if self._stop_loss is None:
            return False
        close = window[-1].close
        if orientation == Orientation.LONG:
            return close < self._stop_loss
        return close > self._stop_loss

    def _take_profit_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        if self._take_profit is None:
            return False
        candle = window[-1]
        if orientation == Orientation.LONG:
            return candle.high > self._take_profit
        return candle.low < self._take_profit

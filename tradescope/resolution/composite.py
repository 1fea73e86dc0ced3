from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from tradescope.indicators.types import IndicatorType, MAType
from tradescope.resolution.base import ResolutionStrategy
from tradescope.resolution.percentage import PercentageResolution
from tradescope.resolution.percentile import PercentileResolution
from tradescope.types import Orientation

if TYPE_CHECKING:
    from tradescope.marketdata.candle import Candle
    from tradescope.setups import Setup


class CompositeResolution(ResolutionStrategy):
    """Fires as soon as either of two rules fires."""

    def __init__(self, first: ResolutionStrategy, second: ResolutionStrategy):
        super().__init__()
        self.first = first
        self.second = second

    def n_candles_stop_loss(self) -> int:
        return max(self.first.n_candles_stop_loss(), self.second.n_candles_stop_loss())

    def n_candles_take_profit(self) -> int:
        return max(self.first.n_candles_take_profit(), self.second.n_candles_take_profit())

    def required_indicators(self) -> tuple[IndicatorType, ...]:
        combined = list(self.first.required_indicators())
        combined += [t for t in self.second.required_indicators() if t not in combined]
        return tuple(combined)

    @property
    def stop_loss(self) -> Optional[float]:
        return self.first.stop_loss if self.first.stop_loss is not None else self.second.stop_loss

    @property
    def take_profit(self) -> Optional[float]:
        if self.first.take_profit is not None:
            return self.first.take_profit
        return self.second.take_profit

    def _on_setup(self, setup: Setup) -> None:
        self.first.set_initial_values(setup)
        self.second.set_initial_values(setup)

    def _stop_loss_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        return self.first.stop_loss_reached(
            orientation, window[-self.first.n_candles_stop_loss():]
        ) or self.second.stop_loss_reached(
            orientation, window[-self.second.n_candles_stop_loss():]
        )

    def _take_profit_reached(self, orientation: Orientation, window: Sequence[Candle]) -> bool:
        return self.first.take_profit_reached(
            orientation, window[-self.first.n_candles_take_profit():]
        ) or self.second.take_profit_reached(
            orientation, window[-self.second.n_candles_take_profit():]
        )


def pmarp_or_bbwp_vs_percentage(
    drawdown: float = 3.0,
    pmarp_threshold: float = 0.65,
    bbwp_threshold: float = 0.80,
    pmarp: Optional[IndicatorType] = None,
    bbwp: Optional[IndicatorType] = None,
) -> CompositeResolution:
    """
    Take profit when PMARP or BBWP runs hot, stop out on a percentage drawdown.

    Defaults to ``PMARP(21, 100, EMA)`` and ``BBWP(13, 252, 5)``.
    """
    pmarp = pmarp or IndicatorType.pmarp(21, 100, MAType.EMA)
    bbwp = bbwp or IndicatorType.bbwp(13, 252, 5)
    return CompositeResolution(
        PercentileResolution({pmarp: pmarp_threshold, bbwp: bbwp_threshold}),
        PercentageResolution(drawdown),
    )

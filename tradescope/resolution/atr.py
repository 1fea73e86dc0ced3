from __future__ import annotations

from typing import TYPE_CHECKING

from tradescope.errors import ResolutionError
from tradescope.indicators.types import IndicatorType
from tradescope.resolution.base import PriceLevelResolution

if TYPE_CHECKING:
    from tradescope.setups import Setup


class AtrResolution(PriceLevelResolution):
    """
    Levels at multiples of the setup candle's ATR away from its close.

    The setup candle must carry a computable ``ATR(length)``.
    """

    def __init__(
        self,
        length: int = 14,
        stop_loss_multiple: float = 1.5,
        take_profit_multiple: float = 3.0,
    ):
        super().__init__()
        self.length = length
        self.stop_loss_multiple = stop_loss_multiple
        self.take_profit_multiple = take_profit_multiple

    def required_indicators(self) -> tuple[IndicatorType, ...]:
        return (IndicatorType.atr(self.length),)

    def _on_setup(self, setup: Setup) -> None:
        atr = self._indicator(setup.candle, IndicatorType.atr(self.length)).as_atr()
        if atr is None:
            raise ResolutionError(
                f"ATR({self.length}) is not computable on the setup candle"
            )
        entry = setup.candle.close
        sign = setup.orientation.sign
        self._stop_loss = entry - sign * self.stop_loss_multiple * atr.value
        self._take_profit = entry + sign * self.take_profit_multiple * atr.value

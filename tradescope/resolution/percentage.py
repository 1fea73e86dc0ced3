from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from tradescope.resolution.base import PriceLevelResolution

if TYPE_CHECKING:
    from tradescope.setups import Setup


class PercentageResolution(PriceLevelResolution):
    """
    Stop-loss and take-profit as percentages of the entry close.

    ``drawdown=3.0`` stops a long out once a close falls more than 3% below
    entry. Without ``take_profit`` the rule only ever stops out.
    """

    def __init__(self, drawdown: float, take_profit: Optional[float] = None):
        super().__init__()
        if drawdown <= 0:
            raise ValueError("drawdown must be > 0")
        if take_profit is not None and take_profit <= 0:
            raise ValueError("take_profit must be > 0")
        self.drawdown = float(drawdown)
        self.take_profit_pct = take_profit

    def _on_setup(self, setup: Setup) -> None:
        entry = setup.candle.close
        sign = setup.orientation.sign
        self._stop_loss = entry * (1.0 - sign * self.drawdown / 100.0)
        if self.take_profit_pct is not None:
            self._take_profit = entry * (1.0 + sign * self.take_profit_pct / 100.0)

    def __repr__(self) -> str:
        return f"PercentageResolution(drawdown={self.drawdown}, take_profit={self.take_profit_pct})"

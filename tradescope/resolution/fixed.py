from tradescope.resolution.base import PriceLevelResolution


class FixedValuesResolution(PriceLevelResolution):
    """Absolute take-profit and stop-loss prices chosen up front."""

    def __init__(self, take_profit: float, stop_loss: float):
        super().__init__()
        self._take_profit = float(take_profit)
        self._stop_loss = float(stop_loss)

    def __repr__(self) -> str:
        return f"FixedValuesResolution(take_profit={self._take_profit}, stop_loss={self._stop_loss})"

"""Backtest statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

import numpy as np

from tradescope.types import Orientation


__all__ = [
    "Outcome",
    "OutcomeKind",
    "StrategyTestResult",
    "StrategyTestResultBuilder",
    "max_drawdown",
]


class OutcomeKind(str, Enum):
    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class Outcome:
    """One resolved setup."""
    timestamp: datetime
    orientation: Orientation
    kind: OutcomeKind
    profitability: float
    bars: int


@dataclass(frozen=True)
class StrategyTestResult:
    """Aggregated results of a strategy backtest.

    Profitabilities are fractional returns (0.05 == +5%). ``max_drawdown``
    is the largest peak-to-trough fall of ``account_curve`` and is <= 0.
    """
    n_setups: int
    n_wins: int
    n_losses: int
    n_dropped: int
    accuracy: float
    avg_profitability: float
    avg_win: float
    avg_loss: float
    avg_win_bars: float
    avg_loss_bars: float
    win_std: float
    loss_std: float
    win_bars_std: float
    loss_bars_std: float
    initial_account: float
    ending_account: float
    account_curve: list[float] = field(repr=False)
    max_drawdown: float
    outcomes: list[Outcome] = field(repr=False)


def max_drawdown(equity: list[float]) -> float:
    """Calculate maximum drawdown from equity curve."""
    peak = float("-inf")
    mdd = 0.0
    for x in equity:
        peak = max(peak, x)
        mdd = min(mdd, x - peak)  # negative number
    return float(mdd)


def _mean(values: list[float]) -> float:
    return float(np.mean(values)) if values else 0.0


def _std(values: list[float]) -> float:
    # sample standard deviation; undefined below two samples
    return float(np.std(values, ddof=1)) if len(values) > 1 else 0.0


class StrategyTestResultBuilder:
    """Accumulates outcomes while a backtest runs."""

    def __init__(self, initial_account: float = 100_000.0):
        self.initial_account = float(initial_account)
        self.outcomes: list[Outcome] = []
        self.n_dropped = 0

    def add_outcome(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    def add_dropped(self) -> None:
        self.n_dropped += 1

    def build(self) -> StrategyTestResult:
        wins = [o for o in self.outcomes if o.kind == OutcomeKind.WIN]
        losses = [o for o in self.outcomes if o.kind == OutcomeKind.LOSS]
        n = len(self.outcomes)

        curve = [self.initial_account]
        for o in self.outcomes:
            curve.append(curve[-1] * (1.0 + o.profitability))

        return StrategyTestResult(
            n_setups=n,
            n_wins=len(wins),
            n_losses=len(losses),
            n_dropped=self.n_dropped,
            accuracy=len(wins) / n if n else 0.0,
            avg_profitability=_mean([o.profitability for o in self.outcomes]),
            avg_win=_mean([o.profitability for o in wins]),
            avg_loss=_mean([o.profitability for o in losses]),
            avg_win_bars=_mean([o.bars for o in wins]),
            avg_loss_bars=_mean([o.bars for o in losses]),
            win_std=_std([o.profitability for o in wins]),
            loss_std=_std([o.profitability for o in losses]),
            win_bars_std=_std([o.bars for o in wins]),
            loss_bars_std=_std([o.bars for o in losses]),
            initial_account=self.initial_account,
            ending_account=curve[-1],
            account_curve=curve,
            max_drawdown=max_drawdown(curve),
            outcomes=list(self.outcomes),
        )

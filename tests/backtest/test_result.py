from datetime import datetime, timezone

import pytest

from tradescope.backtest import Outcome, OutcomeKind, StrategyTestResultBuilder, max_drawdown
from tradescope.types import Orientation

T = datetime(2024, 1, 1, tzinfo=timezone.utc)


def outcome(profit, bars, kind=None):
    kind = kind or (OutcomeKind.WIN if profit > 0 else OutcomeKind.LOSS)
    return Outcome(T, Orientation.LONG, kind, profit, bars)


def test_max_drawdown():
    assert max_drawdown([100, 120, 90, 130]) == -30
    assert max_drawdown([1, 2, 3]) == 0.0
    assert max_drawdown([]) == 0.0


def test_empty_result():
    result = StrategyTestResultBuilder(1_000).build()
    assert result.n_setups == 0
    assert result.accuracy == 0.0
    assert result.avg_win == 0.0
    assert result.win_std == 0.0
    assert result.ending_account == 1_000
    assert result.account_curve == [1_000]


def test_statistics():
    builder = StrategyTestResultBuilder(1_000)
    for o in (outcome(0.1, 2), outcome(0.2, 4), outcome(-0.05, 1)):
        builder.add_outcome(o)
    builder.add_dropped()
    result = builder.build()

    assert (result.n_setups, result.n_wins, result.n_losses, result.n_dropped) == (3, 2, 1, 1)
    assert result.accuracy == pytest.approx(2 / 3)
    assert result.avg_win == pytest.approx(0.15)
    assert result.avg_loss == pytest.approx(-0.05)
    assert result.avg_profitability == pytest.approx(0.25 / 3)
    assert result.avg_win_bars == pytest.approx(3.0)
    assert result.win_std == pytest.approx(0.0707106781)
    assert result.win_bars_std == pytest.approx(1.4142135623)
    # a single loss has no spread
    assert result.loss_std == 0.0
    assert result.account_curve == pytest.approx([1_000, 1_100, 1_320, 1_254])
    assert result.max_drawdown == pytest.approx(-66.0)

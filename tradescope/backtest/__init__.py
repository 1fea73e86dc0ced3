from .result import (
    Outcome,
    OutcomeKind,
    StrategyTestResult,
    StrategyTestResultBuilder,
    max_drawdown,
)
from .simulator import StrategyTester, test_strategies

__all__ = [
    "Outcome",
    "OutcomeKind",
    "StrategyTestResult",
    "StrategyTestResultBuilder",
    "StrategyTester",
    "max_drawdown",
    "test_strategies",
]

# tradescope/__init__.py
"""
Tradescope - incremental technical indicators and setup backtesting.

Provides a candle time series with per-candle indicator caching, trading
strategies that detect setups on it, resolution rules for those setups and
a walk-forward backtester.
"""

from .backtest import StrategyTester, StrategyTestResult
from .config import EngineConfig, default_config
from .indicators import Indicator, IndicatorType, MAType
from .logging_setup import configure_logging
from .marketdata import Candle, Interval, TimeSeries
from .setups import Setup
from .types import Orientation

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Candle",
    "EngineConfig",
    "Indicator",
    "IndicatorType",
    "Interval",
    "MAType",
    "Orientation",
    "Setup",
    "StrategyTestResult",
    "StrategyTester",
    "TimeSeries",
    "configure_logging",
    "default_config",
]

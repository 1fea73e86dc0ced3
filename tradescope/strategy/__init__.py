from .base import ALL_DAYS, TradingStrategy
from .pmarp_bbwp import PmarpBbwpReversal
from .rsi_basic import RsiBasic
from .silver_cross import SilverCross

__all__ = [
    "ALL_DAYS",
    "PmarpBbwpReversal",
    "RsiBasic",
    "SilverCross",
    "TradingStrategy",
]

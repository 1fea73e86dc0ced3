from .candle import Candle
from .interval import Interval
from .loader import read_candles_csv
from .timeseries import TimeSeries

__all__ = [
    "Candle",
    "Interval",
    "TimeSeries",
    "read_candles_csv",
]

from .events import CandleAddedEvent, SetupFoundEvent
from .messages import AppendCandles, LatestCandles, TrackIndicators
from .owner import TimeSeriesOwner
from .setup_finder import SetupFinder

__all__ = [
    "AppendCandles",
    "CandleAddedEvent",
    "LatestCandles",
    "SetupFinder",
    "SetupFoundEvent",
    "TimeSeriesOwner",
    "TrackIndicators",
]

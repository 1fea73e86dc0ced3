from tradescope.events import DomainEvent, event
from tradescope.marketdata.candle import Candle
from tradescope.marketdata.interval import Interval
from tradescope.setups import Setup


@event
class CandleAddedEvent(DomainEvent):
    """Published by a series owner after a batch was appended."""

    ticker: str
    interval: Interval
    candle: Candle
    n_added: int


@event
class SetupFoundEvent(DomainEvent):
    strategy: str
    setup: Setup

import logging
from typing import Optional

from tradescope.events import EventDispatcher, get_dispatcher
from tradescope.strategy.base import TradingStrategy
from tradescope.streaming.events import CandleAddedEvent, SetupFoundEvent
from tradescope.streaming.owner import TimeSeriesOwner

log = logging.getLogger(__name__)


class SetupFinder:
    """
    Runs a strategy against a live series.

    On every ``CandleAddedEvent`` for the owner's ticker it asks the owner
    for the trailing window the strategy needs and publishes a
    ``SetupFoundEvent`` when the newest candle opens a setup. Only the last
    candle of an appended batch is checked.
    """

    def __init__(
        self,
        owner: TimeSeriesOwner,
        strategy: TradingStrategy,
        dispatcher: Optional[EventDispatcher] = None,
    ):
        self.owner = owner
        self.strategy = strategy
        self._dispatcher = dispatcher or get_dispatcher()

    async def attach(self) -> None:
        """Make the owner track the strategy's indicators and start listening."""
        await self.owner.track(*self.strategy.required_indicators())
        self._dispatcher.subscribe(CandleAddedEvent, self.on_candle_added)

    def detach(self) -> None:
        self._dispatcher.unsubscribe(CandleAddedEvent, self.on_candle_added)

    async def on_candle_added(self, event: CandleAddedEvent) -> None:
        if event.ticker != self.owner.ticker:
            return

        window = await self.owner.latest(self.strategy.candles_needed_for_setup())
        if not window or window[-1].timestamp != event.candle.timestamp:
            # a later append already moved the series on
            return

        orientation = self.strategy.check_last_for_setup(window)
        if orientation is None:
            return

        setup = self.strategy.build_setup(
            window[-1], orientation, self.owner.ticker, self.owner.interval
        )
        log.info(
            "%s setup on %s %s at %s",
            self.strategy,
            setup.ticker,
            setup.orientation.value,
            setup.candle.timestamp,
        )
        await self._dispatcher.publish(SetupFoundEvent(strategy=self.strategy.name, setup=setup))

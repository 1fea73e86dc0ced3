import asyncio
import logging
from typing import Iterable, Optional

from tradescope.errors import TradescopeError
from tradescope.events import EventDispatcher, get_dispatcher
from tradescope.indicators.types import IndicatorType
from tradescope.marketdata.candle import Candle
from tradescope.marketdata.timeseries import TimeSeries
from tradescope.streaming.events import CandleAddedEvent
from tradescope.streaming.messages import (
    AppendCandles,
    LatestCandles,
    OwnerMessage,
    TrackIndicators,
)

log = logging.getLogger(__name__)


class TimeSeriesOwner:
    """
    Asyncio worker that exclusively owns one ``TimeSeries``.

    All reads and writes go through its queue, so the series is only ever
    touched by the worker task. After every accepted append a
    ``CandleAddedEvent`` is published on the dispatcher. Publishing runs in
    its own task, so handlers may query the owner without deadlocking it.

    Example:
        owner = TimeSeriesOwner(TimeSeries("BTCUSD", Interval.HOUR_1, max_length=800))
        await owner.start()
        await owner.append(candles)
        window = await owner.latest(2)
        await owner.stop()
    """

    def __init__(
        self,
        series: TimeSeries,
        dispatcher: Optional[EventDispatcher] = None,
        maxsize: int = 0,
    ):
        self._series = series
        self._dispatcher = dispatcher or get_dispatcher()
        self._queue: asyncio.Queue[Optional[OwnerMessage]] = asyncio.Queue(maxsize)
        self._task: Optional[asyncio.Task] = None
        self._publishing: set[asyncio.Task] = set()

    @property
    def ticker(self) -> str:
        return self._series.ticker

    @property
    def interval(self):
        return self._series.interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"owner-{self.ticker}")
        log.debug("Series owner for %s started", self.ticker)

    async def stop(self) -> None:
        """Let pending publishes finish, drain queued requests and stop the worker.

        Handlers still running at this point may query the owner, so the
        worker stays up until they are done.
        """
        if self._task is None:
            return
        while self._publishing:
            await asyncio.gather(*self._publishing, return_exceptions=True)
        await self._queue.put(None)
        await self._task
        self._task = None
        log.debug("Series owner for %s stopped", self.ticker)

    async def _request(self, factory) -> object:
        if not self.running:
            raise RuntimeError(f"Series owner for {self.ticker} is not running")
        reply = asyncio.get_running_loop().create_future()
        await self._queue.put(factory(reply))
        return await reply

    async def append(self, candles: Iterable[Candle]) -> int:
        """Append a batch; raises ``CandleOrderError`` and applies nothing when out of order."""
        batch = tuple(candles)
        return await self._request(lambda reply: AppendCandles(batch, reply))

    async def latest(self, n: int) -> list[Candle]:
        return await self._request(lambda reply: LatestCandles(n, reply))

    async def track(self, *types: IndicatorType) -> None:
        await self._request(lambda reply: TrackIndicators(tuple(types), reply))

    async def _run(self) -> None:
        while True:
            msg = await self._queue.get()
            try:
                if msg is None:
                    return
                self._handle(msg)
            finally:
                self._queue.task_done()

    def _handle(self, msg: OwnerMessage) -> None:
        if msg.reply.cancelled():
            return
        try:
            if isinstance(msg, AppendCandles):
                self._series.add_candles(msg.candles)
                msg.reply.set_result(len(msg.candles))
                if msg.candles:
                    self._publish(len(msg.candles))
            elif isinstance(msg, LatestCandles):
                msg.reply.set_result(list(self._series.latest(msg.n)))
            elif isinstance(msg, TrackIndicators):
                self._series.populate(*msg.types)
                msg.reply.set_result(None)
        except TradescopeError as e:
            log.warning("Series owner for %s rejected %s: %s", self.ticker, type(msg).__name__, e)
            msg.reply.set_exception(e)
        except Exception as e:
            log.error(
                "Series owner for %s failed on %s: %s",
                self.ticker,
                type(msg).__name__,
                e,
                exc_info=True,
            )
            msg.reply.set_exception(e)

    def _publish(self, n_added: int) -> None:
        if not self._dispatcher.has_subscribers(CandleAddedEvent):
            return
        event = CandleAddedEvent(
            ticker=self._series.ticker,
            interval=self._series.interval,
            candle=self._series.last,
            n_added=n_added,
        )
        task = asyncio.create_task(self._dispatcher.publish(event))
        self._publishing.add(task)
        task.add_done_callback(self._publishing.discard)

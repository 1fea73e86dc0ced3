import asyncio

import pytest
import pytest_asyncio

from tradescope.events import EventDispatcher
from tradescope.indicators import IndicatorType
from tradescope.marketdata import Interval, TimeSeries
from tradescope.resolution import PercentageResolution
from tradescope.strategy import TradingStrategy
from tradescope.streaming import CandleAddedEvent, SetupFinder, SetupFoundEvent, TimeSeriesOwner
from tradescope.types import Orientation


class HighVolume(TradingStrategy):
    name = "High Volume"

    def signal_indicators(self):
        return (IndicatorType.sma(2),)

    def detect(self, window):
        return Orientation.LONG if window[-1].volume > 5 else None

    def default_resolution_strategy(self):
        return PercentageResolution(2.0)


@pytest_asyncio.fixture
async def running():
    dispatcher = EventDispatcher()
    owner = TimeSeriesOwner(TimeSeries("ETHUSD", Interval.DAY_1), dispatcher)
    await owner.start()
    finder = SetupFinder(owner, HighVolume(), dispatcher)
    await finder.attach()

    found = []
    signal = asyncio.Event()

    def on_setup(event):
        found.append(event)
        signal.set()

    dispatcher.subscribe(SetupFoundEvent, on_setup)
    yield owner, finder, found, signal, dispatcher
    await owner.stop()


@pytest.mark.asyncio
async def test_publishes_setup(running, make_candles):
    owner, _, found, signal, _ = running

    await owner.append(make_candles([10, 11, 12], volumes=[1, 1, 9]))
    await asyncio.wait_for(signal.wait(), timeout=1)

    [event] = found
    assert event.strategy == "High Volume"
    assert event.setup.ticker == "ETHUSD"
    assert event.setup.orientation == Orientation.LONG
    assert event.setup.entry_price == 12.0
    assert event.setup.resolution_strategy.initialized


@pytest.mark.asyncio
async def test_attach_tracks_indicators(running, make_candles):
    owner, *_ = running
    await owner.append(make_candles([10, 11, 12]))
    last = (await owner.latest(1))[0]
    assert last.get_indicator(IndicatorType.sma(2)).as_sma().value == pytest.approx(11.5)


@pytest.mark.asyncio
async def test_only_last_candle_of_batch_is_checked(running, make_candles):
    owner, _, found, _, _ = running
    await owner.append(make_candles([10, 11, 12], volumes=[9, 9, 1]))
    await owner.stop()
    assert found == []


@pytest.mark.asyncio
async def test_ignores_other_tickers(running, make_candles):
    owner, finder, found, _, dispatcher = running
    await owner.append(make_candles([10, 11], volumes=[1, 9]))
    await owner.stop()
    found.clear()

    await owner.start()
    candle = (await owner.latest(1))[0]
    await dispatcher.publish(CandleAddedEvent(ticker="BTCUSD", interval=Interval.DAY_1, candle=candle, n_added=1))
    assert found == []


@pytest.mark.asyncio
async def test_detach(running, make_candles):
    owner, finder, found, _, _ = running
    finder.detach()
    await owner.append(make_candles([10, 11], volumes=[1, 9]))
    await owner.stop()
    assert found == []

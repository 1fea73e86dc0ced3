"""Requests accepted by a ``TimeSeriesOwner``.

Each message carries the future the owner resolves with its reply.
"""

import asyncio
from dataclasses import dataclass

from tradescope.indicators.types import IndicatorType
from tradescope.marketdata.candle import Candle


@dataclass(frozen=True)
class AppendCandles:
    """Append a batch atomically. Replies with the number of candles added."""

    candles: tuple[Candle, ...]
    reply: asyncio.Future


@dataclass(frozen=True)
class LatestCandles:
    """Replies with the last ``n`` candles, oldest first."""

    n: int
    reply: asyncio.Future


@dataclass(frozen=True)
class TrackIndicators:
    """Populate indicator types so they roll forward with every append."""

    types: tuple[IndicatorType, ...]
    reply: asyncio.Future


OwnerMessage = AppendCandles | LatestCandles | TrackIndicators

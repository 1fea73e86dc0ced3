"""In-process domain events.

Series owners publish ``CandleAddedEvent`` and setup finders publish
``SetupFoundEvent`` through one ``EventDispatcher``. Subscribing to a base
class receives every subclass event as well, so a handler registered for
``DomainEvent`` sees everything.
"""

import asyncio
import logging
from abc import ABC
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable

from tradescope.time_utils import now_utc

log = logging.getLogger(__name__)


Handler = Callable[["DomainEvent"], None | Awaitable[None]]


def event(cls):
    return dataclass(frozen=True, slots=True)(cls)


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainEvent(ABC):
    timestamp: datetime = field(default_factory=now_utc)


class EventDispatcher:
    """Async event dispatcher for domain events.

    Handlers can be sync or async functions. They run one after another in
    subscription order, most specific event class first. A failing handler
    is logged and does not stop the others.
    """

    def __init__(self):
        self._handlers: dict[type[DomainEvent], list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type[DomainEvent], handler: Handler) -> None:
        """Register a handler for an event type and its subclasses."""
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[DomainEvent], handler: Handler) -> None:
        if handler in self._handlers.get(event_type, ()):
            self._handlers[event_type].remove(handler)

    def handlers_for(self, event_type: type[DomainEvent]) -> list[Handler]:
        """Handlers that would receive an event of ``event_type``."""
        found: list[Handler] = []
        for cls in event_type.__mro__:
            if isinstance(cls, type) and issubclass(cls, DomainEvent):
                found.extend(self._handlers.get(cls, ()))
        return found

    def has_subscribers(self, event_type: type[DomainEvent]) -> bool:
        return bool(self.handlers_for(event_type))

    async def publish(self, event: DomainEvent) -> None:
        # snapshot, so handlers may (un)subscribe while being dispatched
        for handler in self.handlers_for(type(event)):
            try:
                result = handler(event)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                log.error(
                    "Event handler %s failed for %s: %s",
                    getattr(handler, "__name__", repr(handler)),
                    type(event).__name__,
                    e,
                    exc_info=True,
                )


_dispatcher: EventDispatcher | None = None


def get_dispatcher() -> EventDispatcher:
    """Get the process-wide dispatcher, creating it on first use."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = EventDispatcher()
    return _dispatcher


def reset_dispatcher() -> None:
    """Drop the process-wide dispatcher and every subscription on it."""
    global _dispatcher
    _dispatcher = None

"""
In-memory event bus.

Subscriptions live in the process; the bus is owned by the service
container and injected into every application handler.
"""

import asyncio
import logging
from collections import defaultdict
from typing import DefaultDict, List, Type

from core import metrics
from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    Event bus for a single process.

    All subscribers of an event run concurrently. A subscriber that raises
    is logged and counted in ``failed_deliveries``; the publisher and the
    other subscribers are unaffected.
    """

    def __init__(self):
        self._subscriptions: DefaultDict[Type[DomainEvent], List[EventHandler]] = defaultdict(
            list
        )
        self.failed_deliveries = 0

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Subscribe a handler; subscribing the same handler twice is ignored."""
        subscribers = self._subscriptions[event_type]
        if handler in subscribers:
            return
        subscribers.append(handler)
        logger.debug("%s subscribed to %s", type(handler).__name__, event_type.__name__)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._subscriptions.get(event_type, ()))

    async def publish(self, event: DomainEvent) -> None:
        handlers = self.handlers_for(type(event))
        if not handlers:
            logger.debug("No subscribers for %s", event.event_type)
            return

        results = await asyncio.gather(
            *(handler.handle(event) for handler in handlers),
            return_exceptions=True,
        )
        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                self._record_failure(handler, event, result)

    def _record_failure(self, handler: EventHandler, event: DomainEvent, error: Exception):
        self.failed_deliveries += 1
        handler_name = type(handler).__name__
        metrics.event_handler_failures_total.labels(
            event_type=event.event_type, handler=handler_name
        ).inc()
        logger.error(
            "Event handler %s failed for %s %s",
            handler_name,
            event.event_type,
            event.aggregate_id,
            exc_info=error,
            extra={"event_id": str(event.event_id)},
        )

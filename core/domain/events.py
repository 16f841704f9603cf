"""
Domain events.

An event records a state change of an order or a license. Handlers publish
events after the store transaction is released; subscribers (audit trail,
metrics, the license email) never run inside the critical section.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Type
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for order and license events.

    Subclasses take their own fields in ``__init__`` and call ``_base_init``
    with the aggregate the event belongs to: an order id or a license key.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.event_type = cls.__name__

    def _base_init(self, aggregate_id: str, occurred_at: datetime = None) -> None:
        DomainEvent.__init__(
            self,
            event_id=uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=aggregate_id,
            event_type=type(self).__name__,
        )

    def payload(self) -> Dict[str, Any]:
        """Event-specific fields, overridden by subclasses."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Audit-trail representation: envelope fields plus ``data``."""
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
            "data": self.payload(),
        }


class EventHandler(ABC):
    """A subscriber reacting to published events."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        React to one event.

        Raising is allowed; the bus logs the failure and carries on.
        """


class EventBus(ABC):
    """Port for publishing events to subscribers."""

    @abstractmethod
    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Deliver events of ``event_type`` to ``handler``."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver one event to its subscribers."""

    def subscribe_all(
        self, event_types: Iterable[Type[DomainEvent]], handler: EventHandler
    ) -> None:
        for event_type in event_types:
            self.subscribe(event_type, handler)

    async def publish_all(self, events: List[DomainEvent]) -> None:
        """Publish events one after another, in list order."""
        for event in events:
            await self.publish(event)

"""
Event handlers for domain events.

These handlers process domain events after the triggering transaction
has completed, for side effects like audit logging, metrics and the
license delivery email.
"""

import logging

from asgiref.sync import sync_to_async
from django.core.mail import send_mail

from core import metrics
from core.config import ShopSettings
from core.domain.events import DomainEvent, EventBus, EventHandler
from core.infrastructure.store import InMemoryStore
from licenses.domain.events import LicenseActivated, LicenseExpired, LicenseIssued
from orders.domain.events import OrderCancelled, OrderCreated, PaymentConfirmed

logger = logging.getLogger(__name__)

ALL_EVENTS = (
    OrderCreated,
    PaymentConfirmed,
    OrderCancelled,
    LicenseIssued,
    LicenseActivated,
    LicenseExpired,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Logs every domain event and keeps a bounded audit trail in the store.
    """

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        entry = event.to_dict()
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": entry["event_id"],
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": entry["occurred_at"],
            },
        )
        self.store.append_audit_entry(entry)


class MetricsEventHandler(EventHandler):
    """Event handler that feeds the business Prometheus counters."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, OrderCreated):
            metrics.orders_created_total.labels(tier=event.tier_code).inc()
        elif isinstance(event, PaymentConfirmed):
            metrics.payments_confirmed_total.labels(tier=event.tier_code, method=event.method).inc()
            metrics.revenue_total.labels(tier=event.tier_code).inc(event.amount)
        elif isinstance(event, OrderCancelled):
            metrics.orders_cancelled_total.inc()
        elif isinstance(event, LicenseIssued):
            metrics.licenses_issued_total.labels(tier=event.tier_code).inc()
        elif isinstance(event, LicenseActivated):
            metrics.licenses_activated_total.inc()
        elif isinstance(event, LicenseExpired):
            metrics.licenses_expired_total.inc()


class LicenseEmailNotificationHandler(EventHandler):
    """
    Event handler that delivers a newly issued key to the buyer.

    Uses the configured Django email backend (console in development,
    locmem in tests). Delivery failures are logged by the event bus and
    never affect the payment.
    """

    def __init__(self, from_email: str):
        self.from_email = from_email

    async def handle(self, event: DomainEvent) -> None:
        if not isinstance(event, LicenseIssued):
            return

        subject = f"Your license key for order {event.order_id}"
        body = (
            f"Thank you for your purchase.\n\n"
            f"License key: {event.license_key}\n"
            f"Tier: {event.tier_code}\n"
            f"Amount: {event.price}\n"
            f"Valid until: {event.expires_at:%Y-%m-%d %H:%M} UTC\n"
        )
        await sync_to_async(send_mail)(
            subject,
            body,
            self.from_email,
            [event.owner_email],
            fail_silently=False,
        )
        logger.info(
            "License email sent for order %s",
            event.order_id,
            extra={"order_id": event.order_id, "license_key": event.license_key},
        )


def register_event_handlers(
    event_bus: EventBus,
    store: InMemoryStore,
    shop_settings: ShopSettings,
) -> None:
    """
    Register all event handlers with the event bus.

    Args:
        event_bus: Bus owned by the service container
        store: Store receiving the audit trail
        shop_settings: Service configuration
    """
    audit_handler = AuditLogEventHandler(store)
    metrics_handler = MetricsEventHandler()

    event_bus.subscribe_all(ALL_EVENTS, audit_handler)
    event_bus.subscribe_all(ALL_EVENTS, metrics_handler)

    if shop_settings.send_license_emails:
        event_bus.subscribe(
            LicenseIssued, LicenseEmailNotificationHandler(shop_settings.from_email)
        )

    logger.info("Event handlers registered successfully")

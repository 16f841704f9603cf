"""
Service container.

Builds the in-memory store, the repositories bound to it, the event bus
and the application handlers. One container is created per process by
``CoreConfig.ready()``; tests build their own.
"""

import logging
from typing import Optional

from catalog.domain.catalog import Catalog
from core.config import ShopSettings
from core.domain.clock import Clock, utc_now
from core.infrastructure.event_handlers import register_event_handlers
from core.infrastructure.events import InMemoryEventBus
from core.infrastructure.store import InMemoryStore
from licenses.application.handlers.activate_license_handler import ActivateLicenseHandler
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.domain.services import LicenseIssuer
from licenses.infrastructure.repositories.in_memory_license_repository import (
    InMemoryLicenseRepository,
)
from orders.application.handlers.cancel_order_handler import CancelOrderHandler
from orders.application.handlers.confirm_payment_handler import ConfirmPaymentHandler
from orders.application.handlers.create_order_handler import CreateOrderHandler
from orders.application.handlers.find_order_handler import FindOrderHandler
from orders.infrastructure.repositories.in_memory_order_repository import (
    InMemoryOrderRepository,
)
from orders.infrastructure.repositories.in_memory_payment_repository import (
    InMemoryPaymentRepository,
)
from sales.application.handlers.get_statistics_handler import GetStatisticsHandler
from sales.infrastructure.repositories.in_memory_statistics_repository import (
    InMemoryStatisticsRepository,
)

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Wires the store, repositories, event bus and handlers together."""

    def __init__(
        self,
        shop_settings: Optional[ShopSettings] = None,
        catalog: Optional[Catalog] = None,
        clock: Clock = utc_now,
        register_handlers: bool = True,
    ):
        """
        Build a fresh, empty service graph.

        Args:
            shop_settings: Configuration (defaults apply when omitted)
            catalog: Tier and payment method catalog
            clock: Time source shared by every handler
            register_handlers: Subscribe audit, metrics and email handlers
        """
        self.settings = shop_settings or ShopSettings()
        self.catalog = catalog or Catalog()
        self.clock = clock

        self.store = InMemoryStore(today=clock().date(), tier_codes=self.catalog.tier_codes())
        self.order_repository = InMemoryOrderRepository(self.store)
        self.payment_repository = InMemoryPaymentRepository(self.store)
        self.license_repository = InMemoryLicenseRepository(self.store)
        self.statistics_repository = InMemoryStatisticsRepository(self.store)

        self.event_bus = InMemoryEventBus()
        if register_handlers:
            register_event_handlers(self.event_bus, self.store, self.settings)

        self.license_issuer = LicenseIssuer(
            license_repository=self.license_repository,
            statistics_repository=self.statistics_repository,
            max_activations=self.settings.max_activations,
            perpetual_years=self.settings.perpetual_years,
        )

    @classmethod
    def from_django_settings(cls) -> "ServiceContainer":
        container = cls(shop_settings=ShopSettings.from_django_settings())
        logger.info(
            "Service container ready",
            extra={"max_activations": container.settings.max_activations},
        )
        return container

    def create_order_handler(self) -> CreateOrderHandler:
        return CreateOrderHandler(
            order_repository=self.order_repository,
            statistics_repository=self.statistics_repository,
            catalog=self.catalog,
            unit_of_work=self.store,
            event_bus=self.event_bus,
            order_id_prefix=self.settings.order_id_prefix,
            clock=self.clock,
        )

    def confirm_payment_handler(self) -> ConfirmPaymentHandler:
        return ConfirmPaymentHandler(
            order_repository=self.order_repository,
            payment_repository=self.payment_repository,
            statistics_repository=self.statistics_repository,
            license_issuer=self.license_issuer,
            catalog=self.catalog,
            unit_of_work=self.store,
            event_bus=self.event_bus,
            clock=self.clock,
        )

    def cancel_order_handler(self) -> CancelOrderHandler:
        return CancelOrderHandler(
            order_repository=self.order_repository,
            unit_of_work=self.store,
            event_bus=self.event_bus,
            clock=self.clock,
        )

    def find_order_handler(self) -> FindOrderHandler:
        return FindOrderHandler(
            order_repository=self.order_repository,
            unit_of_work=self.store,
        )

    def validate_license_handler(self) -> ValidateLicenseHandler:
        return ValidateLicenseHandler(
            license_repository=self.license_repository,
            unit_of_work=self.store,
            event_bus=self.event_bus,
            clock=self.clock,
        )

    def activate_license_handler(self) -> ActivateLicenseHandler:
        return ActivateLicenseHandler(
            license_repository=self.license_repository,
            unit_of_work=self.store,
            event_bus=self.event_bus,
            clock=self.clock,
        )

    def get_statistics_handler(self) -> GetStatisticsHandler:
        return GetStatisticsHandler(
            statistics_repository=self.statistics_repository,
            order_repository=self.order_repository,
            license_repository=self.license_repository,
            payment_repository=self.payment_repository,
            unit_of_work=self.store,
            recent_orders_limit=self.settings.recent_orders_limit,
            clock=self.clock,
        )

"""
CreateOrderHandler.

Handles the create order command.
"""

import logging

from catalog.domain.catalog import Catalog
from core.domain.clock import Clock, utc_now
from core.domain.events import EventBus
from core.ports.unit_of_work import UnitOfWork
from orders.application.commands.create_order import CreateOrderCommand
from orders.application.dto.order_dto import OrderDTO
from orders.domain.events import OrderCreated
from orders.domain.order import Order
from orders.ports.order_repository import OrderRepository
from sales.ports.statistics_repository import StatisticsRepository

logger = logging.getLogger(__name__)


class CreateOrderHandler:
    """Handler for CreateOrderCommand."""

    def __init__(
        self,
        order_repository: OrderRepository,
        statistics_repository: StatisticsRepository,
        catalog: Catalog,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        order_id_prefix: str = "SNK",
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.order_repository = order_repository
        self.statistics_repository = statistics_repository
        self.catalog = catalog
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.order_id_prefix = order_id_prefix
        self.clock = clock

    async def handle(self, command: CreateOrderCommand) -> OrderDTO:
        """
        Handle create order command.

        Tier and payment method are checked against the catalog; the
        price is captured from the catalog at this instant.

        Args:
            command: CreateOrderCommand

        Returns:
            OrderDTO of the new pending order

        Raises:
            InvalidTierError: If the tier is not in the catalog
            InvalidPaymentMethodError: If the payment method is not offered
        """
        tier = self.catalog.get_tier(command.tier_code)
        self.catalog.get_payment_method(command.payment_method)
        now = self.clock()

        with self.unit_of_work.atomic():
            order = Order.create(
                tier=tier,
                buyer_email=command.email,
                payment_method=command.payment_method,
                now=now,
                extra=command.extra,
                order_id_prefix=self.order_id_prefix,
            )
            self.order_repository.save(order)
            self.statistics_repository.record_order(now)

        logger.info(
            "Order created: %s",
            order.id,
            extra={"order_id": order.id, "tier": tier.code, "price": order.price},
        )

        await self.event_bus.publish(
            OrderCreated(
                order_id=order.id,
                tier_code=order.tier_code,
                buyer_email=str(order.buyer_email),
                price=order.price,
                occurred_at=now,
            )
        )

        return OrderDTO.from_entity(order)

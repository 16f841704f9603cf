"""
CancelOrderHandler.

Handles the cancel order command.
"""

import logging

from core.domain.clock import Clock, utc_now
from core.domain.events import EventBus
from core.domain.exceptions import OrderNotFoundError
from core.ports.unit_of_work import UnitOfWork
from orders.application.commands.cancel_order import CancelOrderCommand
from orders.application.dto.order_dto import OrderDTO
from orders.domain.events import OrderCancelled
from orders.ports.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class CancelOrderHandler:
    """Handler for CancelOrderCommand."""

    def __init__(
        self,
        order_repository: OrderRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.order_repository = order_repository
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock

    async def handle(self, command: CancelOrderCommand) -> OrderDTO:
        """
        Handle cancel order command.

        Cancelling an order that is already cancelled succeeds without
        changing anything.

        Args:
            command: CancelOrderCommand

        Returns:
            OrderDTO of the cancelled order

        Raises:
            OrderNotFoundError: If the order does not exist
            AlreadyPaidError: If the order was paid
        """
        with self.unit_of_work.atomic():
            order = self.order_repository.find_by_id(command.order_id)
            if not order:
                raise OrderNotFoundError(command.order_id)

            cancelled = order.cancel()
            changed = cancelled is not order
            if changed:
                self.order_repository.save(cancelled)

        if changed:
            logger.info("Order cancelled: %s", cancelled.id, extra={"order_id": cancelled.id})
            await self.event_bus.publish(
                OrderCancelled(order_id=cancelled.id, occurred_at=self.clock())
            )

        return OrderDTO.from_entity(cancelled)

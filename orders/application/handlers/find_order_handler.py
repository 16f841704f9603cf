"""
FindOrderHandler.

Handles the find order query.
"""

from typing import Optional

from core.ports.unit_of_work import UnitOfWork
from orders.application.dto.order_dto import OrderDTO
from orders.application.queries.find_order import FindOrderQuery
from orders.ports.order_repository import OrderRepository


class FindOrderHandler:
    """Handler for FindOrderQuery."""

    def __init__(self, order_repository: OrderRepository, unit_of_work: UnitOfWork):
        """Initialize handler with repositories."""
        self.order_repository = order_repository
        self.unit_of_work = unit_of_work

    async def handle(self, query: FindOrderQuery) -> Optional[OrderDTO]:
        """
        Handle find order query.

        An exact id match wins; otherwise the buyer's most recent order is
        returned. No match is not an error.

        Args:
            query: FindOrderQuery

        Returns:
            OrderDTO or None
        """
        order = None
        with self.unit_of_work.atomic():
            if query.order_id:
                order = self.order_repository.find_by_id(query.order_id)
            if order is None and query.email:
                order = self.order_repository.find_latest_by_email(query.email)

        return OrderDTO.from_entity(order) if order else None

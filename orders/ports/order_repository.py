"""
Order repository port (interface).

This defines the contract for order persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from orders.domain.order import Order


class OrderRepository(ABC):
    """
    Abstract repository for Order entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def save(self, order: Order) -> Order:
        """
        Save an order entity, replacing any order with the same id.

        Args:
            order: Order entity to save

        Returns:
            Saved order entity
        """
        pass

    @abstractmethod
    def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Find an order by ID.

        Args:
            order_id: Order id

        Returns:
            Order entity or None if not found
        """
        pass

    @abstractmethod
    def find_latest_by_email(self, email: str) -> Optional[Order]:
        """
        Find the most recently created order of a buyer.

        Ties on ``created_at`` go to the order inserted last.

        Args:
            email: Buyer email address

        Returns:
            Order entity or None if the buyer has no order
        """
        pass

    @abstractmethod
    def list_recent(self, limit: int) -> List[Order]:
        """Return up to ``limit`` orders, newest first."""
        pass

    @abstractmethod
    def count(self) -> int:
        pass

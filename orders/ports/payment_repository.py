"""
Payment record repository port (interface).
"""
from abc import ABC, abstractmethod

from orders.domain.payment import PaymentRecord


class PaymentRepository(ABC):
    """Append-only repository for PaymentRecord entries."""

    @abstractmethod
    def append(self, record: PaymentRecord) -> PaymentRecord:
        """
        Append a payment record.

        Args:
            record: Payment record to store

        Returns:
            Stored payment record

        Raises:
            ValueError: If a record with the same id exists
        """
        pass

    @abstractmethod
    def exists(self, payment_id: str) -> bool:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

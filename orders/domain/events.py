"""
Order domain events.

Domain events represent something that happened in the order domain.
"""

from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class OrderCreated(DomainEvent):
    """Event raised when an order is created."""

    def __init__(
        self,
        order_id: str,
        tier_code: str,
        buyer_email: str,
        price: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize OrderCreated event.

        Args:
            order_id: Order id
            tier_code: Tier being bought
            buyer_email: Buyer email
            price: Price captured at creation
            occurred_at: When the event occurred
        """
        self._base_init(order_id, occurred_at)
        self.order_id = order_id
        self.tier_code = tier_code
        self.buyer_email = buyer_email
        self.price = price

    def payload(self):
        return {
            "tier": self.tier_code,
            "email": self.buyer_email,
            "price": self.price,
        }


class PaymentConfirmed(DomainEvent):
    """Event raised when an order is paid."""

    def __init__(
        self,
        order_id: str,
        payment_id: str,
        license_key: str,
        tier_code: str,
        amount: int,
        method: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize PaymentConfirmed event.

        Args:
            order_id: Order id
            payment_id: Payment record id
            license_key: License issued for the order
            tier_code: Tier bought
            amount: Revenue booked
            method: Payment method code
            occurred_at: When the event occurred
        """
        self._base_init(order_id, occurred_at)
        self.order_id = order_id
        self.payment_id = payment_id
        self.license_key = license_key
        self.tier_code = tier_code
        self.amount = amount
        self.method = method

    def payload(self):
        return {
            "payment_id": self.payment_id,
            "license_key": self.license_key,
            "tier": self.tier_code,
            "amount": self.amount,
            "method": self.method,
        }


class OrderCancelled(DomainEvent):
    """Event raised when a pending order is cancelled."""

    def __init__(self, order_id: str, occurred_at: Optional[datetime] = None):
        self._base_init(order_id, occurred_at)
        self.order_id = order_id

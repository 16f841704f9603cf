"""
Order domain entity.

This is the core domain entity representing a purchase intent.
It contains the order state machine and is independent of infrastructure.

    PENDING --confirm payment--> PAID
    PENDING --cancel-----------> CANCELLED

PAID and CANCELLED are terminal.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional

from catalog.domain.tier import ProductTier
from core.domain.exceptions import AlreadyPaidError, OrderCancelledError
from core.domain.value_objects import Email, OrderStatus
from orders.domain.order_id import generate_order_id
from orders.domain.payment import PaymentDetails, PaymentEvidence


@dataclass(frozen=True)
class Order:
    """
    Order domain entity.

    ``license_key`` is set if and only if the order is PAID. ``price`` is
    captured from the catalog when the order is created and never recomputed.
    """

    id: str
    tier_code: str
    status: OrderStatus
    buyer_email: Email
    price: int
    payment_method: str
    created_at: datetime
    payment_details: PaymentDetails
    paid_at: Optional[datetime] = None
    license_key: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate order entity."""
        if not self.id:
            raise ValueError("Order ID is required")
        if self.price < 0:
            raise ValueError("Order price cannot be negative")
        if (self.status == OrderStatus.PAID) != (self.license_key is not None):
            raise ValueError("License key must be set exactly when the order is paid")

    @classmethod
    def create(
        cls,
        tier: ProductTier,
        buyer_email: str,
        payment_method: str,
        now: datetime,
        extra: Optional[Dict[str, Any]] = None,
        order_id_prefix: str = "SNK",
        order_id: Optional[str] = None,
    ) -> "Order":
        """
        Create a new pending Order.

        Args:
            tier: Catalog tier being bought (price is captured from it)
            buyer_email: Buyer email address
            payment_method: Payment method code
            now: Creation time
            extra: Free-form buyer information
            order_id_prefix: Prefix for generated ids
            order_id: Optional id (generated if not provided)

        Returns:
            Order entity instance
        """
        return cls(
            id=order_id or generate_order_id(now, order_id_prefix),
            tier_code=tier.code,
            status=OrderStatus.PENDING,
            buyer_email=Email(buyer_email),
            price=tier.price,
            payment_method=payment_method,
            created_at=now,
            payment_details=PaymentDetails(amount=tier.price),
            extra=dict(extra or {}),
        )

    @property
    def is_paid(self) -> bool:
        return self.status == OrderStatus.PAID

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED

    def ensure_payable(self) -> None:
        """
        Enforce the payment rules.

        Paid orders are never paid twice, and cancelled orders are not payable.

        Raises:
            AlreadyPaidError: If the order is already paid
            OrderCancelledError: If the order was cancelled
        """
        if self.is_paid:
            raise AlreadyPaidError(self.id, self.license_key)
        if self.is_cancelled:
            raise OrderCancelledError(self.id)

    def mark_paid(
        self,
        license_key: str,
        evidence: PaymentEvidence,
        transaction_id: str,
        now: datetime,
    ) -> "Order":
        """
        Create a new Order instance in PAID status.

        Args:
            license_key: Key of the license issued for this order
            evidence: Reported payment data
            transaction_id: Fallback transaction id when evidence has none
            now: Payment time

        Returns:
            New Order instance
        """
        self.ensure_payable()
        details = replace(
            self.payment_details,
            transaction_id=evidence.transaction_id or transaction_id,
            payer=evidence.payer or str(self.buyer_email),
            paid_amount=evidence.amount if evidence.amount is not None else self.price,
            paid_at=now,
        )
        return replace(
            self,
            status=OrderStatus.PAID,
            paid_at=now,
            license_key=license_key,
            payment_details=details,
        )

    def cancel(self) -> "Order":
        """
        Create a new Order instance in CANCELLED status.

        Cancelling an already cancelled order returns it unchanged.

        Raises:
            AlreadyPaidError: If the order is paid
        """
        if self.is_paid:
            raise AlreadyPaidError(self.id, self.license_key)
        if self.is_cancelled:
            return self
        return replace(self, status=OrderStatus.CANCELLED)

"""
Order DTOs for API responses.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from licenses.application.dto.license_dto import LicenseDTO
from orders.domain.order import Order


@dataclass
class PaymentDetailsDTO:
    """DTO for the payment details of an order."""

    amount: int
    transaction_id: Optional[str]
    payer: Optional[str]
    paid_amount: Optional[int]
    paid_at: Optional[datetime]


@dataclass
class OrderDTO:
    """DTO for order information."""

    id: str
    tier: str
    status: str
    email: str
    price: int
    payment_method: str
    created_at: datetime
    paid_at: Optional[datetime]
    license_key: Optional[str]
    payment_details: PaymentDetailsDTO
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_entity(cls, order: Order) -> "OrderDTO":
        details = order.payment_details
        return cls(
            id=order.id,
            tier=order.tier_code,
            status=order.status.value,
            email=str(order.buyer_email),
            price=order.price,
            payment_method=order.payment_method,
            created_at=order.created_at,
            paid_at=order.paid_at,
            license_key=order.license_key,
            payment_details=PaymentDetailsDTO(
                amount=details.amount,
                transaction_id=details.transaction_id,
                payer=details.payer,
                paid_amount=details.paid_amount,
                paid_at=details.paid_at,
            ),
            extra=dict(order.extra),
        )


@dataclass
class PaymentConfirmationDTO:
    """DTO for a confirmed payment: the paid order and its license."""

    order: OrderDTO
    license: LicenseDTO
    payment_id: str

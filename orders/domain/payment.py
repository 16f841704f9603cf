"""
Payment value objects and the payment audit record.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PaymentEvidence:
    """
    What the (simulated) payment channel reports for a confirmation.

    Every field is optional; missing values default to the order's own
    email and price.
    """

    transaction_id: Optional[str] = None
    payer: Optional[str] = None
    amount: Optional[int] = None


@dataclass(frozen=True)
class PaymentDetails:
    """Payment details carried on an order."""

    amount: int
    transaction_id: Optional[str] = None
    payer: Optional[str] = None
    paid_amount: Optional[int] = None
    paid_at: Optional[datetime] = None


@dataclass(frozen=True)
class PaymentRecord:
    """Append-only audit entry written when an order is paid."""

    id: str
    order_id: str
    license_key: str
    amount: int
    method: str
    occurred_at: datetime
    payer: str

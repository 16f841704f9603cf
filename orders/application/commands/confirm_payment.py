"""
ConfirmPaymentCommand.

Command to confirm the (simulated) payment of an order.
"""

from dataclasses import dataclass, field

from orders.domain.payment import PaymentEvidence


@dataclass
class ConfirmPaymentCommand:
    """Command to confirm payment and issue the license."""

    order_id: str
    evidence: PaymentEvidence = field(default_factory=PaymentEvidence)

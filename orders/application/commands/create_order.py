"""
CreateOrderCommand.

Command to open a pending order for a catalog tier.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class CreateOrderCommand:
    """Command to create an order."""

    tier_code: str
    email: str
    payment_method: str
    extra: Dict[str, Any] = field(default_factory=dict)  # e.g. qq, note

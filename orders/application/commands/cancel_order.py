"""
CancelOrderCommand.
"""

from dataclasses import dataclass


@dataclass
class CancelOrderCommand:
    """Command to cancel a pending order."""

    order_id: str

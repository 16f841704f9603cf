"""
License domain events.

Domain events represent something that happened in the license domain.
"""

from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicenseIssued(DomainEvent):
    """Event raised when a license is issued for a paid order."""

    def __init__(
        self,
        license_key: str,
        order_id: str,
        tier_code: str,
        owner_email: str,
        expires_at: datetime,
        price: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseIssued event.

        Args:
            license_key: Issued license key
            order_id: Order that paid for it
            tier_code: Tier of the license
            owner_email: Where the key is delivered
            expires_at: Expiration datetime
            price: Order price, used in the delivery message
            occurred_at: When the event occurred
        """
        self._base_init(license_key, occurred_at)
        self.license_key = license_key
        self.order_id = order_id
        self.tier_code = tier_code
        self.owner_email = owner_email
        self.expires_at = expires_at
        self.price = price

    def payload(self):
        return {
            "order_id": self.order_id,
            "tier": self.tier_code,
            "expires_at": self.expires_at.isoformat(),
            "price": self.price,
        }


class LicenseActivated(DomainEvent):
    """Event raised when a device takes an activation slot."""

    def __init__(
        self,
        license_key: str,
        device_id: str,
        activation_count: int,
        max_activations: int,
        occurred_at: Optional[datetime] = None,
    ):
        self._base_init(license_key, occurred_at)
        self.license_key = license_key
        self.device_id = device_id
        self.activation_count = activation_count
        self.max_activations = max_activations

    def payload(self):
        return {
            "device_id": self.device_id,
            "activation_count": self.activation_count,
            "max_activations": self.max_activations,
        }


class LicenseExpired(DomainEvent):
    """Event raised when a validation first observes an expired license."""

    def __init__(
        self,
        license_key: str,
        expires_at: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        self._base_init(license_key, occurred_at)
        self.license_key = license_key
        self.expires_at = expires_at

    def payload(self):
        return {"expires_at": self.expires_at.isoformat()}

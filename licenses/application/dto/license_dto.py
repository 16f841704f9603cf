"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for a newly issued license."""

    key: str
    tier: str
    status: str
    created_at: datetime
    expires_at: datetime
    order_id: str
    owner_email: str
    activation_count: int
    max_activations: int

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        return cls(
            key=license.key,
            tier=license.tier_code,
            status=license.status.value,
            created_at=license.created_at,
            expires_at=license.expires_at,
            order_id=license.order_id,
            owner_email=str(license.owner_email),
            activation_count=license.activation_count,
            max_activations=license.max_activations,
        )


@dataclass
class LicenseViewDTO:
    """DTO for a successful validation or activation."""

    key: str
    tier: str
    status: str
    expires_at: datetime
    activation_count: int
    max_activations: int
    activations_remaining: int
    device_bound: bool
    remaining_days: int
    last_used_at: Optional[datetime]

    @classmethod
    def from_entity(cls, license: License, device_id: str, now: datetime) -> "LicenseViewDTO":
        return cls(
            key=license.key,
            tier=license.tier_code,
            status=license.status.value,
            expires_at=license.expires_at,
            activation_count=license.activation_count,
            max_activations=license.max_activations,
            activations_remaining=license.max_activations - license.activation_count,
            device_bound=license.is_bound_to(device_id),
            remaining_days=license.remaining_days(now),
            last_used_at=license.last_used_at,
        )

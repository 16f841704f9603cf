"""
License domain entity.

This is the core domain entity representing an issued license.
It contains business logic and is independent of infrastructure.
"""
import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import FrozenSet, Optional

from core.domain.value_objects import Email, LicenseStatus

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents a credential issued for a paid order. ``activation_count``
    is the number of activation slots in use; each slot binds one device.
    A license with no bound devices validates on any device.
    This is an immutable value object with business logic.
    """

    key: str
    tier_code: str
    status: LicenseStatus
    created_at: datetime
    expires_at: datetime
    order_id: str
    owner_email: Email
    activation_count: int
    max_activations: int
    bound_device_ids: FrozenSet[str] = frozenset()
    last_used_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.key:
            raise ValueError("License key is required")
        if not self.order_id:
            raise ValueError("Order ID is required")
        if self.max_activations < 1:
            raise ValueError("Max activations must be at least 1")
        if self.activation_count < 0 or self.activation_count > self.max_activations:
            raise ValueError("Activation count must be between 0 and max activations")
        if self.expires_at < self.created_at:
            raise ValueError("Expiration cannot precede creation")

    @classmethod
    def create(
        cls,
        key: str,
        tier_code: str,
        order_id: str,
        owner_email: str,
        expires_at: datetime,
        max_activations: int,
        now: datetime,
    ) -> "License":
        """
        Create a new, not yet activated License.

        Args:
            key: Generated license key
            tier_code: Tier the license was bought for
            order_id: Order that paid for the license
            owner_email: Buyer email address
            expires_at: Expiration datetime
            max_activations: Number of activation slots
            now: Issue time

        Returns:
            License entity instance
        """
        return cls(
            key=key,
            tier_code=tier_code,
            status=LicenseStatus.INACTIVE,
            created_at=now,
            expires_at=expires_at,
            order_id=order_id,
            owner_email=Email(owner_email),
            activation_count=0,
            max_activations=max_activations,
            bound_device_ids=frozenset(),
            last_used_at=None,
        )

    @property
    def is_banned(self) -> bool:
        return self.status == LicenseStatus.BANNED

    def is_expired_at(self, current_time: datetime) -> bool:
        """True once ``current_time`` is strictly past the expiry."""
        return current_time > self.expires_at

    @property
    def slots_exhausted(self) -> bool:
        return self.activation_count >= self.max_activations

    @property
    def is_device_locked(self) -> bool:
        return len(self.bound_device_ids) > 0

    def is_bound_to(self, device_id: str) -> bool:
        return device_id in self.bound_device_ids

    def remaining_days(self, current_time: datetime) -> int:
        """
        Whole days left before expiry, rounded up.

        Args:
            current_time: Reference time

        Returns:
            ceil((expires_at - current_time) / 1 day)
        """
        return math.ceil((self.expires_at - current_time) / ONE_DAY)

    def mark_expired(self) -> "License":
        """
        Create a new License instance with expired status.

        Returns:
            New License instance with expired status
        """
        if self.status == LicenseStatus.EXPIRED:
            return self
        return replace(self, status=LicenseStatus.EXPIRED)

    def touch(self, current_time: datetime) -> "License":
        """Create a new License instance with ``last_used_at`` updated."""
        return replace(self, last_used_at=current_time)

    def bind_device(self, device_id: str, current_time: datetime) -> "License":
        """
        Create a new License instance with ``device_id`` taking one slot.

        Binding a device that is already bound returns the license with only
        ``last_used_at`` refreshed.

        Raises:
            ValueError: If no activation slot is left
        """
        if self.is_bound_to(device_id):
            return self.touch(current_time)
        if self.slots_exhausted:
            raise ValueError("No activation slot left")
        return replace(
            self,
            status=LicenseStatus.ACTIVE,
            activation_count=self.activation_count + 1,
            bound_device_ids=self.bound_device_ids | {device_id},
            last_used_at=current_time,
        )

"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity: issuing a license for a paid order,
and checking or activating a license on a device.

Callers run these inside ``InMemoryStore.atomic()`` so each
read-modify-write is applied as a whole.
"""
from datetime import datetime
from typing import Tuple

from catalog.domain.tier import ProductTier
from core.domain.exceptions import (
    ActivationLimitReachedError,
    DeviceNotAuthorizedError,
    IdentifierCollisionError,
    LicenseBannedError,
    LicenseExpiredError,
    LicenseNotFoundError,
)
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key, has_valid_checksum
from licenses.ports.license_repository import LicenseRepository
from sales.ports.statistics_repository import StatisticsRepository

KEY_ATTEMPTS = 5


class LicenseKeyGenerator:
    """Domain service for license key generation."""

    @staticmethod
    def generate(tier: ProductTier) -> str:
        """
        Generate a license key for a tier.

        Args:
            tier: Catalog tier, supplies the key prefix

        Returns:
            Generated license key string
        """
        return generate_license_key(tier.key_prefix)


class LicenseIssuer:
    """Domain service that mints a license for a paid order."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        statistics_repository: StatisticsRepository,
        max_activations: int = 3,
        perpetual_years: int = 100,
    ):
        self.license_repository = license_repository
        self.statistics_repository = statistics_repository
        self.max_activations = max_activations
        self.perpetual_years = perpetual_years

    def build(
        self,
        tier: ProductTier,
        order_id: str,
        owner_email: str,
        now: datetime,
    ) -> License:
        """
        Build a new license without storing it.

        The key is regenerated while it collides with a stored license.

        Args:
            tier: Tier bought, determines expiry and key prefix
            order_id: Paid order id
            owner_email: Buyer email
            now: Issue time

        Returns:
            Unsaved License entity

        Raises:
            IdentifierCollisionError: If no unused key was found
        """
        for _ in range(KEY_ATTEMPTS):
            key = LicenseKeyGenerator.generate(tier)
            if self.license_repository.find_by_key(key) is None:
                break
        else:
            raise IdentifierCollisionError("license key", KEY_ATTEMPTS)

        return License.create(
            key=key,
            tier_code=tier.code,
            order_id=order_id,
            owner_email=owner_email,
            expires_at=tier.expiry_from(now, self.perpetual_years),
            max_activations=self.max_activations,
            now=now,
        )

    def store(self, license: License) -> License:
        """Save a built license and count it in the sales statistics."""
        saved = self.license_repository.save(license)
        self.statistics_repository.record_license(license.created_at)
        return saved


class LicenseValidator:
    """
    Domain service for license validation and activation.

    ``validate`` never changes activation slots or device bindings, but it
    does write two things: ``status = EXPIRED`` the first time it observes
    an expired license, and ``last_used_at`` on success.
    """

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    def _usable_license(self, key: str, now: datetime) -> License:
        """
        Run the checks shared by validation and activation.

        Raises:
            LicenseNotFoundError: Unknown or malformed key
            LicenseBannedError: License was banned
            LicenseExpiredError: License is past its expiry
        """
        if not has_valid_checksum(key):
            raise LicenseNotFoundError()
        license = self.license_repository.find_by_key(key)
        if license is None:
            raise LicenseNotFoundError()

        if license.is_banned:
            raise LicenseBannedError(key)

        if license.is_expired_at(now):
            expired = license.mark_expired()
            newly_expired = expired is not license
            if newly_expired:
                self.license_repository.save(expired)
            raise LicenseExpiredError(key, license.expires_at, newly_expired=newly_expired)

        return license

    def validate(self, key: str, device_id: str, now: datetime) -> License:
        """
        Validate a license for a device.

        Checks run in order and stop at the first failure: not found,
        banned, expired, activation limit, device binding.

        Args:
            key: License key
            device_id: Device asking for access
            now: Current time

        Returns:
            License entity with ``last_used_at`` updated

        Raises:
            LicenseNotFoundError, LicenseBannedError, LicenseExpiredError,
            ActivationLimitReachedError, DeviceNotAuthorizedError
        """
        license = self._usable_license(key, now)

        if license.slots_exhausted and not license.is_bound_to(device_id):
            raise ActivationLimitReachedError(license.activation_count, license.max_activations)

        if license.is_device_locked and not license.is_bound_to(device_id):
            raise DeviceNotAuthorizedError(
                device_id, license.activation_count, license.max_activations
            )

        return self.license_repository.save(license.touch(now))

    def activate(self, key: str, device_id: str, now: datetime) -> Tuple[License, bool]:
        """
        Bind a device to a license, taking one activation slot.

        Activating an already bound device does not take another slot.

        Args:
            key: License key
            device_id: Device to bind
            now: Current time

        Returns:
            Tuple of (updated license, whether a new slot was taken)

        Raises:
            LicenseNotFoundError, LicenseBannedError, LicenseExpiredError,
            ActivationLimitReachedError
        """
        license = self._usable_license(key, now)

        if license.is_bound_to(device_id):
            return self.license_repository.save(license.touch(now)), False

        if license.slots_exhausted:
            raise ActivationLimitReachedError(license.activation_count, license.max_activations)

        activated = license.bind_device(device_id, now)
        return self.license_repository.save(activated), True

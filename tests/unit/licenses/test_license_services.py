"""
Unit tests for License domain services.
"""
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from catalog.domain.catalog import Catalog
from core.domain.exceptions import (
    ActivationLimitReachedError,
    DeviceNotAuthorizedError,
    IdentifierCollisionError,
    LicenseBannedError,
    LicenseExpiredError,
    LicenseNotFoundError,
)
from core.domain.value_objects import LicenseStatus
from core.infrastructure.store import InMemoryStore
from licenses.domain.license_key import compute_checksum
from licenses.domain.services import LicenseIssuer, LicenseKeyGenerator, LicenseValidator
from licenses.infrastructure.repositories.in_memory_license_repository import (
    InMemoryLicenseRepository,
)
from sales.infrastructure.repositories.in_memory_statistics_repository import (
    InMemoryStatisticsRepository,
)

NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def memory_store():
    return InMemoryStore(today=NOW.date(), tier_codes=Catalog().tier_codes())


@pytest.fixture
def license_repository(memory_store):
    return InMemoryLicenseRepository(memory_store)


@pytest.fixture
def issuer(memory_store, license_repository):
    return LicenseIssuer(
        license_repository=license_repository,
        statistics_repository=InMemoryStatisticsRepository(memory_store),
        max_activations=3,
    )


@pytest.fixture
def validator(license_repository):
    return LicenseValidator(license_repository)


def issue(issuer, tier_code, order_id="SNK261018ABC123"):
    license = issuer.build(Catalog().get_tier(tier_code), order_id, "buyer@example.com", NOW)
    return issuer.store(license)


@pytest.fixture
def week_license(issuer):
    return issue(issuer, "WEEK")


class TestLicenseIssuer:
    """Tests for LicenseIssuer service."""

    @pytest.mark.parametrize("code", ["DAY", "WEEK", "MONTH", "YEAR"])
    def test_expiry_matches_tier(self, issuer, code):
        """Test that expiry is the tier duration after issue."""
        tier = Catalog().get_tier(code)

        license = issue(issuer, code, f"SNK-{code}")

        assert license.expires_at - license.created_at == timedelta(days=tier.duration_days)
        assert license.key.startswith(tier.key_prefix + "-")

    def test_perpetual_license(self, issuer):
        """Test that perpetual licenses last at least 50 years."""
        license = issue(issuer, "LIFETIME")

        assert license.expires_at - NOW >= timedelta(days=365 * 50)

    def test_build_does_not_write(self, issuer, license_repository, memory_store):
        """Test that building a license leaves the store untouched."""
        license = issuer.build(Catalog().get_tier("DAY"), "SNK1", "buyer@example.com", NOW)

        assert license_repository.find_by_key(license.key) is None
        assert memory_store.statistics.total_licenses == 0

    def test_store_saves_and_counts(self, issuer, license_repository, memory_store):
        license = issue(issuer, "DAY", "SNK1")

        assert license_repository.find_by_key(license.key) == license
        assert license.order_id == "SNK1"
        assert memory_store.statistics.total_licenses == 1
        assert memory_store.statistics.today_licenses == 1

    def test_build_regenerates_colliding_key(self, issuer, week_license, monkeypatch):
        fresh_key = "SNK-W-0123456789ABCDEF-" + compute_checksum("0123456789ABCDEF")
        keys = iter([week_license.key, fresh_key])
        monkeypatch.setattr(LicenseKeyGenerator, "generate", staticmethod(lambda tier: next(keys)))

        license = issuer.build(Catalog().get_tier("WEEK"), "SNK2", "other@example.com", NOW)

        assert license.key == fresh_key

    def test_build_gives_up_on_repeated_collisions(self, issuer, week_license, monkeypatch):
        monkeypatch.setattr(
            LicenseKeyGenerator, "generate", staticmethod(lambda tier: week_license.key)
        )

        with pytest.raises(IdentifierCollisionError):
            issuer.build(Catalog().get_tier("WEEK"), "SNK2", "other@example.com", NOW)


class TestLicenseValidator:
    """Tests for LicenseValidator service."""

    def test_validate_unbound_license(self, validator, week_license):
        """Test a license without bindings validates on any device."""
        later = NOW + timedelta(hours=2)

        license = validator.validate(week_license.key, "any-device", later)

        assert license.last_used_at == later
        assert license.activation_count == 0
        assert license.bound_device_ids == frozenset()

    def test_validate_unknown_key(self, validator):
        """Test an unknown but well-formed key."""
        random_part = "0123456789ABCDEF"
        key = f"SNK-W-{random_part}-{compute_checksum(random_part)}"

        with pytest.raises(LicenseNotFoundError):
            validator.validate(key, "device-a", NOW)

    def test_validate_malformed_key(self, validator, license_repository):
        with pytest.raises(LicenseNotFoundError):
            validator.validate("garbage", "device-a", NOW)

    def test_validate_banned(self, validator, week_license, license_repository):
        """Test that a ban takes precedence over expiry."""
        license_repository.save(replace(week_license, status=LicenseStatus.BANNED))

        with pytest.raises(LicenseBannedError):
            validator.validate(week_license.key, "device-a", NOW + timedelta(days=30))

    def test_validate_expired_persists_status(self, validator, week_license, license_repository):
        """Test the first observation past expiry stores EXPIRED."""
        after_expiry = week_license.expires_at + timedelta(seconds=1)

        with pytest.raises(LicenseExpiredError) as exc_info:
            validator.validate(week_license.key, "device-a", after_expiry)

        assert exc_info.value.newly_expired is True
        assert exc_info.value.expired_at == week_license.expires_at
        stored = license_repository.find_by_key(week_license.key)
        assert stored.status == LicenseStatus.EXPIRED

        with pytest.raises(LicenseExpiredError) as exc_info:
            validator.validate(week_license.key, "device-a", after_expiry)
        assert exc_info.value.newly_expired is False

    def test_validate_at_expiry_instant(self, validator, week_license):
        """Test that the license is still valid exactly at expires_at."""
        license = validator.validate(week_license.key, "device-a", week_license.expires_at)
        assert license.remaining_days(week_license.expires_at) == 0

    def test_device_binding(self, validator, week_license):
        """Test a bound license only validates on its devices."""
        validator.activate(week_license.key, "device-a", NOW)

        assert validator.validate(week_license.key, "device-a", NOW).is_bound_to("device-a")
        with pytest.raises(DeviceNotAuthorizedError) as exc_info:
            validator.validate(week_license.key, "device-b", NOW)

        assert exc_info.value.details["activation_count"] == 1
        assert exc_info.value.details["max_activations"] == 3

    def test_activation_limit(self, validator, week_license):
        """Test that an unbound device is refused once all slots are taken."""
        for device in ("device-a", "device-b", "device-c"):
            validator.activate(week_license.key, device, NOW)

        with pytest.raises(ActivationLimitReachedError):
            validator.validate(week_license.key, "device-d", NOW)
        with pytest.raises(ActivationLimitReachedError):
            validator.activate(week_license.key, "device-d", NOW)

        # Bound devices keep working
        assert validator.validate(week_license.key, "device-c", NOW).activation_count == 3

    def test_full_slots_reject_only_new_devices(self, validator, week_license, license_repository):
        """Test that a full license keeps validating its bound devices."""
        devices = ("device-a", "device-b", "device-c")
        for device in devices:
            validator.activate(week_license.key, device, NOW)

        for device in devices:
            assert validator.validate(week_license.key, device, NOW).is_bound_to(device)

        with pytest.raises(ActivationLimitReachedError) as exc_info:
            validator.validate(week_license.key, "device-new", NOW)
        assert exc_info.value.details == {"activation_count": 3, "max_activations": 3}
        assert license_repository.find_by_key(week_license.key).activation_count == 3

    def test_validate_never_changes_activations(self, validator, week_license, license_repository):
        validator.activate(week_license.key, "device-a", NOW)

        validator.validate(week_license.key, "device-a", NOW)

        stored = license_repository.find_by_key(week_license.key)
        assert stored.activation_count == 1
        assert stored.bound_device_ids == frozenset({"device-a"})

    def test_activate(self, validator, week_license):
        """Test activation binds the device and marks the license active."""
        license, slot_taken = validator.activate(week_license.key, "device-a", NOW)

        assert slot_taken is True
        assert license.status == LicenseStatus.ACTIVE
        assert license.activation_count == 1

    def test_activate_is_idempotent(self, validator, week_license):
        validator.activate(week_license.key, "device-a", NOW)

        license, slot_taken = validator.activate(week_license.key, "device-a", NOW)

        assert slot_taken is False
        assert license.activation_count == 1

    def test_activate_expired(self, validator, week_license):
        with pytest.raises(LicenseExpiredError):
            validator.activate(week_license.key, "device-a", NOW + timedelta(days=8))

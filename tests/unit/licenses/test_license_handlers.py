"""
Unit tests for ValidateLicenseHandler and ActivateLicenseHandler.
"""
from datetime import timedelta

import pytest

from core.domain.exceptions import (
    DeviceNotAuthorizedError,
    LicenseExpiredError,
    LicenseNotFoundError,
)
from core.domain.value_objects import LicenseStatus
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.queries.validate_license import ValidateLicenseQuery
from orders.application.commands.confirm_payment import ConfirmPaymentCommand
from orders.application.commands.create_order import CreateOrderCommand


async def buy(container, tier="WEEK", email="buyer@example.com"):
    order = await container.create_order_handler().handle(
        CreateOrderCommand(tier_code=tier, email=email, payment_method="wechat")
    )
    result = await container.confirm_payment_handler().handle(
        ConfirmPaymentCommand(order_id=order.id)
    )
    return result.license.key


async def validate(container, key, device_id):
    return await container.validate_license_handler().handle(
        ValidateLicenseQuery(license_key=key, device_id=device_id)
    )


async def activate(container, key, device_id):
    return await container.activate_license_handler().handle(
        ActivateLicenseCommand(license_key=key, device_id=device_id)
    )


def event_types(container):
    return [entry["event_type"] for entry in container.store.audit_entries()]


@pytest.mark.asyncio
class TestValidateLicenseHandler:
    """Tests for ValidateLicenseHandler."""

    async def test_week_scenario(self, container, fixed_now):
        """Test buying a WEEK pass and validating it right away."""
        key = await buy(container, tier="WEEK")

        result = await validate(container, key, "device-a")

        assert result.key == key
        assert result.tier == "WEEK"
        assert result.status == "INACTIVE"
        assert result.remaining_days == 7
        assert result.expires_at == fixed_now + timedelta(days=7)
        assert result.activations_remaining == 3
        assert result.device_bound is False
        assert result.last_used_at == fixed_now

    async def test_two_device_round_trip(self, container):
        """Test that an activated device validates and a stranger does not."""
        key = await buy(container)
        await activate(container, key, "device-a")

        result = await validate(container, key, "device-a")
        assert result.device_bound is True
        assert result.activation_count == 1

        with pytest.raises(DeviceNotAuthorizedError):
            await validate(container, key, "device-b")

    async def test_unknown_key(self, container):
        with pytest.raises(LicenseNotFoundError):
            await validate(container, "SNK-W-FFFFFFFFFFFFFFFF-000000", "device-a")

    async def test_lazy_expiry(self, container, clock):
        """Test that expiry is stored and announced once."""
        key = await buy(container, tier="DAY")
        clock.advance(days=1, seconds=1)

        for _ in range(2):
            with pytest.raises(LicenseExpiredError):
                await validate(container, key, "device-a")

        stored = container.license_repository.find_by_key(key)
        assert stored.status == LicenseStatus.EXPIRED
        assert event_types(container).count("LicenseExpired") == 1

    async def test_perpetual_license_has_long_horizon(self, container):
        key = await buy(container, tier="LIFETIME")

        result = await validate(container, key, "device-a")

        assert result.remaining_days >= 365 * 50


@pytest.mark.asyncio
class TestActivateLicenseHandler:
    """Tests for ActivateLicenseHandler."""

    async def test_activate(self, container, clock):
        """Test activation takes a slot and emits an event."""
        key = await buy(container)
        clock.advance(hours=1)

        result = await activate(container, key, "device-a")

        assert result.status == "ACTIVE"
        assert result.activation_count == 1
        assert result.activations_remaining == 2
        assert result.device_bound is True
        assert result.last_used_at == clock()
        assert event_types(container).count("LicenseActivated") == 1

    async def test_reactivate_same_device(self, container):
        """Test reactivation of a bound device is idempotent."""
        key = await buy(container)
        await activate(container, key, "device-a")

        result = await activate(container, key, "device-a")

        assert result.activation_count == 1
        assert event_types(container).count("LicenseActivated") == 1

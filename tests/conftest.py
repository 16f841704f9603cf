"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync
from django.apps import apps

from core.config import ShopSettings
from core.infrastructure.container import ServiceContainer
from orders.application.commands.confirm_payment import ConfirmPaymentCommand
from orders.application.commands.create_order import CreateOrderCommand

ADMIN_SECRET = "test-admin-secret"


class FrozenClock:
    """Clock that only moves when a test advances it."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def fixed_now():
    """Fixture for the instant every test starts at."""
    return datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now):
    """Fixture for a controllable clock."""
    return FrozenClock(fixed_now)


@pytest.fixture
def shop_settings():
    """Fixture for ShopSettings."""
    return ShopSettings(
        max_activations=3,
        admin_secret=ADMIN_SECRET,
        from_email="shop@example.com",
    )


@pytest.fixture
def container(shop_settings, clock):
    """Fixture for a fresh, empty ServiceContainer."""
    return ServiceContainer(shop_settings=shop_settings, clock=clock)


@pytest.fixture
def store(container):
    """Fixture for the container's InMemoryStore."""
    return container.store


@pytest.fixture
def create_order(container):
    """Fixture returning a helper that places an order synchronously."""

    def _create(tier="WEEK", email="buyer@example.com", payment_method="alipay", **extra):
        command = CreateOrderCommand(
            tier_code=tier,
            email=email,
            payment_method=payment_method,
            extra=extra,
        )
        return async_to_sync(container.create_order_handler().handle)(command)

    return _create


@pytest.fixture
def paid_order(container, create_order):
    """Fixture for a paid WEEK order and its license."""
    order = create_order(tier="WEEK")
    handler = container.confirm_payment_handler()
    return async_to_sync(handler.handle)(ConfirmPaymentCommand(order_id=order.id))


@pytest.fixture
def license_key(paid_order):
    """Fixture for the key of a freshly issued WEEK license."""
    return paid_order.license.key


@pytest.fixture
def api_container(container, monkeypatch):
    """Fixture installing the test container as the process container."""
    monkeypatch.setattr(apps.get_app_config("core"), "container", container)
    return container


@pytest.fixture
def api_client(api_container):
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_headers():
    """Fixture for request headers carrying the admin secret."""
    return {"HTTP_X_ADMIN_SECRET": ADMIN_SECRET}

"""
Unit tests for the order lifecycle handlers.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest
from asgiref.sync import async_to_sync

from core.domain.exceptions import (
    AlreadyPaidError,
    IdentifierCollisionError,
    InvalidPaymentMethodError,
    InvalidTierError,
    OrderCancelledError,
    OrderNotFoundError,
)
from core.domain.value_objects import OrderStatus
from orders.application.commands.cancel_order import CancelOrderCommand
from orders.application.commands.confirm_payment import ConfirmPaymentCommand
from orders.application.commands.create_order import CreateOrderCommand
from orders.application.handlers import confirm_payment_handler
from orders.application.queries.find_order import FindOrderQuery
from orders.domain.payment import PaymentEvidence


async def place(container, tier="WEEK", email="buyer@example.com", payment_method="alipay"):
    command = CreateOrderCommand(tier_code=tier, email=email, payment_method=payment_method)
    return await container.create_order_handler().handle(command)


async def pay(container, order_id, evidence=None):
    command = ConfirmPaymentCommand(order_id=order_id, evidence=evidence or PaymentEvidence())
    return await container.confirm_payment_handler().handle(command)


@pytest.mark.asyncio
class TestCreateOrderHandler:
    """Tests for CreateOrderHandler."""

    async def test_create_order(self, container, fixed_now):
        """Test creating an order captures the catalog price."""
        result = await place(container, tier="MONTH")

        assert result.status == "PENDING"
        assert result.tier == "MONTH"
        assert result.price == 129
        assert result.created_at == fixed_now
        assert container.order_repository.count() == 1

    async def test_create_order_counts_statistics(self, container):
        """Test that every created order is counted, paid or not."""
        await place(container)
        await place(container)

        snapshot = container.statistics_repository.snapshot()
        assert snapshot.total_orders == 2
        assert snapshot.today_orders == 2
        assert snapshot.total_sales == 0

    async def test_create_order_invalid_tier(self, container):
        with pytest.raises(InvalidTierError):
            await place(container, tier="DECADE")

        assert container.order_repository.count() == 0

    async def test_create_order_invalid_payment_method(self, container):
        with pytest.raises(InvalidPaymentMethodError):
            await place(container, payment_method="paypal")

    async def test_create_order_emits_event(self, container):
        order = await place(container)

        entries = container.store.audit_entries()
        assert [entry["event_type"] for entry in entries] == ["OrderCreated"]
        assert entries[0]["aggregate_id"] == order.id


@pytest.mark.asyncio
class TestConfirmPaymentHandler:
    """Tests for ConfirmPaymentHandler."""

    async def test_confirm_payment(self, container, fixed_now):
        """Test paying an order issues a license and books revenue."""
        order = await place(container, tier="WEEK")

        result = await pay(container, order.id)

        assert result.order.status == "PAID"
        assert result.order.paid_at == fixed_now
        assert result.order.license_key == result.license.key
        assert result.order.payment_details.payer == "buyer@example.com"
        assert result.order.payment_details.paid_amount == 77
        assert result.order.payment_details.transaction_id.startswith("TRX")
        assert result.license.key.startswith("SNK-W-")
        assert result.license.status == "INACTIVE"
        assert result.license.activation_count == 0
        assert result.license.max_activations == 3
        assert result.license.order_id == order.id
        assert result.payment_id.startswith("PAY")

        snapshot = container.statistics_repository.snapshot()
        assert snapshot.total_sales == 77
        assert snapshot.today_sales == 77
        assert snapshot.revenue_by_tier["WEEK"] == 77
        assert snapshot.total_licenses == 1

    async def test_confirm_payment_with_evidence(self, container):
        order = await place(container)

        result = await pay(
            container,
            order.id,
            PaymentEvidence(transaction_id="ALI-1", payer="payer@example.com", amount=77),
        )

        assert result.order.payment_details.transaction_id == "ALI-1"
        assert result.order.payment_details.payer == "payer@example.com"

    async def test_confirm_payment_twice(self, container):
        """Test that a second confirmation issues nothing new."""
        order = await place(container)
        first = await pay(container, order.id)

        with pytest.raises(AlreadyPaidError) as exc_info:
            await pay(container, order.id)

        assert exc_info.value.details["license_key"] == first.license.key
        assert container.license_repository.count() == 1
        assert container.payment_repository.count() == 1
        assert container.statistics_repository.snapshot().total_sales == 77

    async def test_confirm_unknown_order(self, container):
        """Test that an unknown order id is reported as not found."""
        with pytest.raises(OrderNotFoundError) as exc_info:
            await pay(container, "SNK999999ZZZZZZ")

        assert exc_info.value.code == "ORDER_NOT_FOUND"
        assert container.license_repository.count() == 0

    async def test_confirm_cancelled_order(self, container):
        """Test that a cancelled order is not payable."""
        order = await place(container)
        await container.cancel_order_handler().handle(CancelOrderCommand(order_id=order.id))

        with pytest.raises(OrderCancelledError):
            await pay(container, order.id)

        assert container.license_repository.count() == 0
        assert container.payment_repository.count() == 0

    async def test_revenue_is_count_times_price(self, container):
        """Test that N paid orders book N times the tier price."""
        for _ in range(4):
            order = await place(container, tier="YEAR")
            await pay(container, order.id)

        snapshot = container.statistics_repository.snapshot()
        assert snapshot.total_sales == 4 * 256
        assert snapshot.revenue_by_tier["YEAR"] == 4 * 256
        assert snapshot.total_licenses == 4

    async def test_license_email_sent(self, container, mailoutbox):
        """Test that the buyer is emailed the new key."""
        order = await place(container, email="mail@example.com")

        result = await pay(container, order.id)

        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ["mail@example.com"]
        assert result.license.key in mailoutbox[0].body

    async def test_events_after_payment(self, container):
        order = await place(container)
        await pay(container, order.id)

        event_types = [entry["event_type"] for entry in container.store.audit_entries()]
        assert event_types == ["OrderCreated", "PaymentConfirmed", "LicenseIssued"]

    async def test_colliding_payment_id_is_regenerated(self, container, monkeypatch):
        first = await pay(container, (await place(container)).id)
        payment_ids = iter([first.payment_id, "PAY1760779800000ZZZZ"])
        monkeypatch.setattr(
            confirm_payment_handler, "generate_payment_id", lambda now: next(payment_ids)
        )

        second = await pay(container, (await place(container)).id)

        assert second.payment_id == "PAY1760779800000ZZZZ"
        assert container.payment_repository.count() == 2
        assert container.statistics_repository.snapshot().total_sales == 2 * 77

    async def test_failed_confirmation_leaves_no_trace(self, container, monkeypatch):
        """Test that a confirmation that cannot finish changes nothing."""
        first = await pay(container, (await place(container)).id)
        monkeypatch.setattr(
            confirm_payment_handler, "generate_payment_id", lambda now: first.payment_id
        )
        order = await place(container)

        with pytest.raises(IdentifierCollisionError):
            await pay(container, order.id)

        stored = container.order_repository.find_by_id(order.id)
        assert stored.status == OrderStatus.PENDING
        assert stored.license_key is None
        assert container.license_repository.count() == 1
        assert container.payment_repository.count() == 1
        snapshot = container.statistics_repository.snapshot()
        assert snapshot.total_sales == 77
        assert snapshot.revenue_by_tier["WEEK"] == 77
        assert snapshot.total_licenses == 1

        # The same order can still be paid once ids are free again
        monkeypatch.undo()
        result = await pay(container, order.id)
        assert result.order.status == "PAID"
        assert container.statistics_repository.snapshot().total_sales == 2 * 77


class TestConcurrentOrders:
    """Tests for orders placed and paid from many threads at once."""

    ORDERS = 24

    def test_parallel_create_and_confirm(self, container):
        """Test that no counter update is lost under concurrent requests."""
        create = async_to_sync(container.create_order_handler().handle)
        confirm = async_to_sync(container.confirm_payment_handler().handle)

        def create_one(index):
            return create(
                CreateOrderCommand(
                    tier_code="WEEK",
                    email=f"buyer{index}@example.com",
                    payment_method="alipay",
                )
            )

        with ThreadPoolExecutor(max_workers=8) as executor:
            orders = list(executor.map(create_one, range(self.ORDERS)))
            results = list(
                executor.map(
                    lambda order: confirm(ConfirmPaymentCommand(order_id=order.id)), orders
                )
            )

        snapshot = container.statistics_repository.snapshot()
        assert snapshot.total_orders == self.ORDERS
        assert snapshot.total_licenses == self.ORDERS
        assert snapshot.total_sales == self.ORDERS * 77
        assert snapshot.revenue_by_tier["WEEK"] == self.ORDERS * 77
        assert container.payment_repository.count() == self.ORDERS
        assert len({result.license.key for result in results}) == self.ORDERS
        assert len({result.payment_id for result in results}) == self.ORDERS

    def test_parallel_confirm_of_one_order(self, container, create_order):
        """Test that racing confirmations of one order pay it exactly once."""
        order = create_order()
        confirm = async_to_sync(container.confirm_payment_handler().handle)

        def attempt(_):
            try:
                return confirm(ConfirmPaymentCommand(order_id=order.id))
            except AlreadyPaidError:
                return None

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(attempt, range(8)))

        assert len([result for result in results if result is not None]) == 1
        assert container.license_repository.count() == 1
        assert container.statistics_repository.snapshot().total_sales == 77


@pytest.mark.asyncio
class TestCancelOrderHandler:
    """Tests for CancelOrderHandler."""

    async def test_cancel_order(self, container):
        order = await place(container)

        result = await container.cancel_order_handler().handle(CancelOrderCommand(order_id=order.id))

        assert result.status == "CANCELLED"
        assert result.license_key is None

    async def test_cancel_twice(self, container):
        """Test that a second cancel succeeds and emits no event."""
        order = await place(container)
        handler = container.cancel_order_handler()
        await handler.handle(CancelOrderCommand(order_id=order.id))

        result = await handler.handle(CancelOrderCommand(order_id=order.id))

        assert result.status == "CANCELLED"
        event_types = [entry["event_type"] for entry in container.store.audit_entries()]
        assert event_types.count("OrderCancelled") == 1

    async def test_cancel_paid_order(self, container):
        """Test that a paid order cannot be cancelled."""
        order = await place(container)
        await pay(container, order.id)

        with pytest.raises(AlreadyPaidError):
            await container.cancel_order_handler().handle(CancelOrderCommand(order_id=order.id))

        found = container.order_repository.find_by_id(order.id)
        assert found.is_paid

    async def test_cancel_unknown_order(self, container):
        with pytest.raises(OrderNotFoundError):
            await container.cancel_order_handler().handle(
                CancelOrderCommand(order_id="SNK999999ZZZZZZ")
            )


@pytest.mark.asyncio
class TestFindOrderHandler:
    """Tests for FindOrderHandler."""

    async def test_find_by_id(self, container):
        order = await place(container)

        result = await container.find_order_handler().handle(FindOrderQuery(order_id=order.id))

        assert result.id == order.id

    async def test_find_by_email_returns_latest(self, container, clock):
        """Test that the buyer's most recent order is returned."""
        await place(container, tier="DAY")
        clock.advance(minutes=10)
        latest = await place(container, tier="YEAR")

        result = await container.find_order_handler().handle(
            FindOrderQuery(email="buyer@example.com")
        )

        assert result.id == latest.id
        assert result.tier == "YEAR"

    async def test_id_takes_precedence(self, container, clock):
        first = await place(container)
        clock.advance(minutes=10)
        await place(container)

        result = await container.find_order_handler().handle(
            FindOrderQuery(order_id=first.id, email="buyer@example.com")
        )

        assert result.id == first.id

    async def test_find_nothing(self, container):
        """Test that no match is not an error."""
        result = await container.find_order_handler().handle(
            FindOrderQuery(order_id="SNK999999ZZZZZZ", email="nobody@example.com")
        )

        assert result is None

"""
ConfirmPaymentHandler.

Handles the confirm payment command: marks the order paid, issues the
license, appends the payment record and books the revenue, all in one
atomic step.
"""

import logging

from catalog.domain.catalog import Catalog
from core.domain.clock import Clock, utc_now
from core.domain.events import EventBus
from core.domain.exceptions import IdentifierCollisionError, OrderNotFoundError
from core.ports.unit_of_work import UnitOfWork
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.events import LicenseIssued
from licenses.domain.services import LicenseIssuer
from orders.application.commands.confirm_payment import ConfirmPaymentCommand
from orders.application.dto.order_dto import OrderDTO, PaymentConfirmationDTO
from orders.domain.events import PaymentConfirmed
from orders.domain.order_id import generate_payment_id, generate_transaction_id
from orders.domain.payment import PaymentRecord
from orders.ports.order_repository import OrderRepository
from orders.ports.payment_repository import PaymentRepository
from sales.ports.statistics_repository import StatisticsRepository

logger = logging.getLogger(__name__)

PAYMENT_ID_ATTEMPTS = 5


class ConfirmPaymentHandler:
    """Handler for ConfirmPaymentCommand."""

    def __init__(
        self,
        order_repository: OrderRepository,
        payment_repository: PaymentRepository,
        statistics_repository: StatisticsRepository,
        license_issuer: LicenseIssuer,
        catalog: Catalog,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.order_repository = order_repository
        self.payment_repository = payment_repository
        self.statistics_repository = statistics_repository
        self.license_issuer = license_issuer
        self.catalog = catalog
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock

    async def handle(self, command: ConfirmPaymentCommand) -> PaymentConfirmationDTO:
        """
        Handle confirm payment command.

        Args:
            command: ConfirmPaymentCommand

        Returns:
            PaymentConfirmationDTO with the paid order and the new license

        Raises:
            OrderNotFoundError: If the order does not exist
            AlreadyPaidError: If the order was already paid
            OrderCancelledError: If the order was cancelled
            IdentifierCollisionError: If no unused license key or payment id was found
        """
        now = self.clock()

        with self.unit_of_work.atomic():
            order = self.order_repository.find_by_id(command.order_id)
            if not order:
                raise OrderNotFoundError(command.order_id)
            order.ensure_payable()

            # Everything that can fail runs before the first write
            tier = self.catalog.get_tier(order.tier_code)
            license = self.license_issuer.build(
                tier=tier,
                order_id=order.id,
                owner_email=str(order.buyer_email),
                now=now,
            )
            paid = order.mark_paid(
                license_key=license.key,
                evidence=command.evidence,
                transaction_id=generate_transaction_id(now),
                now=now,
            )
            payment = PaymentRecord(
                id=self._unused_payment_id(now),
                order_id=paid.id,
                license_key=license.key,
                amount=paid.price,
                method=paid.payment_method,
                occurred_at=now,
                payer=paid.payment_details.payer,
            )

            self.license_issuer.store(license)
            self.order_repository.save(paid)
            self.payment_repository.append(payment)
            self.statistics_repository.record_payment(paid.tier_code, paid.price, now)

        logger.info(
            "Payment confirmed for order %s",
            paid.id,
            extra={
                "order_id": paid.id,
                "license_key": license.key,
                "amount": paid.price,
                "method": paid.payment_method,
            },
        )

        await self.event_bus.publish_all(
            [
                PaymentConfirmed(
                    order_id=paid.id,
                    payment_id=payment.id,
                    license_key=license.key,
                    tier_code=paid.tier_code,
                    amount=paid.price,
                    method=paid.payment_method,
                    occurred_at=now,
                ),
                LicenseIssued(
                    license_key=license.key,
                    order_id=paid.id,
                    tier_code=license.tier_code,
                    owner_email=str(license.owner_email),
                    expires_at=license.expires_at,
                    price=paid.price,
                    occurred_at=now,
                ),
            ]
        )

        return PaymentConfirmationDTO(
            order=OrderDTO.from_entity(paid),
            license=LicenseDTO.from_entity(license),
            payment_id=payment.id,
        )

    def _unused_payment_id(self, now) -> str:
        for _ in range(PAYMENT_ID_ATTEMPTS):
            payment_id = generate_payment_id(now)
            if not self.payment_repository.exists(payment_id):
                return payment_id
        raise IdentifierCollisionError("payment id", PAYMENT_ID_ATTEMPTS)

"""
ValidateLicenseHandler.

Handles the validate license query.
"""

import logging

from core.domain.clock import Clock, utc_now
from core.domain.events import EventBus
from core.domain.exceptions import DomainException, LicenseExpiredError
from core.metrics import license_validations_total
from core.ports.unit_of_work import UnitOfWork
from licenses.application.dto.license_dto import LicenseViewDTO
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.domain.events import LicenseExpired
from licenses.domain.services import LicenseValidator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """Handler for ValidateLicenseQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        unit_of_work: UnitOfWork,
        event_bus: EventBus,
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.validator = LicenseValidator(license_repository)
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.clock = clock

    async def handle(self, query: ValidateLicenseQuery) -> LicenseViewDTO:
        """
        Handle validate license query.

        Side effects: the first validation past expiry stores the license
        as EXPIRED, and a successful validation stores ``last_used_at``.
        Activation slots and device bindings are never changed here.

        Args:
            query: ValidateLicenseQuery

        Returns:
            LicenseViewDTO including remaining days

        Raises:
            LicenseNotFoundError, LicenseBannedError, LicenseExpiredError,
            ActivationLimitReachedError, DeviceNotAuthorizedError
        """
        now = self.clock()
        try:
            with self.unit_of_work.atomic():
                license = self.validator.validate(query.license_key, query.device_id, now)
        except LicenseExpiredError as exc:
            license_validations_total.labels(result=exc.code).inc()
            if exc.newly_expired:
                logger.info(
                    "License expired: %s", query.license_key, extra={"license_key": query.license_key}
                )
                await self.event_bus.publish(
                    LicenseExpired(
                        license_key=query.license_key,
                        expires_at=exc.expired_at,
                        occurred_at=now,
                    )
                )
            raise
        except DomainException as exc:
            license_validations_total.labels(result=exc.code).inc()
            logger.info(
                "License validation rejected: %s",
                exc.code,
                extra={"license_key": query.license_key, "device_id": query.device_id},
            )
            raise

        license_validations_total.labels(result="VALID").inc()
        return LicenseViewDTO.from_entity(license, query.device_id, now)

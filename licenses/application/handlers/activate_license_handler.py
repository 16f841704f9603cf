"""
ActivateLicenseHandler.

Handler for binding a device to a license.
"""

import logging

from core.domain.clock import Clock, utc_now
from core.domain.events import EventBus
from core.ports.unit_of_work import UnitOfWork
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.dto.license_dto import LicenseViewDTO
from licenses.domain.events import LicenseActivated
from licenses.domain.services import LicenseValidator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

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

    async def handle(self, command: ActivateLicenseCommand) -> LicenseViewDTO:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            LicenseViewDTO after activation

        Raises:
            LicenseNotFoundError, LicenseBannedError, LicenseExpiredError,
            ActivationLimitReachedError
        """
        now = self.clock()
        with self.unit_of_work.atomic():
            license, slot_taken = self.validator.activate(
                command.license_key, command.device_id, now
            )

        if slot_taken:
            logger.info(
                "License activated on new device: %s",
                license.key,
                extra={
                    "license_key": license.key,
                    "device_id": command.device_id,
                    "activation_count": license.activation_count,
                },
            )
            await self.event_bus.publish(
                LicenseActivated(
                    license_key=license.key,
                    device_id=command.device_id,
                    activation_count=license.activation_count,
                    max_activations=license.max_activations,
                    occurred_at=now,
                )
            )

        return LicenseViewDTO.from_entity(license, command.device_id, now)

"""
ValidateLicenseQuery.

Query to check whether a license may be used on a device.
"""

from dataclasses import dataclass


@dataclass
class ValidateLicenseQuery:
    """Query to validate a license key for a device."""

    license_key: str
    device_id: str

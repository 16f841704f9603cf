"""
ActivateLicenseCommand.

Command to bind a device to a license, taking one activation slot.
"""

from dataclasses import dataclass


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license on a device."""

    license_key: str
    device_id: str

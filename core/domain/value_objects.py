"""
Value objects shared by the orders and licenses apps.
"""
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Email:
    """
    Buyer email address.

    Only the presence of ``@`` is enforced here; the API serializers do the
    full syntax check. Addresses are compared exactly as entered.
    """

    value: str

    def __post_init__(self):
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        return self.value


class OrderStatus(Enum):
    """Order states: PENDING, then exactly one of PAID or CANCELLED."""

    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"

    def __str__(self) -> str:
        return self.value


class LicenseStatus(Enum):
    """
    License states.

    INACTIVE until the first device is bound, ACTIVE afterwards. EXPIRED is
    written the first time a check sees the license past its expiry; BANNED
    is set by an administrator outside this service.
    """

    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    BANNED = "BANNED"

    def __str__(self) -> str:
        return self.value

"""
Catalog domain entities.

Product tiers and payment methods are immutable and defined at
process start.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class ProductTier:
    """
    A purchasable license class with a fixed price and duration.

    ``duration_days`` is ``None`` for the perpetual tier.
    """

    code: str
    display_name: str
    price: int
    duration_days: Optional[int]
    key_prefix: str

    def __post_init__(self):
        """Validate tier definition."""
        if not self.code:
            raise ValueError("Tier code is required")
        if self.price < 0:
            raise ValueError("Tier price cannot be negative")
        if self.duration_days is not None and self.duration_days < 1:
            raise ValueError("Tier duration must be at least 1 day")
        if not self.key_prefix:
            raise ValueError("Tier key prefix is required")

    @property
    def is_perpetual(self) -> bool:
        return self.duration_days is None

    def expiry_from(self, start: datetime, perpetual_years: int = 100) -> datetime:
        """
        Compute the expiry of a license of this tier issued at ``start``.

        Perpetual tiers get a horizon of ``perpetual_years`` years, which
        has no practical expiry.
        """
        if self.is_perpetual:
            try:
                return start.replace(year=start.year + perpetual_years)
            except ValueError:
                # Feb 29 on a non-leap target year
                return start.replace(year=start.year + perpetual_years, day=28)
        return start + timedelta(days=self.duration_days)


@dataclass(frozen=True)
class PaymentMethod:
    """A payment channel the shop offers (simulated)."""

    code: str
    display_name: str

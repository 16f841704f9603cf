"""
Service configuration.

Values come from the ``LICENSE_SHOP`` dict in Django settings, which the
settings modules fill from environment variables.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ShopSettings:
    """Process-wide configuration of the license shop."""

    max_activations: int = 3
    admin_secret: str = ""
    order_id_prefix: str = "SNK"
    perpetual_years: int = 100
    recent_orders_limit: int = 10
    send_license_emails: bool = True
    from_email: str = "support@example.com"

    def __post_init__(self):
        """Validate configuration."""
        if self.max_activations < 1:
            raise ValueError("MAX_ACTIVATIONS must be at least 1")
        if self.perpetual_years < 50:
            raise ValueError("PERPETUAL_YEARS must be at least 50")

    @classmethod
    def from_mapping(cls, values: Optional[Dict[str, Any]]) -> "ShopSettings":
        """
        Build settings from an upper-case mapping such as ``LICENSE_SHOP``.

        Unknown keys are ignored.
        """
        values = values or {}
        known = {f.name for f in fields(cls)}
        kwargs = {
            key.lower(): value
            for key, value in values.items()
            if key.lower() in known
        }
        return cls(**kwargs)

    @classmethod
    def from_django_settings(cls) -> "ShopSettings":
        from django.conf import settings

        return cls.from_mapping(getattr(settings, "LICENSE_SHOP", None))

"""
Unit tests for the product catalog.
"""
from datetime import datetime, timedelta, timezone

import pytest

from catalog.domain.catalog import Catalog
from catalog.domain.tier import ProductTier
from core.domain.exceptions import InvalidPaymentMethodError, InvalidTierError


class TestCatalog:
    """Tests for Catalog."""

    def test_default_tiers(self):
        """Test the default tiers, prices, durations and key prefixes."""
        catalog = Catalog()

        tiers = {tier.code: tier for tier in catalog.tiers()}

        assert list(tiers) == ["DAY", "WEEK", "MONTH", "YEAR", "LIFETIME"]
        assert (tiers["DAY"].price, tiers["DAY"].duration_days) == (15, 1)
        assert (tiers["WEEK"].price, tiers["WEEK"].duration_days) == (77, 7)
        assert (tiers["MONTH"].price, tiers["MONTH"].duration_days) == (129, 30)
        assert (tiers["YEAR"].price, tiers["YEAR"].duration_days) == (256, 365)
        assert tiers["LIFETIME"].price == 532
        assert tiers["LIFETIME"].is_perpetual is True
        assert tiers["WEEK"].key_prefix == "SNK-W"

    def test_get_unknown_tier(self):
        """Test that an unknown tier code is rejected."""
        with pytest.raises(InvalidTierError) as exc_info:
            Catalog().get_tier("DECADE")

        assert exc_info.value.code == "INVALID_TIER"
        assert exc_info.value.details == {"tier": "DECADE"}

    def test_payment_methods(self):
        """Test the offered payment methods."""
        catalog = Catalog()

        codes = [method.code for method in catalog.payment_methods()]

        assert codes == ["alipay", "wechat", "qqpay", "bank"]
        assert catalog.get_payment_method("wechat").display_name == "WeChat Pay"

    def test_get_unknown_payment_method(self):
        """Test that an unknown payment method is rejected."""
        with pytest.raises(InvalidPaymentMethodError):
            Catalog().get_payment_method("paypal")


class TestProductTier:
    """Tests for ProductTier."""

    @pytest.mark.parametrize(
        "code,days",
        [("DAY", 1), ("WEEK", 7), ("MONTH", 30), ("YEAR", 365)],
    )
    def test_expiry_adds_duration(self, code, days):
        """Test that expiry is exactly the tier duration after issue."""
        start = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)

        expires_at = Catalog().get_tier(code).expiry_from(start)

        assert expires_at - start == timedelta(days=days)

    def test_perpetual_expiry_is_far_future(self):
        """Test that the perpetual tier expires at least 50 years out."""
        start = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)

        expires_at = Catalog().get_tier("LIFETIME").expiry_from(start)

        assert expires_at.year == 2126
        assert expires_at - start >= timedelta(days=365 * 50)

    def test_perpetual_expiry_from_leap_day(self):
        """Test perpetual expiry issued on Feb 29 lands on Feb 28."""
        start = datetime(2028, 2, 29, 12, 0, tzinfo=timezone.utc)
        tier = Catalog().get_tier("LIFETIME")

        expires_at = tier.expiry_from(start, perpetual_years=55)

        assert (expires_at.year, expires_at.month, expires_at.day) == (2083, 2, 28)

    def test_invalid_tier_definition(self):
        """Test tier validation."""
        with pytest.raises(ValueError, match="duration"):
            ProductTier("BAD", "Bad", 10, 0, "SNK-B")
        with pytest.raises(ValueError, match="price"):
            ProductTier("BAD", "Bad", -1, 1, "SNK-B")

"""
Catalog of product tiers and payment methods.
"""
from typing import Dict, Iterable, List

from catalog.domain.tier import PaymentMethod, ProductTier
from core.domain.exceptions import InvalidPaymentMethodError, InvalidTierError

DEFAULT_TIERS = (
    ProductTier("DAY", "Day Pass", 15, 1, "SNK-D"),
    ProductTier("WEEK", "Week Pass", 77, 7, "SNK-W"),
    ProductTier("MONTH", "Month Pass", 129, 30, "SNK-M"),
    ProductTier("YEAR", "Year Pass", 256, 365, "SNK-Y"),
    ProductTier("LIFETIME", "Lifetime", 532, None, "SNK-L"),
)

DEFAULT_PAYMENT_METHODS = (
    PaymentMethod("alipay", "Alipay"),
    PaymentMethod("wechat", "WeChat Pay"),
    PaymentMethod("qqpay", "QQ Pay"),
    PaymentMethod("bank", "Bank Card"),
)


class Catalog:
    """Read-only mapping of tier codes and payment method codes."""

    def __init__(
        self,
        tiers: Iterable[ProductTier] = DEFAULT_TIERS,
        payment_methods: Iterable[PaymentMethod] = DEFAULT_PAYMENT_METHODS,
    ):
        self._tiers: Dict[str, ProductTier] = {tier.code: tier for tier in tiers}
        self._payment_methods: Dict[str, PaymentMethod] = {
            method.code: method for method in payment_methods
        }

    def get_tier(self, code: str) -> ProductTier:
        """
        Get a tier by code.

        Raises:
            InvalidTierError: If the code is not in the catalog
        """
        tier = self._tiers.get(code)
        if tier is None:
            raise InvalidTierError(code)
        return tier

    def get_payment_method(self, code: str) -> PaymentMethod:
        """
        Get a payment method by code.

        Raises:
            InvalidPaymentMethodError: If the method is not offered
        """
        method = self._payment_methods.get(code)
        if method is None:
            raise InvalidPaymentMethodError(code)
        return method

    def tiers(self) -> List[ProductTier]:
        return list(self._tiers.values())

    def tier_codes(self) -> List[str]:
        return list(self._tiers)

    def payment_methods(self) -> List[PaymentMethod]:
        return list(self._payment_methods.values())

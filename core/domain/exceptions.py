"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Every one of them is an
expected, recoverable outcome that the API layer turns into a response.
"""
from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(
        self,
        message: str,
        code: str = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
            details: Context needed to build a user-facing message
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class CatalogException(DomainException):
    """Base exception for catalog-related errors."""

    pass


class InvalidTierError(CatalogException):
    """Raised when a tier code is not in the catalog."""

    def __init__(self, tier_code: str):
        super().__init__(
            f"Unknown product tier: {tier_code}",
            code="INVALID_TIER",
            details={"tier": tier_code},
        )


class InvalidPaymentMethodError(CatalogException):
    """Raised when a payment method is not offered."""

    def __init__(self, payment_method: str):
        super().__init__(
            f"Unknown payment method: {payment_method}",
            code="INVALID_PAYMENT_METHOD",
            details={"payment_method": payment_method},
        )


class OrderException(DomainException):
    """Base exception for order-related errors."""

    pass


class OrderNotFoundError(OrderException):
    """Raised when an order is not found."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order {order_id} not found",
            code="ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class AlreadyPaidError(OrderException):
    """Raised when an operation is not allowed because the order is paid."""

    def __init__(self, order_id: str, license_key: Optional[str] = None):
        super().__init__(
            f"Order {order_id} has already been paid",
            code="ALREADY_PAID",
            details={"order_id": order_id, "license_key": license_key},
        )


class OrderCancelledError(OrderException):
    """Raised when paying an order that was cancelled."""

    def __init__(self, order_id: str):
        super().__init__(
            f"Order {order_id} was cancelled and can no longer be paid",
            code="ORDER_CANCELLED",
            details={"order_id": order_id},
        )


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseBannedError(LicenseException):
    """Raised when a license has been banned by an administrator."""

    def __init__(self, license_key: str):
        super().__init__(
            "License has been banned",
            code="LICENSE_BANNED",
            details={"license_key": license_key},
        )


class LicenseExpiredError(LicenseException):
    """Raised when a license has expired."""

    def __init__(self, license_key: str, expired_at=None, newly_expired: bool = False):
        super().__init__(
            "License has expired",
            code="LICENSE_EXPIRED",
            details={
                "license_key": license_key,
                "expired_at": expired_at.isoformat() if expired_at else None,
            },
        )
        self.expired_at = expired_at
        # True when this check is the one that flipped the status to EXPIRED
        self.newly_expired = newly_expired


class ActivationLimitReachedError(LicenseException):
    """Raised when every activation slot of a license is taken."""

    def __init__(self, activation_count: int, max_activations: int):
        super().__init__(
            "License activation limit reached",
            code="ACTIVATION_LIMIT_REACHED",
            details={
                "activation_count": activation_count,
                "max_activations": max_activations,
            },
        )


class DeviceNotAuthorizedError(LicenseException):
    """Raised when a device is not bound to a device-locked license."""

    def __init__(self, device_id: str, activation_count: int, max_activations: int):
        super().__init__(
            "Device is not authorized for this license",
            code="DEVICE_NOT_AUTHORIZED",
            details={
                "device_id": device_id,
                "activation_count": activation_count,
                "max_activations": max_activations,
            },
        )


class IdentifierCollisionError(DomainException):
    """Raised when no unused random identifier could be generated."""

    def __init__(self, kind: str, attempts: int):
        super().__init__(
            f"Could not generate an unused {kind} after {attempts} attempts",
            code="IDENTIFIER_COLLISION",
            details={"kind": kind, "attempts": attempts},
        )

"""
Order, payment and transaction identifiers.

Order ids are ``PREFIX + YYMMDD + 6 random [A-Z0-9]``. Uniqueness is
probabilistic; collisions are not detected.
"""

import secrets
import string
from datetime import datetime

ORDER_SUFFIX_LENGTH = 6
_ALPHABET = string.ascii_uppercase + string.digits


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_order_id(now: datetime, prefix: str = "SNK") -> str:
    """
    Generate an order id such as ``SNK251018K3Z9QA``.

    Args:
        now: Creation time, supplies the date stamp
        prefix: Fixed shop prefix

    Returns:
        Generated order id
    """
    return f"{prefix}{now.strftime('%y%m%d')}{_random_suffix(ORDER_SUFFIX_LENGTH)}"


def _epoch_millis(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def generate_payment_id(now: datetime) -> str:
    return f"PAY{_epoch_millis(now)}{_random_suffix(4)}"


def generate_transaction_id(now: datetime) -> str:
    """Transaction id used when the payment evidence does not carry one."""
    return f"TRX{_epoch_millis(now)}{_random_suffix(4)}"

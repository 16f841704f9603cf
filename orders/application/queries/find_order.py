"""
FindOrderQuery.

Query to look up an order by id, or the latest order of a buyer.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FindOrderQuery:
    """Query for one order by id or buyer email."""

    order_id: Optional[str] = None
    email: Optional[str] = None

"""
GetStatisticsQuery.

Query for the admin sales overview.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GetStatisticsQuery:
    """Query for statistics and the most recent orders."""

    recent_orders_limit: Optional[int] = None

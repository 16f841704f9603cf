"""
Sales statistics repository port (interface).
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from sales.domain.statistics import StatisticsSnapshot


class StatisticsRepository(ABC):
    """Records sales events into the aggregate counters."""

    @abstractmethod
    def record_order(self, occurred_at: datetime) -> None:
        pass

    @abstractmethod
    def record_license(self, occurred_at: datetime) -> None:
        pass

    @abstractmethod
    def record_payment(self, tier_code: str, amount: int, occurred_at: datetime) -> None:
        pass

    @abstractmethod
    def snapshot(self, today: Optional[date] = None) -> StatisticsSnapshot:
        """
        Return a read-only copy of the counters.

        Args:
            today: Current date, used to report stale daily counters as zero

        Returns:
            StatisticsSnapshot
        """
        pass

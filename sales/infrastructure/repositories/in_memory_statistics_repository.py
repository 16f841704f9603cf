"""
In-memory implementation of StatisticsRepository port.
"""
from datetime import date, datetime
from typing import Optional

from core.infrastructure.store import InMemoryStore
from sales.domain.statistics import StatisticsSnapshot
from sales.ports.statistics_repository import StatisticsRepository


class InMemoryStatisticsRepository(StatisticsRepository):
    """Updates the SalesStatistics held by the InMemoryStore."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def record_order(self, occurred_at: datetime) -> None:
        with self.store.atomic():
            self.store.statistics.record_order(occurred_at)

    def record_license(self, occurred_at: datetime) -> None:
        with self.store.atomic():
            self.store.statistics.record_license(occurred_at)

    def record_payment(self, tier_code: str, amount: int, occurred_at: datetime) -> None:
        with self.store.atomic():
            self.store.statistics.record_payment(tier_code, amount, occurred_at)

    def snapshot(self, today: Optional[date] = None) -> StatisticsSnapshot:
        with self.store.atomic():
            return self.store.statistics.snapshot(today)

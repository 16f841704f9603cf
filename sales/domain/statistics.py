"""
Aggregate sales statistics.

The "today" counters belong to one calendar date, ``last_reset_date``.
Every recording method first calls ``roll_over`` with the date of the
event, which zeroes the daily counters when that date differs.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, Optional


@dataclass(frozen=True)
class StatisticsSnapshot:
    """Read-only projection of the sales counters."""

    total_sales: int
    today_sales: int
    total_orders: int
    today_orders: int
    total_licenses: int
    today_licenses: int
    revenue_by_tier: Dict[str, int]
    today_revenue_by_tier: Dict[str, int]
    last_reset_date: date


@dataclass
class SalesStatistics:
    """Running totals for orders, sales and issued licenses."""

    last_reset_date: date
    total_sales: int = 0
    today_sales: int = 0
    total_orders: int = 0
    today_orders: int = 0
    total_licenses: int = 0
    today_licenses: int = 0
    revenue_by_tier: Dict[str, int] = field(default_factory=dict)
    today_revenue_by_tier: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def start(cls, today: date, tier_codes: Iterable[str] = ()) -> "SalesStatistics":
        """Create empty statistics with a zero revenue entry per tier."""
        codes = list(tier_codes)
        return cls(
            last_reset_date=today,
            revenue_by_tier={code: 0 for code in codes},
            today_revenue_by_tier={code: 0 for code in codes},
        )

    def roll_over(self, today: date) -> bool:
        """
        Reset the daily counters if ``today`` is a new date.

        Returns:
            True if the counters were reset
        """
        if today == self.last_reset_date:
            return False
        self.today_sales = 0
        self.today_orders = 0
        self.today_licenses = 0
        self.today_revenue_by_tier = {code: 0 for code in self.today_revenue_by_tier}
        self.last_reset_date = today
        return True

    def record_order(self, occurred_at: datetime) -> None:
        self.roll_over(occurred_at.date())
        self.total_orders += 1
        self.today_orders += 1

    def record_license(self, occurred_at: datetime) -> None:
        self.roll_over(occurred_at.date())
        self.total_licenses += 1
        self.today_licenses += 1

    def record_payment(self, tier_code: str, amount: int, occurred_at: datetime) -> None:
        """Add a confirmed payment to the sales and per-tier revenue."""
        self.roll_over(occurred_at.date())
        self.total_sales += amount
        self.today_sales += amount
        self.revenue_by_tier[tier_code] = self.revenue_by_tier.get(tier_code, 0) + amount
        self.today_revenue_by_tier[tier_code] = (
            self.today_revenue_by_tier.get(tier_code, 0) + amount
        )

    def snapshot(self, today: Optional[date] = None) -> StatisticsSnapshot:
        """
        Build a snapshot.

        When ``today`` is given and differs from ``last_reset_date`` the
        daily figures are reported as zero without mutating the counters.
        """
        stale = today is not None and today != self.last_reset_date
        return StatisticsSnapshot(
            total_sales=self.total_sales,
            today_sales=0 if stale else self.today_sales,
            total_orders=self.total_orders,
            today_orders=0 if stale else self.today_orders,
            total_licenses=self.total_licenses,
            today_licenses=0 if stale else self.today_licenses,
            revenue_by_tier=dict(self.revenue_by_tier),
            today_revenue_by_tier=(
                {code: 0 for code in self.today_revenue_by_tier}
                if stale
                else dict(self.today_revenue_by_tier)
            ),
            last_reset_date=today if stale else self.last_reset_date,
        )

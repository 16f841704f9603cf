"""
Statistics DTOs for the admin API.
"""
from dataclasses import dataclass
from datetime import date
from typing import Dict, List

from orders.application.dto.order_dto import OrderDTO
from sales.domain.statistics import StatisticsSnapshot


@dataclass
class SalesStatisticsDTO:
    """DTO for the aggregate counters."""

    total_sales: int
    today_sales: int
    total_orders: int
    today_orders: int
    total_licenses: int
    today_licenses: int
    revenue_by_tier: Dict[str, int]
    today_revenue_by_tier: Dict[str, int]
    last_reset_date: date

    @classmethod
    def from_snapshot(cls, snapshot: StatisticsSnapshot) -> "SalesStatisticsDTO":
        return cls(
            total_sales=snapshot.total_sales,
            today_sales=snapshot.today_sales,
            total_orders=snapshot.total_orders,
            today_orders=snapshot.today_orders,
            total_licenses=snapshot.total_licenses,
            today_licenses=snapshot.today_licenses,
            revenue_by_tier=dict(snapshot.revenue_by_tier),
            today_revenue_by_tier=dict(snapshot.today_revenue_by_tier),
            last_reset_date=snapshot.last_reset_date,
        )


@dataclass
class StatisticsDTO:
    """DTO for the admin statistics response."""

    stats: SalesStatisticsDTO
    orders: int
    licenses: int
    payments: int
    recent_orders: List[OrderDTO]

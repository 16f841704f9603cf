"""
GetStatisticsHandler.

Handles the get statistics query. Read-only: stale daily counters are
reported as zero but not reset here.
"""

from core.domain.clock import Clock, utc_now
from core.ports.unit_of_work import UnitOfWork
from licenses.ports.license_repository import LicenseRepository
from orders.application.dto.order_dto import OrderDTO
from orders.ports.order_repository import OrderRepository
from orders.ports.payment_repository import PaymentRepository
from sales.application.dto.statistics_dto import SalesStatisticsDTO, StatisticsDTO
from sales.application.queries.get_statistics import GetStatisticsQuery
from sales.ports.statistics_repository import StatisticsRepository


class GetStatisticsHandler:
    """Handler for GetStatisticsQuery."""

    def __init__(
        self,
        statistics_repository: StatisticsRepository,
        order_repository: OrderRepository,
        license_repository: LicenseRepository,
        payment_repository: PaymentRepository,
        unit_of_work: UnitOfWork,
        recent_orders_limit: int = 10,
        clock: Clock = utc_now,
    ):
        """Initialize handler with repositories."""
        self.statistics_repository = statistics_repository
        self.order_repository = order_repository
        self.license_repository = license_repository
        self.payment_repository = payment_repository
        self.unit_of_work = unit_of_work
        self.recent_orders_limit = recent_orders_limit
        self.clock = clock

    async def handle(self, query: GetStatisticsQuery) -> StatisticsDTO:
        """
        Handle get statistics query.

        Args:
            query: GetStatisticsQuery

        Returns:
            StatisticsDTO with counters, entity totals and recent orders
        """
        limit = query.recent_orders_limit or self.recent_orders_limit
        today = self.clock().date()

        with self.unit_of_work.atomic():
            snapshot = self.statistics_repository.snapshot(today)
            orders = self.order_repository.count()
            licenses = self.license_repository.count()
            payments = self.payment_repository.count()
            recent = self.order_repository.list_recent(limit)

        return StatisticsDTO(
            stats=SalesStatisticsDTO.from_snapshot(snapshot),
            orders=orders,
            licenses=licenses,
            payments=payments,
            recent_orders=[OrderDTO.from_entity(order) for order in recent],
        )

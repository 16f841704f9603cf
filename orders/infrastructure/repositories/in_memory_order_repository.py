"""
In-memory implementation of OrderRepository port.

This adapter keeps orders in the shared InMemoryStore.
"""
from typing import List, Optional

from core.infrastructure.store import InMemoryStore
from orders.domain.order import Order
from orders.ports.order_repository import OrderRepository


class InMemoryOrderRepository(OrderRepository):
    """InMemoryStore-backed implementation of OrderRepository."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def save(self, order: Order) -> Order:
        with self.store.atomic():
            self.store.orders[order.id] = order
        return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        if not order_id:
            return None
        with self.store.atomic():
            return self.store.orders.get(order_id)

    def find_latest_by_email(self, email: str) -> Optional[Order]:
        latest = None
        with self.store.atomic():
            # dicts keep insertion order, so ">=" lets a later insert win a tie
            for order in self.store.orders.values():
                if order.buyer_email.value != email:
                    continue
                if latest is None or order.created_at >= latest.created_at:
                    latest = order
        return latest

    def list_recent(self, limit: int) -> List[Order]:
        with self.store.atomic():
            orders = list(self.store.orders.values())
        indexed = sorted(
            enumerate(orders),
            key=lambda item: (item[1].created_at, item[0]),
            reverse=True,
        )
        return [order for _, order in indexed[:limit]]

    def count(self) -> int:
        with self.store.atomic():
            return len(self.store.orders)

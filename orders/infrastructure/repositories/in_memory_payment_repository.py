"""
In-memory implementation of PaymentRepository port.
"""
from core.infrastructure.store import InMemoryStore
from orders.domain.payment import PaymentRecord
from orders.ports.payment_repository import PaymentRepository


class InMemoryPaymentRepository(PaymentRepository):
    """InMemoryStore-backed, append-only payment records."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def append(self, record: PaymentRecord) -> PaymentRecord:
        with self.store.atomic():
            if record.id in self.store.payments:
                raise ValueError(f"Payment record {record.id} already exists")
            self.store.payments[record.id] = record
        return record

    def exists(self, payment_id: str) -> bool:
        with self.store.atomic():
            return payment_id in self.store.payments

    def count(self) -> int:
        with self.store.atomic():
            return len(self.store.payments)

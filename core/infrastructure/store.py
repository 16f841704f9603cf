"""
In-memory store.

The store is the single source of truth for orders, licenses, payment
records, sales statistics and the audit trail. State lives in process
memory only; a restart loses everything.

All access goes through ``atomic()``, which holds one re-entrant lock for
the whole read-modify-write sequence, so no caller ever observes a
half-applied change.
"""

import threading
from collections import deque
from contextlib import contextmanager
from datetime import date
from typing import Any, Deque, Dict, Iterable, Iterator, List

from core.ports.unit_of_work import UnitOfWork
from sales.domain.statistics import SalesStatistics

AUDIT_LOG_LIMIT = 1000


class InMemoryStore(UnitOfWork):
    """Process-local entity maps guarded by a single lock."""

    def __init__(
        self,
        today: date,
        tier_codes: Iterable[str] = (),
        audit_log_limit: int = AUDIT_LOG_LIMIT,
    ):
        """
        Initialize an empty store.

        Args:
            today: Date the daily statistics start from
            tier_codes: Tiers to pre-seed in the revenue breakdown
            audit_log_limit: Number of audit entries retained
        """
        self._lock = threading.RLock()
        self.orders: Dict[str, Any] = {}
        self.licenses: Dict[str, Any] = {}
        self.payments: Dict[str, Any] = {}
        self.statistics = SalesStatistics.start(today, tier_codes)
        self.audit_log: Deque[Dict[str, Any]] = deque(maxlen=audit_log_limit)

    @contextmanager
    def atomic(self) -> Iterator["InMemoryStore"]:
        """Hold the store lock for the duration of the block."""
        with self._lock:
            yield self

    def append_audit_entry(self, entry: Dict[str, Any]) -> None:
        with self._lock:
            self.audit_log.append(entry)

    def audit_entries(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self.audit_log)

"""
In-memory implementation of LicenseRepository port.

This adapter keeps licenses in the shared InMemoryStore, keyed by
license key.
"""
from typing import Optional

from core.infrastructure.store import InMemoryStore
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository


class InMemoryLicenseRepository(LicenseRepository):
    """InMemoryStore-backed implementation of LicenseRepository."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    def save(self, license: License) -> License:
        with self.store.atomic():
            self.store.licenses[license.key] = license
        return license

    def find_by_key(self, key: str) -> Optional[License]:
        if not key:
            return None
        with self.store.atomic():
            return self.store.licenses.get(key)

    def count(self) -> int:
        with self.store.atomic():
            return len(self.store.licenses)

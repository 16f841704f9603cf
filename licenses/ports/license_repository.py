"""
License repository port.

Implementations run inside the caller's ``UnitOfWork.atomic()`` block.
"""
from abc import ABC, abstractmethod
from typing import Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """Storage for License entities, keyed by license key."""

    @abstractmethod
    def save(self, license: License) -> License:
        """Insert or replace the license stored under ``license.key``."""

    @abstractmethod
    def find_by_key(self, key: str) -> Optional[License]:
        """Return the license for an exact key, or None."""

    @abstractmethod
    def count(self) -> int:
        """Number of licenses ever issued."""

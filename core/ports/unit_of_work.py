"""
Unit of work port (interface).

Application handlers wrap each read-modify-write sequence in
``unit_of_work.atomic()`` so that it is applied as a whole.
"""
from abc import ABC, abstractmethod
from typing import ContextManager


class UnitOfWork(ABC):
    """Scope in which repository changes are applied atomically."""

    @abstractmethod
    def atomic(self) -> ContextManager:
        """
        Open an atomic scope.

        Returns:
            Context manager; the changes made inside it are seen by
            other callers all at once
        """
        pass

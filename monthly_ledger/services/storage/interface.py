"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep months in a local JSON file or a Google Sheet
2. Use in-memory storage for testing
3. Keep the ledger core decoupled from storage implementation

The ledger only ever loads or saves the whole store at once; there is
no per-entry API.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from monthly_ledger.models.ledger import LedgerMonth


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load_all(self) -> Optional[dict[str, LedgerMonth]]:
        """
        Load every stored month.

        Returns:
            Mapping of month key to month, or None if nothing was ever saved

        Raises:
            PersistenceError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save_all(self, months: dict[str, LedgerMonth]) -> None:
        """
        Replace the stored months with `months`.

        Raises:
            PersistenceError: If the write fails
        """
        pass

    @abstractmethod
    def load_closed_months(self) -> set[str]:
        """
        Load the keys of closed months.

        Raises:
            PersistenceError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save_closed_months(self, month_keys: Iterable[str]) -> None:
        """
        Replace the stored set of closed months.

        Raises:
            PersistenceError: If the write fails
        """
        pass


class PersistenceError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(PersistenceError):
    """Could not connect to storage backend."""
    pass

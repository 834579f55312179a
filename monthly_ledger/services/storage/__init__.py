"""
Storage Services Package

Provides the abstract storage interface and concrete implementations:
a JSON file (default), Google Sheets, and an in-memory store for tests.
"""

from monthly_ledger.services.storage.interface import (
    ConnectionError,
    LedgerStorageInterface,
    PersistenceError,
)
from monthly_ledger.services.storage.memory import InMemoryLedgerStorage
from monthly_ledger.services.storage.json_file import JsonFileLedgerStorage
from monthly_ledger.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsLedgerStorage,
)

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "ConnectionError",
    "PersistenceError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsLedgerStorage",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]

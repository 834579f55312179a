"""
In-Memory Storage

Keeps deep copies of whatever is saved, so later edits to the live
store never leak into the "persisted" snapshot. Used by tests and by
the `memory` backend.
"""

from typing import Iterable, Optional

from monthly_ledger.models.ledger import LedgerMonth
from monthly_ledger.services.storage.interface import LedgerStorageInterface, PersistenceError


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Storage that lives as long as the object does."""

    def __init__(
        self,
        months: Optional[dict[str, LedgerMonth]] = None,
        closed_months: Optional[Iterable[str]] = None,
        fail_saves: bool = False,
    ):
        self._months = self._copy(months) if months is not None else None
        self._closed = set(closed_months or ())
        self.fail_saves = fail_saves
        self.save_count = 0

    @staticmethod
    def _copy(months: dict[str, LedgerMonth]) -> dict[str, LedgerMonth]:
        return {key: month.model_copy(deep=True) for key, month in months.items()}

    def load_all(self) -> Optional[dict[str, LedgerMonth]]:
        if self._months is None:
            return None
        return self._copy(self._months)

    def save_all(self, months: dict[str, LedgerMonth]) -> None:
        if self.fail_saves:
            raise PersistenceError("In-memory storage configured to fail")
        self._months = self._copy(months)
        self.save_count += 1

    def load_closed_months(self) -> set[str]:
        return set(self._closed)

    def save_closed_months(self, month_keys: Iterable[str]) -> None:
        if self.fail_saves:
            raise PersistenceError("In-memory storage configured to fail")
        self._closed = set(month_keys)

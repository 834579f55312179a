"""
Month Lock Registry

A closed/open flag per month key, stored separately from ledger data.
A month can be closed before it has any entries and stays closed if
its data is replaced.

DESIGN DECISION: The lock is enforced by the core. Editing a closed
month or duplicating onto it raises MonthClosedError. Constructing the
registry with `enforce=False` turns the flag into a purely advisory
marker for the UI.
"""

from typing import Optional

from monthly_ledger.errors import MonthClosedError, ValidationError
from monthly_ledger.models.month_key import MONTH_KEYS, is_month_key
from monthly_ledger.models.notice import LedgerNoticeBuilder
from monthly_ledger.notices import NoticeLogger
from monthly_ledger.services.storage import LedgerStorageInterface, PersistenceError


class MonthLockRegistry:
    """Closed/open flag per month."""

    def __init__(
        self,
        storage: Optional[LedgerStorageInterface] = None,
        notices: Optional[NoticeLogger] = None,
        enforce: bool = True,
    ):
        self._storage = storage
        self._notices = notices or NoticeLogger()
        self._closed: set[str] = set()
        self.enforce = enforce

    def load(self) -> None:
        if self._storage is None:
            return
        try:
            self._closed = set(self._storage.load_closed_months())
        except PersistenceError as e:
            self._notices.persistence_failed("load_closed_months", e)

    def is_closed(self, key: str) -> bool:
        return key in self._closed

    def set_closed(self, key: str, closed: bool) -> None:
        if not is_month_key(key):
            raise ValidationError(f"Invalid month key: {key!r}")
        if closed == self.is_closed(key):
            return
        if closed:
            self._closed.add(key)
        else:
            self._closed.discard(key)
        self._persist()
        self._notices.log(LedgerNoticeBuilder.month_lock_changed(key, closed))

    def toggle(self, key: str) -> bool:
        """Flip the flag; returns the new state."""
        closed = not self.is_closed(key)
        self.set_closed(key, closed)
        return closed

    def closed_months(self) -> list[str]:
        return [key for key in MONTH_KEYS if key in self._closed]

    def check_open(self, key: str) -> None:
        """
        Raises:
            MonthClosedError: If `key` is closed and the lock is enforced
        """
        if self.enforce and self.is_closed(key):
            raise MonthClosedError(key)

    def _persist(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save_closed_months(self._closed)
        except PersistenceError as e:
            self._notices.persistence_failed("save_closed_months", e)

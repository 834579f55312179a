"""
Ledger Store

The only mutable state container: one LedgerMonth per month key.

DESIGN DECISION: Reading a month never fails because the month is
missing. `get()` asks the rollover engine to materialize it first
(copied from the previous month, or empty).

DESIGN DECISION: Persistence is best effort. A failed save is logged
and reported as a notice; the in-memory state stays authoritative for
the rest of the session.
"""

from typing import Optional

from monthly_ledger.errors import NotFoundError
from monthly_ledger.ledger.identifiers import IdentifierGenerator
from monthly_ledger.ledger.rollover import RolloverEngine
from monthly_ledger.models.ledger import LedgerMonth
from monthly_ledger.models.month_key import MONTH_KEYS, is_month_key
from monthly_ledger.notices import NoticeLogger
from monthly_ledger.services.storage import LedgerStorageInterface, PersistenceError


class LedgerStore:
    """
    In-memory mapping of month key to month.

    Owns every month and everything reachable from it; nothing is
    shared between months.
    """

    def __init__(
        self,
        storage: Optional[LedgerStorageInterface] = None,
        notices: Optional[NoticeLogger] = None,
        rollover: Optional[RolloverEngine] = None,
    ):
        self._storage = storage
        self._notices = notices or NoticeLogger()
        self._rollover = rollover or RolloverEngine(notices=self._notices)
        self._months: dict[str, LedgerMonth] = {}
        self._ids = IdentifierGenerator()
        self.load_failed = False

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """
        Replace in-memory state with what storage holds.

        Returns True if stored data was found and loaded. Storage
        failures are reported, not raised; `load_failed` records them.
        """
        self.load_failed = False
        if self._storage is None:
            return False
        try:
            loaded = self._storage.load_all()
        except PersistenceError as e:
            self.load_failed = True
            self._notices.persistence_failed("load", e)
            return False
        if loaded is None:
            return False
        self.replace_all(loaded)
        return True

    def persist(self) -> bool:
        """
        Save everything. Returns False (and reports) on failure.

        Nothing is written after a failed load, so stored data that
        could not be read is never replaced by a partial session.
        """
        if self._storage is None:
            return True
        if self.load_failed:
            self._notices.persistence_failed(
                "save", PersistenceError("stored data could not be read; not overwriting it")
            )
            return False
        try:
            self._storage.save_all(self._months)
        except PersistenceError as e:
            self._notices.persistence_failed("save", e)
            return False
        return True

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def get(self, key: str) -> LedgerMonth:
        """
        Month for `key`, materializing it first if needed.

        Repeated calls return the same month without cloning again.

        Raises:
            NotFoundError: If `key` is not a month key
        """
        self._check_key(key)
        self._rollover.ensure_month(self, key)
        return self._months[key]

    def peek(self, key: str) -> Optional[LedgerMonth]:
        """Month for `key` if materialized; never materializes."""
        return self._months.get(key)

    def contains(self, key: str) -> bool:
        return key in self._months

    def keys(self) -> list[str]:
        """Materialized month keys in calendar order."""
        return [key for key in MONTH_KEYS if key in self._months]

    def snapshot(self) -> dict[str, LedgerMonth]:
        """Deep copy of every materialized month."""
        return {key: self._months[key].model_copy(deep=True) for key in self.keys()}

    # -------------------------------------------------------------------------
    # Mutation (used by the rollover engine, editor and import)
    # -------------------------------------------------------------------------

    def next_id(self) -> int:
        return self._ids.next_id()

    def put(self, key: str, month: LedgerMonth) -> None:
        """Install `month` under `key`, replacing whatever was there."""
        self._check_key(key)
        self._months[key] = month
        self._ids.advance_past(month.max_id())

    def replace_all(self, months: dict[str, LedgerMonth]) -> None:
        """
        Swap in a complete new set of months.

        The new set becomes authoritative, so saving is allowed again
        after a failed load.
        """
        for key in months:
            self._check_key(key)
        self._months = dict(months)
        self.load_failed = False
        for month in self._months.values():
            self._ids.advance_past(month.max_id())

    def clear(self) -> None:
        self._months = {}
        self.load_failed = False

    @staticmethod
    def _check_key(key: str) -> None:
        if not is_month_key(key):
            raise NotFoundError(f"Unknown month key: {key!r}")

"""
Rollover Engine

Each month key is either absent or materialized. Absent months become
materialized on first access and never go back.

ROLLOVER (implicit, on first access):
- If the previous month (circular: "01" follows "12") exists, its
  entries are copied with reset monthly state
- Otherwise the month starts empty

DUPLICATION (explicit, caller-chosen target):
- Source month must exist
- A target that already holds data is only overwritten after the
  injected confirmation returns True

Copy rules per entry, applied by each kind's `rolled_over()`:
- fresh identifier
- day of month back to the first day
- `paid` back to False where the kind has it
- debt progress (`installments_paid`) and savings balances carried over
"""

from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from monthly_ledger.errors import NotFoundError
from monthly_ledger.models.ledger import LedgerMonth, Section
from monthly_ledger.models.month_key import predecessor
from monthly_ledger.models.notice import LedgerNoticeBuilder
from monthly_ledger.notices import NoticeLogger

if TYPE_CHECKING:
    from monthly_ledger.ledger.locks import MonthLockRegistry
    from monthly_ledger.ledger.store import LedgerStore


ConfirmOverwrite = Callable[[], bool]


class DuplicationOutcome(str, Enum):
    """Result of an explicit duplication."""
    DUPLICATED = "duplicated"
    CANCELLED = "cancelled"


def clone_month(source: LedgerMonth, next_id: Callable[[], int]) -> LedgerMonth:
    """Independent copy of `source` with monthly state reset."""
    return LedgerMonth(**{
        section.value: [entry.rolled_over(next_id()) for entry in source.section(section)]
        for section in Section
    })


class RolloverEngine:
    """
    Materializes months and performs explicit month-to-month copies.

    The engine holds no ledger data of its own; it works on the store
    passed to each call.
    """

    def __init__(
        self,
        notices: Optional[NoticeLogger] = None,
        locks: Optional["MonthLockRegistry"] = None,
    ):
        self._notices = notices or NoticeLogger()
        self._locks = locks

    def ensure_month(self, store: "LedgerStore", key: str) -> bool:
        """
        Make sure `key` is materialized.

        Returns True if the month was created by this call, False if it
        already existed.
        """
        if store.contains(key):
            return False

        source_key = predecessor(key)
        source = store.peek(source_key)

        if source is not None:
            month = clone_month(source, store.next_id)
            notice = LedgerNoticeBuilder.month_rolled_over(
                key, source_key, sum(1 for _ in month.entries())
            )
        else:
            month = LedgerMonth()
            notice = LedgerNoticeBuilder.month_materialized(key)

        store.put(key, month)
        store.persist()
        self._notices.log(notice)
        return True

    def duplicate_to(
        self,
        store: "LedgerStore",
        from_key: str,
        to_key: str,
        confirm_overwrite: Optional[ConfirmOverwrite] = None,
    ) -> DuplicationOutcome:
        """
        Copy `from_key` over `to_key` with monthly state reset.

        Args:
            store: Store holding both months
            from_key: Source month; must be materialized
            to_key: Target month; any key, not only the successor
            confirm_overwrite: Asked only when the target already has
                entries. None means never overwrite.

        Raises:
            NotFoundError: If the source month has no data
            MonthClosedError: If the target is closed and locks are enforced
        """
        source = store.peek(from_key)
        if source is None:
            raise NotFoundError(f"No data to duplicate for month {from_key}")

        if self._locks is not None:
            self._locks.check_open(to_key)

        existing = store.peek(to_key)
        overwriting = existing is not None and existing.has_data()
        if overwriting and (confirm_overwrite is None or not confirm_overwrite()):
            self._notices.log(LedgerNoticeBuilder.duplication_cancelled(from_key, to_key))
            return DuplicationOutcome.CANCELLED

        month = clone_month(source, store.next_id)
        store.put(to_key, month)
        store.persist()
        self._notices.log(LedgerNoticeBuilder.month_duplicated(from_key, to_key, overwriting))
        return DuplicationOutcome.DUPLICATED

"""
Main Orchestrator for Monthly Ledger

This module ties together all the components and defines the flows a
caller (the UI) drives:
1. Month selection (ensure month -> recalculate debts -> show)
2. Month duplication (explicit target, confirmed overwrite)
3. Closing / reopening a month
4. Import / export of the whole store

DESIGN DECISION: The "current month" is held by a session object the
caller owns and passes around. Nothing in the ledger core keeps a
global pointer.
"""

from datetime import datetime
from typing import Any, Optional, Union

from monthly_ledger.config import get_settings
from monthly_ledger.config.settings import AppSettings, Settings
from monthly_ledger.errors import ImportDocumentError, ValidationError
from monthly_ledger.ledger import (
    DebtRecalculator,
    DuplicationOutcome,
    LedgerEditor,
    LedgerStore,
    MonthLockRegistry,
    RolloverEngine,
)
from monthly_ledger.ledger.rollover import ConfirmOverwrite
from monthly_ledger.models.export import ExportDocument
from monthly_ledger.models.ledger import (
    FixedExpenseEntry,
    IncomeEntry,
    LedgerMonth,
    PurchaseExpenseEntry,
    SavingsGoal,
)
from monthly_ledger.models.month_key import current_month_key, is_month_key, successor
from monthly_ledger.models.notice import LedgerNoticeBuilder
from monthly_ledger.notices import NoticeLogger, get_logger
from monthly_ledger.reports import MonthSummary, summarize_month
from monthly_ledger.services.storage import (
    GoogleSheetsClient,
    GoogleSheetsLedgerStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
)
from monthly_ledger.transfer import apply_import, build_export, parse_import


logger = get_logger(__name__)


class LedgerSession:
    """
    One user's working session over the ledger.

    Holds the current-month pointer and the wired components. Every
    operation that needs a month takes it from here explicitly.
    """

    def __init__(
        self,
        store: LedgerStore,
        locks: MonthLockRegistry,
        rollover: RolloverEngine,
        recalculator: DebtRecalculator,
        editor: LedgerEditor,
        notices: NoticeLogger,
        current_month: Optional[str] = None,
    ):
        self.store = store
        self.locks = locks
        self.rollover = rollover
        self.recalculator = recalculator
        self.editor = editor
        self.notices = notices
        self._current = current_month or current_month_key()
        if not is_month_key(self._current):
            raise ValidationError(f"Invalid month key: {self._current!r}")

    @property
    def current_month(self) -> str:
        return self._current

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def select_month(self, key: str) -> LedgerMonth:
        """Move the pointer to `key` and return its (ensured) data."""
        month = self.month_data(key)
        self._current = key
        return month

    def month_data(self, key: Optional[str] = None) -> LedgerMonth:
        """
        Data for `key` (default: current month), ready for display.

        The month is materialized if needed and debt installments are
        normalized, except on closed months when locks are enforced.
        """
        key = key or self._current
        month = self.store.get(key)
        if self.locks.enforce and self.locks.is_closed(key):
            return month
        if self.recalculator.recalc(month, key):
            self.store.persist()
        return month

    def summary(self, key: Optional[str] = None) -> MonthSummary:
        key = key or self._current
        return summarize_month(self.month_data(key), key)

    # -------------------------------------------------------------------------
    # Duplication
    # -------------------------------------------------------------------------

    def duplicate_to(
        self,
        to_key: str,
        confirm_overwrite: Optional[ConfirmOverwrite] = None,
    ) -> DuplicationOutcome:
        """
        Copy the current month onto `to_key`.

        On success the current month moves to `to_key`.
        """
        if not is_month_key(to_key):
            raise ValidationError(f"Invalid month key: {to_key!r}")
        outcome = self.rollover.duplicate_to(
            self.store, self._current, to_key, confirm_overwrite
        )
        if outcome == DuplicationOutcome.DUPLICATED:
            self._current = to_key
        return outcome

    def duplicate_to_next(
        self,
        confirm_overwrite: Optional[ConfirmOverwrite] = None,
    ) -> DuplicationOutcome:
        return self.duplicate_to(successor(self._current), confirm_overwrite)

    # -------------------------------------------------------------------------
    # Locks
    # -------------------------------------------------------------------------

    def is_closed(self, key: Optional[str] = None) -> bool:
        return self.locks.is_closed(key or self._current)

    def toggle_month_closed(self, key: Optional[str] = None) -> bool:
        """Close or reopen a month; returns True if it is now closed."""
        return self.locks.toggle(key or self._current)

    # -------------------------------------------------------------------------
    # Import / export
    # -------------------------------------------------------------------------

    def export_document(self, now: Optional[datetime] = None) -> ExportDocument:
        return build_export(self.store, self._current, now)

    def export_json(self, now: Optional[datetime] = None) -> str:
        return self.export_document(now).to_json()

    def import_document(self, raw: Union[str, bytes, dict[str, Any]]) -> ExportDocument:
        """
        Replace the whole store with an exported document.

        Raises:
            ImportDocumentError: The store is left untouched
        """
        try:
            document = parse_import(raw)
        except ImportDocumentError as e:
            self.notices.import_rejected(str(e))
            raise

        apply_import(self.store, document)
        if document.current_month:
            self._current = document.current_month
        self.store.persist()
        self.notices.log(LedgerNoticeBuilder.import_completed(
            len(document.data), document.current_month
        ))
        return document

    def import_json(self, text: Union[str, bytes]) -> ExportDocument:
        return self.import_document(text)

    def reset(self) -> None:
        """Drop every month and go back to today's month."""
        self.store.clear()
        self.store.persist()
        self._current = current_month_key()


def example_month(next_id) -> LedgerMonth:
    """Starter entries shown the first time the app runs."""
    return LedgerMonth(
        incomes=[IncomeEntry(
            id=next_id(), name="Salary", amount=3_500_000, category="Work",
        )],
        fixed_expenses=[FixedExpenseEntry(
            id=next_id(), name="Rent", amount=1_200_000, category="Housing",
        )],
        purchases=[PurchaseExpenseEntry(
            id=next_id(), name="Groceries", amount=400_000, category="Food", day_of_month=10,
        )],
        savings_goals=[SavingsGoal(
            id=next_id(), name="Emergency fund", target_amount=5_000_000, current_amount=1_200_000,
        )],
    )


def create_storage(app_settings: AppSettings) -> LedgerStorageInterface:
    """
    Storage backend selected by settings.

    A backend that cannot be configured falls back to memory so the app
    still starts.
    """
    if app_settings.storage_backend == "memory":
        return InMemoryLedgerStorage()
    if app_settings.storage_backend == "sheets":
        try:
            return GoogleSheetsLedgerStorage(GoogleSheetsClient())
        except Exception as e:
            # Storage not configured - continue without it
            logger.warning("storage_not_configured", backend="sheets", error=str(e))
            return InMemoryLedgerStorage()
    return JsonFileLedgerStorage(app_settings.data_path)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[LedgerStorageInterface] = None,
    current_month: Optional[str] = None,
) -> LedgerSession:
    """
    Factory function to create a ready-to-use session.

    Args:
        settings: Settings to use; defaults to the cached environment settings
        storage: Explicit backend; overrides the configured one
        current_month: Month to start on; defaults to today's month

    Returns:
        LedgerSession with stored data (or example data) loaded
    """
    current = current_month or current_month_key()
    if not is_month_key(current):
        raise ValidationError(f"Invalid month key: {current!r}")

    settings = settings or get_settings()
    ledger_settings = settings.ledger

    notices = NoticeLogger(max_pending=ledger_settings.notice_queue_size)
    if storage is None:
        storage = create_storage(settings.app)

    locks = MonthLockRegistry(storage, notices, enforce=ledger_settings.enforce_month_lock)
    rollover = RolloverEngine(notices, locks)
    store = LedgerStore(storage, notices, rollover)
    recalculator = DebtRecalculator(ledger_settings.hysteresis_threshold, notices)
    editor = LedgerEditor(store, locks, notices)

    locks.load()
    loaded = store.load()
    if not loaded and not store.load_failed and ledger_settings.seed_example_data:
        store.put(current, example_month(store.next_id))
        store.persist()

    return LedgerSession(
        store=store,
        locks=locks,
        rollover=rollover,
        recalculator=recalculator,
        editor=editor,
        notices=notices,
        current_month=current,
    )

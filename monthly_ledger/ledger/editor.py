"""
Ledger Editor

Add, edit, remove and mark-paid operations, always scoped to one month.

IMPORTANT: Every operation validates completely before it touches the
month. A rejected edit leaves the month exactly as it was.

Order of checks for every mutation:
1. Month lock (when enforced)
2. Entry exists / input validates
3. Apply, persist, notify
"""

import math
from typing import Any, Optional

from pydantic import ValidationError as SchemaValidationError

from monthly_ledger.errors import NotFoundError, ValidationError
from monthly_ledger.ledger.locks import MonthLockRegistry
from monthly_ledger.ledger.store import LedgerStore
from monthly_ledger.models.ledger import EntryBase, LedgerMonth, SavingsGoal, Section
from monthly_ledger.models.notice import LedgerNoticeBuilder
from monthly_ledger.notices import NoticeLogger


# Fields callers may never set directly
PROTECTED_FIELDS = ("id", "kind")


class LedgerEditor:
    """CRUD over the entries of a month."""

    def __init__(
        self,
        store: LedgerStore,
        locks: Optional[MonthLockRegistry] = None,
        notices: Optional[NoticeLogger] = None,
    ):
        self._store = store
        self._locks = locks
        self._notices = notices or NoticeLogger()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _month_for_edit(self, key: str) -> LedgerMonth:
        if self._locks is not None:
            self._locks.check_open(key)
        return self._store.get(key)

    @staticmethod
    def _build(section: Section, data: dict[str, Any]) -> EntryBase:
        try:
            entry = section.entry_type.model_validate(data)
        except SchemaValidationError as e:
            raise ValidationError.from_pydantic(e)
        if section.is_debt:
            entry.computed_installment = entry.installment()
        return entry

    @staticmethod
    def _index_of(month: LedgerMonth, section: Section, entry_id: int) -> int:
        for index, entry in enumerate(month.section(section)):
            if entry.id == entry_id:
                return index
        raise NotFoundError(f"No entry {entry_id} in {section.value}")

    @staticmethod
    def _advance_debt(entry) -> None:
        if entry.installments_paid < entry.term_months:
            entry.installments_paid += 1

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def add(self, key: str, section: Section, fields: dict[str, Any]) -> EntryBase:
        """
        Create a new entry with a fresh identifier.

        Debts get their installment computed immediately.

        Raises:
            ValidationError: If the fields do not form a valid entry
            MonthClosedError: If the month is closed
        """
        section = Section(section)
        month = self._month_for_edit(key)
        payload = {k: v for k, v in fields.items() if k not in PROTECTED_FIELDS}
        entry = self._build(section, {**payload, "id": self._store.next_id()})

        month.section(section).append(entry)
        self._store.persist()
        self._notices.log(LedgerNoticeBuilder.entry_added(key, section.value, entry.id, entry.name))
        return entry

    def update(
        self,
        key: str,
        section: Section,
        entry_id: int,
        changes: dict[str, Any],
    ) -> EntryBase:
        """
        Apply `changes` to an entry.

        The merged record is validated as a whole. A debt's installment
        is recomputed unconditionally; an explicit edit is not drift.
        """
        section = Section(section)
        month = self._month_for_edit(key)
        index = self._index_of(month, section, entry_id)
        entries = month.section(section)

        data = entries[index].model_dump()
        data.update({k: v for k, v in changes.items() if k not in PROTECTED_FIELDS})
        updated = self._build(section, data)

        entries[index] = updated
        self._store.persist()
        self._notices.log(LedgerNoticeBuilder.entry_updated(key, section.value, entry_id, updated.name))
        return updated

    def remove(self, key: str, section: Section, entry_id: int) -> None:
        section = Section(section)
        month = self._month_for_edit(key)
        index = self._index_of(month, section, entry_id)

        del month.section(section)[index]
        self._store.persist()
        self._notices.log(LedgerNoticeBuilder.entry_removed(key, section.value, entry_id))

    def toggle_paid(self, key: str, section: Section, entry_id: int) -> bool:
        """
        Flip the paid flag; returns the new state.

        Marking a debt paid counts one more installment (never past the
        term). Unmarking does not rewind the count.
        """
        section = Section(section)
        if not section.has_paid_flag:
            raise ValidationError(f"{section.value} entries have no paid flag")
        month = self._month_for_edit(key)
        entry = month.section(section)[self._index_of(month, section, entry_id)]

        entry.paid = not entry.paid
        if section.is_debt and entry.paid:
            self._advance_debt(entry)

        self._store.persist()
        self._notices.log(LedgerNoticeBuilder.payment_toggled(key, entry_id, entry.paid))
        return entry.paid

    def mark_all_paid(self, key: str, section: Section) -> int:
        """Mark every unpaid entry of a section as paid; returns how many changed."""
        section = Section(section)
        if not section.has_paid_flag:
            raise ValidationError(f"{section.value} entries have no paid flag")
        month = self._month_for_edit(key)

        changed = 0
        for entry in month.section(section):
            if entry.paid:
                continue
            entry.paid = True
            if section.is_debt:
                self._advance_debt(entry)
            changed += 1

        if changed:
            self._store.persist()
        self._notices.log(LedgerNoticeBuilder.all_marked_paid(key, section.value, changed))
        return changed

    def deposit_savings(self, key: str, goal_id: int, amount: float) -> SavingsGoal:
        """Add `amount` to a savings goal's balance."""
        if amount is None or not math.isfinite(amount) or amount <= 0:
            raise ValidationError("Deposit amount must be greater than zero")
        month = self._month_for_edit(key)
        goal = month.section(Section.SAVINGS_GOALS)[
            self._index_of(month, Section.SAVINGS_GOALS, goal_id)
        ]

        goal.current_amount += amount
        self._store.persist()
        self._notices.log(LedgerNoticeBuilder.savings_deposited(key, goal_id, amount))
        return goal

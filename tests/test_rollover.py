"""
Tests for month materialization and duplication.

Months are absent until first read; the first read copies the previous
month (circularly) with monthly state reset.
"""

import pytest

from monthly_ledger.errors import MonthClosedError, NotFoundError
from monthly_ledger.ledger import DuplicationOutcome, LedgerStore, MonthLockRegistry, RolloverEngine
from monthly_ledger.models.ledger import FixedExpenseEntry, IncomeEntry, LedgerMonth
from monthly_ledger.models.notice import NoticeType


class TestImplicitRollover:
    """Tests for first access to a month."""

    def test_empty_when_no_predecessor(self, store):
        """Test that a month with nothing before it starts empty."""
        month = store.get("05")
        assert not month.has_data()
        assert store.contains("05")

    def test_copies_previous_month(self, store, full_month):
        """Test that the previous month's entries are copied with state reset."""
        store.put("01", full_month)
        month = store.get("02")

        rent = month.fixed_expenses[0]
        assert rent.name == "Rent"
        assert rent.amount == 1_200_000
        assert rent.paid is False
        assert rent.day_of_month == 1
        assert rent.id != full_month.fixed_expenses[0].id

    def test_source_month_untouched(self, store, full_month):
        """Test that rolling over does not alter the source."""
        store.put("01", full_month)
        store.get("02")
        assert store.peek("01").fixed_expenses[0].paid is True
        assert store.peek("01").incomes[0].day_of_month == 30

    def test_debt_progress_and_savings_carried(self, store, full_month):
        """Test that installments paid and savings balances survive."""
        store.put("01", full_month)
        month = store.get("02")
        assert month.revolving_debts[0].installments_paid == 3
        assert month.revolving_debts[0].paid is False
        assert month.installment_loans[0].installments_paid == 5
        assert month.savings_goals[0].current_amount == 1_200_000

    def test_fresh_ids_are_unique(self, store, full_month):
        """Test that copied entries never reuse an identifier."""
        store.put("01", full_month)
        month = store.get("02")
        old_ids = {entry.id for _, entry in full_month.entries()}
        new_ids = [entry.id for _, entry in month.entries()]
        assert len(set(new_ids)) == len(new_ids)
        assert not old_ids & set(new_ids)

    def test_january_rolls_from_december(self, store):
        """Test circular rollover across the year boundary."""
        store.put("12", LedgerMonth(incomes=[IncomeEntry(id=1, name="Bonus", amount=500)]))
        month = store.get("01")
        assert [income.name for income in month.incomes] == ["Bonus"]

    def test_materialization_is_idempotent(self, store, full_month):
        """Test that repeated reads return the same month without recopying."""
        store.put("01", full_month)
        first = store.get("02")
        first.incomes[0].amount = 1
        second = store.get("02")
        assert second is first
        assert second.incomes[0].amount == 1

    def test_absent_predecessor_not_materialized(self, store):
        """Test that materializing a month does not create its predecessor."""
        store.get("07")
        assert not store.contains("06")

    def test_rollover_persists_and_notifies(self, store, storage, notices, full_month):
        """Test that a materialized month is saved and announced."""
        store.put("01", full_month)
        store.get("02")
        assert "02" in storage.load_all()
        assert notices.pending[-1].notice_type == NoticeType.MONTH_ROLLED_OVER

    def test_closed_month_still_materializes(self, store, locks):
        """Test that reading a closed, absent month is allowed."""
        locks.set_closed("09", True)
        assert not store.get("09").has_data()


class TestDuplicateTo:
    """Tests for explicit duplication."""

    def test_missing_source_raises(self, store, rollover):
        """Test that duplicating a month with no data fails."""
        with pytest.raises(NotFoundError):
            rollover.duplicate_to(store, "03", "04")

    def test_duplicates_into_absent_target(self, store, rollover, full_month):
        """Test a plain copy to any month, not only the next one."""
        store.put("03", full_month)
        outcome = rollover.duplicate_to(store, "03", "08")
        assert outcome == DuplicationOutcome.DUPLICATED
        assert store.peek("08").fixed_expenses[0].paid is False

    def test_empty_target_needs_no_confirmation(self, store, rollover, full_month):
        """Test that a materialized but empty target is overwritten without asking."""
        store.put("03", full_month)
        store.put("04", LedgerMonth())

        def never_called():
            raise AssertionError("confirmation should not be asked")

        assert rollover.duplicate_to(store, "03", "04", never_called) == DuplicationOutcome.DUPLICATED

    def test_target_with_data_cancelled_without_confirmation(self, store, rollover, full_month):
        """Test that a populated target is kept when nobody confirms."""
        target = LedgerMonth(incomes=[IncomeEntry(id=50, name="Keep me", amount=1)])
        store.put("03", full_month)
        store.put("04", target)

        assert rollover.duplicate_to(store, "03", "04") == DuplicationOutcome.CANCELLED
        assert rollover.duplicate_to(store, "03", "04", lambda: False) == DuplicationOutcome.CANCELLED
        assert store.peek("04") is target

    def test_target_with_data_overwritten_on_confirmation(self, store, rollover, full_month, notices):
        """Test that confirming replaces the target with a reset copy."""
        store.put("03", full_month)
        store.put("04", LedgerMonth(incomes=[IncomeEntry(id=50, name="Old", amount=1)]))

        outcome = rollover.duplicate_to(store, "03", "04", lambda: True)

        assert outcome == DuplicationOutcome.DUPLICATED
        assert [income.name for income in store.peek("04").incomes] == ["Salary"]
        assert notices.pending[-1].details["overwritten"] is True

    def test_closed_target_rejected(self, store, rollover, locks, full_month):
        """Test that a closed target month cannot be overwritten."""
        store.put("03", full_month)
        locks.set_closed("04", True)
        with pytest.raises(MonthClosedError):
            rollover.duplicate_to(store, "03", "04", lambda: True)
        assert not store.contains("04")

    def test_advisory_lock_allows_duplication(self, full_month):
        """Test that without enforcement a closed target can be written."""
        locks = MonthLockRegistry(enforce=False)
        engine = RolloverEngine(locks=locks)
        store = LedgerStore(rollover=engine)
        store.put("03", full_month)
        locks.set_closed("04", True)
        assert engine.duplicate_to(store, "03", "04") == DuplicationOutcome.DUPLICATED

    def test_duplicate_is_independent(self, store, rollover, full_month):
        """Test that editing the copy leaves the source alone."""
        store.put("03", LedgerMonth(
            fixed_expenses=[FixedExpenseEntry(id=1, name="Rent", amount=100, paid=True)]
        ))
        rollover.duplicate_to(store, "03", "06")
        store.peek("06").fixed_expenses[0].amount = 999
        assert store.peek("03").fixed_expenses[0].amount == 100

"""
Tests for Monthly Ledger models

Test strategy:
1. Unit tests for individual components (models, month keys, notices)
2. Integration tests for flows (with in-memory storage)
3. No real API calls in tests
"""

import pytest
from datetime import date, timedelta

from pydantic import TypeAdapter

from monthly_ledger.models.export import ExportDocument
from monthly_ledger.models.ledger import (
    FixedExpenseEntry,
    IncomeEntry,
    InstallmentLoan,
    LedgerEntry,
    LedgerMonth,
    RevolvingDebt,
    SavingsGoal,
    Section,
)
from monthly_ledger.models.month_key import (
    MONTH_KEYS,
    current_month_key,
    is_month_key,
    month_name,
    predecessor,
    successor,
)
from monthly_ledger.models.notice import (
    LedgerNoticeBuilder,
    NoticeSeverity,
    NoticeType,
)
from monthly_ledger.notices import NoticeLogger


class TestMonthKeys:
    """Tests for circular month keys."""

    def test_successor_wraps_december(self):
        """Test that December is followed by January."""
        assert successor("12") == "01"
        assert successor("01") == "02"
        assert successor("09") == "10"

    def test_predecessor_wraps_january(self):
        """Test that January is preceded by December."""
        assert predecessor("01") == "12"
        assert predecessor("10") == "09"

    def test_successor_and_predecessor_are_inverse(self):
        """Test stepping forward then back returns the same key for every month."""
        for key in MONTH_KEYS:
            assert predecessor(successor(key)) == key
            assert successor(predecessor(key)) == key

    def test_is_month_key(self):
        """Test that only two-digit keys 01..12 are accepted."""
        assert is_month_key("01")
        assert is_month_key("12")
        assert not is_month_key("1")
        assert not is_month_key("13")
        assert not is_month_key("00")
        assert not is_month_key(1)

    def test_month_name(self):
        """Test display names."""
        assert month_name("01") == "January"
        assert month_name("12") == "December"

    def test_current_month_key(self):
        """Test the key for a given date."""
        assert current_month_key(date(2024, 3, 15)) == "03"
        assert current_month_key(date(2024, 11, 1)) == "11"


class TestEntryModels:
    """Tests for entry Pydantic models."""

    def test_income_strips_whitespace(self):
        """Test that whitespace is stripped from names."""
        income = IncomeEntry(id=1, name="  Salary  ", amount=100)
        assert income.name == "Salary"

    def test_entry_defaults_to_first_day(self):
        """Test that day of month defaults to 1."""
        entry = FixedExpenseEntry(id=1, name="Rent", amount=100)
        assert entry.day_of_month == 1
        assert entry.paid is False

    def test_entry_rejects_invalid_day(self):
        """Test that day of month must be 1..31."""
        with pytest.raises(ValueError):
            IncomeEntry(id=1, name="Salary", amount=100, day_of_month=32)

    def test_entry_rejects_unknown_field(self):
        """Test that fields outside the entry model are refused."""
        with pytest.raises(ValueError):
            IncomeEntry(id=1, name="Salary", amount=100, monto=100)

    def test_entry_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            FixedExpenseEntry(id=1, name="Rent", amount=-5)

    def test_debt_rejects_progress_past_term(self):
        """Test that installments paid cannot exceed the term."""
        with pytest.raises(ValueError):
            RevolvingDebt(id=1, name="Visa", total_principal=1000, term_months=3, installments_paid=4)

    def test_debt_rejects_zero_term(self):
        """Test that the term must be at least one month."""
        with pytest.raises(ValueError):
            RevolvingDebt(id=1, name="Visa", total_principal=1000, term_months=0)

    def test_debt_rejects_rate_above_half(self):
        """Test that monthly rates above 50% are rejected."""
        with pytest.raises(ValueError):
            RevolvingDebt(id=1, name="Visa", total_principal=1000, term_months=3, monthly_rate=0.6)

    def test_debt_remaining_installments(self):
        """Test remaining installments."""
        debt = RevolvingDebt(id=1, name="Visa", total_principal=1000, term_months=12, installments_paid=4)
        assert debt.remaining_installments == 8

    def test_loan_installment_includes_insurance(self):
        """Test that a loan's installment carries insurance and tax."""
        loan = InstallmentLoan(
            id=1, name="Car", total_principal=1_200_000, term_months=12,
            insurance_pct=0.12, insurance_tax_pct=0.19,
        )
        assert loan.installment() == 114_280

    def test_savings_progress_capped(self):
        """Test that savings progress never exceeds 1."""
        goal = SavingsGoal(id=1, name="Trip", target_amount=100, current_amount=250)
        assert goal.progress == 1.0
        assert SavingsGoal(id=2, name="Empty", target_amount=0).progress == 0.0

    def test_discriminated_union_parses_kind(self):
        """Test that the kind field picks the model."""
        adapter = TypeAdapter(LedgerEntry)
        entry = adapter.validate_python({
            "kind": "installment_loan",
            "id": 3,
            "name": "Car",
            "total_principal": 1000,
            "term_months": 10,
        })
        assert isinstance(entry, InstallmentLoan)


class TestRolledOver:
    """Tests for the per-kind copy constructors."""

    def test_fixed_expense_reset(self, full_month):
        """Test that a copied expense is unpaid on day 1 with a new id."""
        copy = full_month.fixed_expenses[0].rolled_over(99)
        assert copy.id == 99
        assert copy.paid is False
        assert copy.day_of_month == 1
        assert copy.amount == 1_200_000
        assert copy.category == "Housing"

    def test_debt_keeps_progress(self, full_month):
        """Test that a copied card keeps installments paid and stored installment."""
        copy = full_month.revolving_debts[0].rolled_over(99)
        assert copy.installments_paid == 3
        assert copy.computed_installment == 100_000
        assert copy.paid is False
        assert copy.day_of_month == 1

    def test_loan_keeps_insurance(self, full_month):
        """Test that a copied loan keeps its surcharges."""
        copy = full_month.installment_loans[0].rolled_over(99)
        assert isinstance(copy, InstallmentLoan)
        assert copy.insurance_pct == 0.12
        assert copy.insurance_tax_pct == 0.19
        assert copy.installments_paid == 5

    def test_savings_keeps_balance(self, full_month):
        """Test that a copied goal keeps its balance."""
        copy = full_month.savings_goals[0].rolled_over(99)
        assert copy.current_amount == 1_200_000
        assert copy.day_of_month == 1


class TestLedgerMonth:
    """Tests for the month container."""

    def test_empty_month_has_six_lists(self):
        """Test that an empty month has every section as an empty list."""
        month = LedgerMonth()
        for section in Section:
            assert month.section(section) == []
        assert not month.has_data()

    def test_find_and_max_id(self, full_month):
        """Test entry lookup and the largest id."""
        assert full_month.find(Section.PURCHASES, 3).name == "Groceries"
        assert full_month.find(Section.PURCHASES, 1) is None
        assert full_month.max_id() == 6

    def test_debts_yields_cards_then_loans(self, full_month):
        """Test debt iteration order."""
        assert [debt.id for debt in full_month.debts()] == [4, 5]

    def test_section_flags(self):
        """Test which sections carry paid flags and debts."""
        assert Section.FIXED_EXPENSES.has_paid_flag
        assert not Section.INCOMES.has_paid_flag
        assert not Section.SAVINGS_GOALS.has_paid_flag
        assert Section.INSTALLMENT_LOANS.is_debt
        assert not Section.PURCHASES.is_debt

    def test_export_document_uses_aliases(self, full_month):
        """Test that the wire format uses camelCase keys."""
        document = ExportDocument(current_month="03", data={"03": full_month})
        dumped = document.model_dump(by_alias=True)
        assert set(dumped) == {"exportedAt", "currentMonth", "data"}

    def test_export_timestamp_is_utc(self):
        """Test that the default export time carries a UTC offset."""
        document = ExportDocument(data={})
        assert document.exported_at.utcoffset() == timedelta(0)

    def test_month_rejects_unknown_section(self):
        """Test that a month payload with unrecognized sections is refused."""
        with pytest.raises(ValueError):
            LedgerMonth.model_validate({"ingresos": []})


class TestNotices:
    """Tests for notices and the notice logger."""

    def test_rolled_over_notice(self):
        """Test the rollover notice content."""
        notice = LedgerNoticeBuilder.month_rolled_over("02", "01", 7)
        assert notice.notice_type == NoticeType.MONTH_ROLLED_OVER
        assert notice.month_key == "02"
        assert "January" in notice.message
        assert notice.details["entry_count"] == 7

    def test_persistence_failed_is_warning(self):
        """Test that save failures are warnings."""
        notice = LedgerNoticeBuilder.persistence_failed("save", "disk full")
        assert notice.severity == NoticeSeverity.WARNING

    def test_to_log_dict(self):
        """Test conversion to a log dictionary."""
        notice = LedgerNoticeBuilder.month_lock_changed("05", True)
        log_dict = notice.to_log_dict()
        assert log_dict["notice_type"] == "month_closed"
        assert log_dict["month_key"] == "05"
        assert isinstance(log_dict["notice_id"], str)

    def test_queue_is_bounded(self):
        """Test that only the newest notices are kept."""
        logger = NoticeLogger(max_pending=2)
        for key in ("01", "02", "03"):
            logger.log(LedgerNoticeBuilder.month_materialized(key))
        assert [n.month_key for n in logger.pending] == ["02", "03"]

    def test_drain_clears_queue(self):
        """Test that drain returns and clears pending notices."""
        logger = NoticeLogger()
        logger.import_rejected("bad file")
        drained = logger.drain()
        assert len(drained) == 1
        assert drained[0].notice_type == NoticeType.IMPORT_REJECTED
        assert logger.pending == []

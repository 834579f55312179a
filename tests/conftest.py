"""
Shared fixtures.

Nothing here touches the network: storage is in memory or a temp file.
"""

import pytest

from monthly_ledger.ledger import (
    DebtRecalculator,
    LedgerEditor,
    LedgerStore,
    MonthLockRegistry,
    RolloverEngine,
)
from monthly_ledger.models.ledger import (
    FixedExpenseEntry,
    IncomeEntry,
    InstallmentLoan,
    LedgerMonth,
    PurchaseExpenseEntry,
    RevolvingDebt,
    SavingsGoal,
)
from monthly_ledger.notices import NoticeLogger
from monthly_ledger.services.storage import InMemoryLedgerStorage


@pytest.fixture
def notices():
    return NoticeLogger()


@pytest.fixture
def storage():
    return InMemoryLedgerStorage()


@pytest.fixture
def locks(storage, notices):
    return MonthLockRegistry(storage, notices)


@pytest.fixture
def rollover(notices, locks):
    return RolloverEngine(notices, locks)


@pytest.fixture
def store(storage, notices, rollover):
    return LedgerStore(storage, notices, rollover)


@pytest.fixture
def editor(store, locks, notices):
    return LedgerEditor(store, locks, notices)


@pytest.fixture
def recalculator(notices):
    return DebtRecalculator(notices=notices)


@pytest.fixture
def full_month():
    """One entry of every kind, with this-month state set."""
    return LedgerMonth(
        incomes=[IncomeEntry(id=1, name="Salary", amount=3_000_000, category="Work", day_of_month=30)],
        fixed_expenses=[FixedExpenseEntry(
            id=2, name="Rent", amount=1_200_000, category="Housing", day_of_month=5, paid=True,
        )],
        purchases=[PurchaseExpenseEntry(
            id=3, name="Groceries", amount=400_000, category="Food", day_of_month=12, paid=True,
        )],
        revolving_debts=[RevolvingDebt(
            id=4, name="Visa", total_principal=1_200_000, term_months=12,
            installments_paid=3, computed_installment=100_000, paid=True, day_of_month=20,
        )],
        installment_loans=[InstallmentLoan(
            id=5, name="Car loan", total_principal=1_200_000, term_months=12,
            installments_paid=5, insurance_pct=0.12, insurance_tax_pct=0.19,
            computed_installment=114_280, paid=True,
        )],
        savings_goals=[SavingsGoal(
            id=6, name="Emergency fund", target_amount=5_000_000, current_amount=1_200_000, day_of_month=15,
        )],
    )

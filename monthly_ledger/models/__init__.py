"""
Data Models Package

This package contains all Pydantic models used by the ledger.
All data kept in the store must conform to these schemas.
"""

from monthly_ledger.models.ledger import (
    EntryBase,
    FixedExpenseEntry,
    IncomeEntry,
    InstallmentLoan,
    LedgerEntry,
    LedgerMonth,
    PurchaseExpenseEntry,
    RevolvingDebt,
    SavingsGoal,
    Section,
)
from monthly_ledger.models.month_key import (
    MONTH_KEYS,
    MonthKey,
    current_month_key,
    is_month_key,
    month_name,
    predecessor,
    successor,
)
from monthly_ledger.models.export import ExportDocument
from monthly_ledger.models.notice import (
    LedgerNotice,
    LedgerNoticeBuilder,
    NoticeSeverity,
    NoticeType,
)

__all__ = [
    # Ledger models
    "EntryBase",
    "FixedExpenseEntry",
    "IncomeEntry",
    "InstallmentLoan",
    "LedgerEntry",
    "LedgerMonth",
    "PurchaseExpenseEntry",
    "RevolvingDebt",
    "SavingsGoal",
    "Section",
    # Month keys
    "MONTH_KEYS",
    "MonthKey",
    "current_month_key",
    "is_month_key",
    "month_name",
    "predecessor",
    "successor",
    # Export
    "ExportDocument",
    # Notices
    "LedgerNotice",
    "LedgerNoticeBuilder",
    "NoticeSeverity",
    "NoticeType",
]

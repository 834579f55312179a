"""Ledger core: store, rollover, recalculation, locks and editing."""

from monthly_ledger.ledger.identifiers import IdentifierGenerator
from monthly_ledger.ledger.rollover import DuplicationOutcome, RolloverEngine, clone_month
from monthly_ledger.ledger.store import LedgerStore
from monthly_ledger.ledger.recalc import DEFAULT_HYSTERESIS_THRESHOLD, DebtRecalculator
from monthly_ledger.ledger.locks import MonthLockRegistry
from monthly_ledger.ledger.editor import LedgerEditor
from monthly_ledger.ledger.forms import DebtFormInput

__all__ = [
    "DEFAULT_HYSTERESIS_THRESHOLD",
    "DebtFormInput",
    "DebtRecalculator",
    "DuplicationOutcome",
    "IdentifierGenerator",
    "LedgerEditor",
    "LedgerStore",
    "MonthLockRegistry",
    "RolloverEngine",
    "clone_month",
]

"""Installment math and percentage parsing."""

from monthly_ledger.finance.amortization import (
    InstallmentBreakdown,
    cuota,
    installment_breakdown,
    round_currency,
)
from monthly_ledger.finance.percent import format_percent, parse_percent

__all__ = [
    "InstallmentBreakdown",
    "cuota",
    "format_percent",
    "installment_breakdown",
    "parse_percent",
    "round_currency",
]

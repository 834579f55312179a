"""Report package."""

from monthly_ledger.reports.summary import (
    CategoryShare,
    HistoryRow,
    MonthSummary,
    Recommendation,
    category_breakdown,
    format_currency,
    history,
    recommendations,
    summarize_month,
)

__all__ = [
    "CategoryShare",
    "HistoryRow",
    "MonthSummary",
    "Recommendation",
    "category_breakdown",
    "format_currency",
    "history",
    "recommendations",
    "summarize_month",
]

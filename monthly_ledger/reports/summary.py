"""
Monthly Reports

Deterministic figures computed from stored months:
- totals per section, free balance and savings rate for one month
- spending by category (fixed expenses + purchases)
- a history table over every materialized month
- simple budgeting recommendations

Reports only read. `history()` never materializes a month.
"""

from typing import Optional

from pydantic import BaseModel, Field

from monthly_ledger.finance.amortization import round_currency
from monthly_ledger.ledger.store import LedgerStore
from monthly_ledger.models.ledger import LedgerMonth
from monthly_ledger.models.month_key import month_name


DEFAULT_CATEGORY = "Others"
TARGET_SAVINGS_RATE = 20.0
MIN_SAVINGS_RATE = 10.0


class MonthSummary(BaseModel):
    """Totals for one month."""

    month_key: Optional[str] = None
    total_income: float = 0.0
    total_fixed: float = 0.0
    total_cards: float = 0.0
    total_loans: float = 0.0
    total_purchases: float = 0.0
    total_savings: float = Field(
        default=0.0,
        description="Sum of savings balances (not an expense)"
    )

    @property
    def total_expenses(self) -> float:
        return self.total_fixed + self.total_cards + self.total_loans + self.total_purchases

    @property
    def free_balance(self) -> float:
        return self.total_income - self.total_expenses

    @property
    def savings_rate(self) -> Optional[float]:
        """Free balance as a percentage of income; None without income."""
        if not self.total_income:
            return None
        return self.free_balance / self.total_income * 100


class CategoryShare(BaseModel):
    category: str
    amount: float
    share: float = Field(..., ge=0, le=100, description="Percent of total spending")


class HistoryRow(BaseModel):
    month_key: str
    month_name: str
    income: float
    expenses: float
    balance: float
    savings_rate: Optional[float] = None


class Recommendation(BaseModel):
    title: str
    detail: str


def summarize_month(month: LedgerMonth, month_key: Optional[str] = None) -> MonthSummary:
    """Section totals; debts count with their stored installment."""
    return MonthSummary(
        month_key=month_key,
        total_income=sum(entry.amount for entry in month.incomes),
        total_fixed=sum(entry.amount for entry in month.fixed_expenses),
        total_cards=sum(debt.computed_installment or 0 for debt in month.revolving_debts),
        total_loans=sum(debt.computed_installment or 0 for debt in month.installment_loans),
        total_purchases=sum(entry.amount for entry in month.purchases),
        total_savings=sum(goal.current_amount for goal in month.savings_goals),
    )


def category_breakdown(month: LedgerMonth) -> list[CategoryShare]:
    """Spending per category, largest first."""
    totals: dict[str, float] = {}
    for entry in [*month.fixed_expenses, *month.purchases]:
        category = entry.category.strip() or DEFAULT_CATEGORY
        totals[category] = totals.get(category, 0.0) + entry.amount

    grand_total = sum(totals.values())
    if grand_total <= 0:
        return []

    shares = [
        CategoryShare(category=category, amount=amount, share=amount / grand_total * 100)
        for category, amount in totals.items()
    ]
    shares.sort(key=lambda share: share.amount, reverse=True)
    return shares


def history(store: LedgerStore) -> list[HistoryRow]:
    """One row per materialized month, latest month key first."""
    rows = []
    for key in reversed(store.keys()):
        summary = summarize_month(store.peek(key), key)
        rows.append(HistoryRow(
            month_key=key,
            month_name=month_name(key),
            income=summary.total_income,
            expenses=summary.total_expenses,
            balance=summary.free_balance,
            savings_rate=summary.savings_rate,
        ))
    return rows


def recommendations(summary: MonthSummary) -> list[Recommendation]:
    tips = []
    rate = summary.savings_rate or 0.0

    if summary.free_balance < 0:
        tips.append(Recommendation(
            title="Spending exceeds income",
            detail="Your expenses are higher than your income. Cut non-essentials.",
        ))
    if rate < MIN_SAVINGS_RATE:
        tips.append(Recommendation(
            title="Improve your savings",
            detail=f"You are saving {rate:.1f}%. Aim for {TARGET_SAVINGS_RATE:.0f}%.",
        ))
    tips.append(Recommendation(
        title="50/30/20",
        detail="50% needs, 30% wants, 20% savings and investment.",
    ))
    tips.append(Recommendation(
        title="Cards",
        detail="Pay the full balance to avoid interest.",
    ))
    return tips


def format_currency(value: float, symbol: str = "$") -> str:
    """Whole units with dot thousands separators: 1200000 -> "$ 1.200.000"."""
    amount = round_currency(abs(value or 0))
    sign = "-" if (value or 0) < 0 and amount else ""
    return f"{sign}{symbol} {amount:,}".replace(",", ".")

"""
Debt Recalculator

Keeps each debt's stored installment in line with its principal, rate,
term and surcharges.

DESIGN DECISION: A stored installment is only replaced when the fresh
value differs by more than a threshold. Small drift (float noise, a
value rounded by hand) is left alone, so values set elsewhere are not
silently rewritten on every read. A stored value of None or 0 counts
as never computed and is always filled in.
"""

from typing import Optional

from monthly_ledger.models.ledger import LedgerMonth
from monthly_ledger.models.notice import LedgerNoticeBuilder
from monthly_ledger.notices import NoticeLogger


DEFAULT_HYSTERESIS_THRESHOLD = 1.0


class DebtRecalculator:
    """Refreshes `computed_installment` on cards and loans."""

    def __init__(
        self,
        threshold: float = DEFAULT_HYSTERESIS_THRESHOLD,
        notices: Optional[NoticeLogger] = None,
    ):
        if threshold < 0:
            raise ValueError("Hysteresis threshold cannot be negative")
        self.threshold = threshold
        self._notices = notices or NoticeLogger()

    def recalc(self, month: LedgerMonth, month_key: Optional[str] = None) -> int:
        """
        Normalize every debt installment in `month`.

        Returns:
            Number of installments that were overwritten
        """
        updated = 0
        for debt in month.debts():
            fresh = debt.installment()
            stored = debt.computed_installment
            if stored == fresh:
                continue
            if stored and abs(fresh - stored) <= self.threshold:
                continue
            debt.computed_installment = fresh
            updated += 1
            self._notices.log(LedgerNoticeBuilder.installment_recalculated(
                month_key, debt.id, stored, fresh
            ))
        return updated

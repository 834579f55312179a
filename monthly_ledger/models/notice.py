"""
Notice Models

Notices are the user-visible trace of what the ledger just did:
"copied from January", "month closed", "save failed".

DESIGN DECISION: Notices live for the session only. They feed UI
messages and structured logs; they are never persisted, so there is
no history to migrate or prune.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from monthly_ledger.models.month_key import month_name


class NoticeType(str, Enum):
    """Things worth telling the user about."""
    # Rollover
    MONTH_MATERIALIZED = "month_materialized"
    MONTH_ROLLED_OVER = "month_rolled_over"
    MONTH_DUPLICATED = "month_duplicated"
    DUPLICATION_CANCELLED = "duplication_cancelled"

    # Debts
    INSTALLMENT_RECALCULATED = "installment_recalculated"

    # Editing
    ENTRY_ADDED = "entry_added"
    ENTRY_UPDATED = "entry_updated"
    ENTRY_REMOVED = "entry_removed"
    PAYMENT_TOGGLED = "payment_toggled"
    ALL_MARKED_PAID = "all_marked_paid"
    SAVINGS_DEPOSITED = "savings_deposited"

    # Locks
    MONTH_CLOSED = "month_closed"
    MONTH_REOPENED = "month_reopened"

    # Import / persistence
    IMPORT_COMPLETED = "import_completed"
    IMPORT_REJECTED = "import_rejected"
    PERSISTENCE_FAILED = "persistence_failed"


class NoticeSeverity(str, Enum):
    """Severity level for notices."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerNotice(BaseModel):
    """A single notice."""

    notice_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    notice_type: NoticeType
    severity: NoticeSeverity = NoticeSeverity.INFO

    month_key: Optional[str] = Field(
        default=None,
        description="Month the notice is about, if any"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Entry the notice is about, if any"
    )
    message: str = Field(
        ...,
        max_length=500,
        description="Short human-readable message"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "notice_id": str(self.notice_id),
            "timestamp": self.timestamp.isoformat(),
            "notice_type": self.notice_type.value,
            "severity": self.severity.value,
            "month_key": self.month_key,
            "entity_id": self.entity_id,
            "message": self.message,
            "details": self.details,
        }


class LedgerNoticeBuilder:
    """
    Helper class to build notices with common patterns.

    Usage:
        notice = LedgerNoticeBuilder.month_rolled_over("02", "01", 7)
    """

    @staticmethod
    def month_materialized(month_key: str) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.MONTH_MATERIALIZED,
            severity=NoticeSeverity.DEBUG,
            month_key=month_key,
            message=f"{month_name(month_key)} started empty",
        )

    @staticmethod
    def month_rolled_over(month_key: str, source_key: str, entry_count: int) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.MONTH_ROLLED_OVER,
            month_key=month_key,
            message=f"Data copied from {month_name(source_key)}",
            details={"source_month": source_key, "entry_count": entry_count},
        )

    @staticmethod
    def month_duplicated(source_key: str, target_key: str, overwritten: bool) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.MONTH_DUPLICATED,
            month_key=target_key,
            message=f"Month duplicated to {month_name(target_key)}",
            details={"source_month": source_key, "overwritten": overwritten},
        )

    @staticmethod
    def duplication_cancelled(source_key: str, target_key: str) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.DUPLICATION_CANCELLED,
            month_key=target_key,
            message=f"{month_name(target_key)} already has data; nothing was copied",
            details={"source_month": source_key},
        )

    @staticmethod
    def installment_recalculated(
        month_key: Optional[str],
        entity_id: int,
        previous: Optional[int],
        current: int,
    ) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.INSTALLMENT_RECALCULATED,
            severity=NoticeSeverity.DEBUG,
            month_key=month_key,
            entity_id=entity_id,
            message=f"Installment updated to {current}",
            details={"previous": previous, "current": current},
        )

    @staticmethod
    def entry_added(month_key: str, section: str, entity_id: int, name: str) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.ENTRY_ADDED,
            month_key=month_key,
            entity_id=entity_id,
            message=f"Saved: {name}",
            details={"section": section},
        )

    @staticmethod
    def entry_updated(month_key: str, section: str, entity_id: int, name: str) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.ENTRY_UPDATED,
            month_key=month_key,
            entity_id=entity_id,
            message=f"Updated: {name}",
            details={"section": section},
        )

    @staticmethod
    def entry_removed(month_key: str, section: str, entity_id: int) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.ENTRY_REMOVED,
            month_key=month_key,
            entity_id=entity_id,
            message="Entry removed",
            details={"section": section},
        )

    @staticmethod
    def payment_toggled(month_key: str, entity_id: int, paid: bool) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.PAYMENT_TOGGLED,
            month_key=month_key,
            entity_id=entity_id,
            message="Marked as paid" if paid else "Marked as unpaid",
            details={"paid": paid},
        )

    @staticmethod
    def all_marked_paid(month_key: str, section: str, count: int) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.ALL_MARKED_PAID,
            month_key=month_key,
            message=f"{count} entries marked as paid",
            details={"section": section, "count": count},
        )

    @staticmethod
    def savings_deposited(month_key: str, entity_id: int, amount: float) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.SAVINGS_DEPOSITED,
            month_key=month_key,
            entity_id=entity_id,
            message="Savings added",
            details={"amount": amount},
        )

    @staticmethod
    def month_lock_changed(month_key: str, closed: bool) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.MONTH_CLOSED if closed else NoticeType.MONTH_REOPENED,
            month_key=month_key,
            message=f"{month_name(month_key)} {'closed' if closed else 'reopened'}",
        )

    @staticmethod
    def import_completed(month_count: int, current_month: Optional[str]) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.IMPORT_COMPLETED,
            month_key=current_month,
            message=f"Imported {month_count} months",
            details={"month_count": month_count},
        )

    @staticmethod
    def import_rejected(reason: str) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.IMPORT_REJECTED,
            severity=NoticeSeverity.WARNING,
            message="Invalid import file",
            details={"reason": reason},
        )

    @staticmethod
    def persistence_failed(operation: str, error_message: str) -> LedgerNotice:
        return LedgerNotice(
            notice_type=NoticeType.PERSISTENCE_FAILED,
            severity=NoticeSeverity.WARNING,
            message="Changes are kept in memory but could not be saved",
            details={"operation": operation, "error": error_message},
        )

"""
Notice Logger

DESIGN DECISION: Every user-visible ledger event goes through one
place. The notice logger:
- Always writes a structured log line
- Queues the notice so the UI can show it (toast-style)
- Never raises, so reporting cannot break a ledger operation
"""

from collections import deque
from typing import Optional

import structlog

from monthly_ledger.models.notice import LedgerNotice, LedgerNoticeBuilder, NoticeSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class NoticeLogger:
    """
    Central notice service.

    Notices are kept in a bounded queue; the oldest are dropped first
    if the UI does not drain them.
    """

    def __init__(self, max_pending: int = 50):
        self._pending: deque[LedgerNotice] = deque(maxlen=max_pending)
        self._logger = structlog.get_logger("monthly_ledger")

    def log(self, notice: LedgerNotice) -> None:
        """Log a notice and queue it for display."""
        log_dict = notice.to_log_dict()

        if notice.severity == NoticeSeverity.ERROR:
            self._logger.error("ledger_notice", **log_dict)
        elif notice.severity == NoticeSeverity.WARNING:
            self._logger.warning("ledger_notice", **log_dict)
        elif notice.severity == NoticeSeverity.DEBUG:
            self._logger.debug("ledger_notice", **log_dict)
        else:
            self._logger.info("ledger_notice", **log_dict)

        self._pending.append(notice)

    @property
    def pending(self) -> list[LedgerNotice]:
        return list(self._pending)

    def drain(self) -> list[LedgerNotice]:
        """Return pending notices and clear the queue."""
        notices = list(self._pending)
        self._pending.clear()
        return notices

    def persistence_failed(self, operation: str, error: Exception) -> None:
        self.log(LedgerNoticeBuilder.persistence_failed(operation, str(error)))

    def import_rejected(self, reason: str) -> None:
        self.log(LedgerNoticeBuilder.import_rejected(reason))


def get_logger(name: Optional[str] = None):
    """structlog logger bound to the ledger namespace."""
    return structlog.get_logger(name or "monthly_ledger")

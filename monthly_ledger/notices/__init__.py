"""Notice logging package."""

from monthly_ledger.notices.logger import NoticeLogger, get_logger

__all__ = ["NoticeLogger", "get_logger"]

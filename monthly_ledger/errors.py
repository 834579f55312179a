"""
Ledger Errors

DESIGN DECISION: Every failure the core can report has its own type.
Callers decide what to show; the core never turns an error into a
silent default.

- ValidationError blocks a mutation before any state changes.
- NotFoundError aborts one operation as a no-op.
- MonthClosedError rejects edits on a month that has been closed.
- ImportDocumentError rejects a whole import, store untouched.

PersistenceError lives with the storage interface.
"""

from typing import Optional

from pydantic import ValidationError as SchemaValidationError


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class ValidationError(LedgerError):
    """Input rejected before any state was changed."""

    def __init__(self, message: str, issues: Optional[list[str]] = None):
        super().__init__(message)
        self.issues = issues or [message]

    @classmethod
    def from_pydantic(cls, exc: SchemaValidationError) -> "ValidationError":
        """Flatten a pydantic failure into readable issues."""
        issues = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"]) or "entry"
            issues.append(f"{location}: {error['msg']}")
        return cls("; ".join(issues), issues)


class NotFoundError(LedgerError):
    """Month or entry does not exist."""
    pass


class MonthClosedError(LedgerError):
    """Mutation attempted on a closed month."""

    def __init__(self, month_key: str):
        super().__init__(f"Month {month_key} is closed")
        self.month_key = month_key


class ImportDocumentError(LedgerError):
    """Import document is malformed or incomplete."""
    pass

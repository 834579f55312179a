"""
Import / Export

Export writes the whole store plus the selected month as one JSON
document. Import reads such a document back.

IMPORTANT: Import is all or nothing. The document is parsed and
validated completely before the store is touched; any problem rejects
the whole file and leaves the existing months untouched.
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import ValidationError as SchemaValidationError

from monthly_ledger.errors import ImportDocumentError
from monthly_ledger.ledger.store import LedgerStore
from monthly_ledger.models.export import ExportDocument


def build_export(
    store: LedgerStore,
    current_month: Optional[str],
    now: Optional[datetime] = None,
) -> ExportDocument:
    """Snapshot of every materialized month."""
    return ExportDocument(
        exported_at=now or datetime.now(timezone.utc),
        current_month=current_month,
        data=store.snapshot(),
    )


def parse_import(raw: Union[str, bytes, dict[str, Any]]) -> ExportDocument:
    """
    Parse and validate an import document.

    Raises:
        ImportDocumentError: Invalid JSON, missing `data`, or invalid months
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise ImportDocumentError(f"File is not valid JSON: {e}")

    if not isinstance(raw, dict):
        raise ImportDocumentError("Import document must be a JSON object")
    if "data" not in raw:
        raise ImportDocumentError("Import document has no 'data' field")

    try:
        return ExportDocument.model_validate(raw)
    except SchemaValidationError as e:
        raise ImportDocumentError(f"Import document is invalid: {e.error_count()} problems found")


def apply_import(store: LedgerStore, document: ExportDocument) -> None:
    """Replace every month in `store` with the document's data."""
    store.replace_all({key: month.model_copy(deep=True) for key, month in document.data.items()})

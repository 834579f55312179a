"""
JSON File Storage

DESIGN DECISION: The default backend is a single JSON document on
disk, the local equivalent of browser storage:

    {"months": {"01": {...}, ...}, "closedMonths": ["01"]}

Writes go to a temporary file first and are then moved into place, so
a crash mid-write never leaves a truncated ledger behind.
"""

import json
import os
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import TypeAdapter, ValidationError

from monthly_ledger.models.ledger import LedgerMonth
from monthly_ledger.models.month_key import MonthKey
from monthly_ledger.services.storage.interface import LedgerStorageInterface, PersistenceError


MONTHS_ADAPTER = TypeAdapter(dict[MonthKey, LedgerMonth])
CLOSED_ADAPTER = TypeAdapter(list[MonthKey])


class JsonFileLedgerStorage(LedgerStorageInterface):
    """Whole-store persistence in one JSON file."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> Optional[dict]:
        if not self._path.exists():
            return None
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                document = json.load(fh)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to read {self._path}: {e}")
        if not isinstance(document, dict):
            raise PersistenceError(f"Unexpected content in {self._path}")
        return document

    def _write_document(self, document: dict) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(document, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self._path}: {e}")

    def load_all(self) -> Optional[dict[str, LedgerMonth]]:
        document = self._read_document()
        if document is None or "months" not in document:
            return None
        try:
            return MONTHS_ADAPTER.validate_python(document["months"])
        except ValidationError as e:
            raise PersistenceError(f"Stored months are invalid: {e}")

    def save_all(self, months: dict[str, LedgerMonth]) -> None:
        document = self._read_document() or {}
        document["months"] = MONTHS_ADAPTER.dump_python(months, mode="json")
        self._write_document(document)

    def load_closed_months(self) -> set[str]:
        document = self._read_document() or {}
        try:
            return set(CLOSED_ADAPTER.validate_python(document.get("closedMonths", [])))
        except ValidationError as e:
            raise PersistenceError(f"Stored closed months are invalid: {e}")

    def save_closed_months(self, month_keys: Iterable[str]) -> None:
        document = self._read_document() or {}
        document["closedMonths"] = sorted(month_keys)
        self._write_document(document)

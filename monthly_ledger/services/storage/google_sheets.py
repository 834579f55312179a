"""
Google Sheets Storage Implementation

DESIGN DECISION: A Google Sheet is offered as a shared backend because:
1. Users can look at their months directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

TRADEOFFS:
- One row per month with the month serialized as JSON; the sheet is a
  backup surface, not a place to edit entries by hand
- No transactions: a save overwrites the sheet from the top, then
  clears rows left over from a longer previous save. The old rows
  stay in place until the new ones are written
- Network calls are retried a few times, then reported as
  PersistenceError (the ledger keeps running from memory)
"""

import json
from datetime import datetime, timezone
from typing import Iterable, Optional

import gspread
from google.oauth2.service_account import Credentials
from pydantic import ValidationError
from tenacity import retry, stop_after_attempt, wait_exponential

from monthly_ledger.config import get_settings
from monthly_ledger.config.settings import GoogleSheetsSettings
from monthly_ledger.models.ledger import LedgerMonth
from monthly_ledger.models.month_key import is_month_key
from monthly_ledger.services.storage.interface import (
    ConnectionError,
    LedgerStorageInterface,
    PersistenceError,
)


# Column mappings for Months sheet
MONTH_COLUMNS = [
    "month_key",
    "updated_at",
    "payload_json",
]

# Column mappings for ClosedMonths sheet
CLOSED_COLUMNS = [
    "month_key",
]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def _get_or_create(self, title: str, columns: list[str], rows: int) -> gspread.Worksheet:
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=title,
                rows=rows,
                cols=len(columns),
            )
            sheet.append_row(columns)
        return sheet

    def get_months_sheet(self) -> gspread.Worksheet:
        """Get or create the Months worksheet."""
        return self._get_or_create(self._settings.months_sheet_name, MONTH_COLUMNS, rows=20)

    def get_closed_months_sheet(self) -> gspread.Worksheet:
        """Get or create the ClosedMonths worksheet."""
        return self._get_or_create(
            self._settings.closed_months_sheet_name, CLOSED_COLUMNS, rows=20
        )


class GoogleSheetsLedgerStorage(LedgerStorageInterface):
    """
    Google Sheets implementation of ledger storage.

    Months are stored as rows: key, last update, month JSON.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _month_to_row(self, key: str, month: LedgerMonth, updated_at: datetime) -> list:
        """Convert a month to a spreadsheet row."""
        return [key, updated_at.isoformat(), month.model_dump_json()]

    def _row_to_month(self, row: list) -> tuple[str, LedgerMonth]:
        """Convert a spreadsheet row to (key, month)."""
        key = row[0]
        if not is_month_key(key):
            raise PersistenceError(f"Invalid month key in sheet: {key!r}")
        payload = row[2] if len(row) > 2 and row[2] else "{}"
        try:
            return key, LedgerMonth.model_validate(json.loads(payload))
        except (ValueError, ValidationError) as e:
            raise PersistenceError(f"Invalid data stored for month {key}: {e}")

    @staticmethod
    def _rewrite(sheet, rows: list[list], last_column: str) -> None:
        """Overwrite `sheet` from A1 with `rows`, then clear anything below them."""
        if sheet.row_count < len(rows):
            sheet.add_rows(len(rows) - sheet.row_count)
        sheet.update(values=rows, range_name="A1", value_input_option="RAW")
        sheet.batch_clear([f"A{len(rows) + 1}:{last_column}"])

    def load_all(self) -> Optional[dict[str, LedgerMonth]]:
        """Read every month row."""
        try:
            sheet = self._client.get_months_sheet()
            all_rows = sheet.get_all_values()[1:]  # Skip header
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to load months: {e}")

        rows = [row for row in all_rows if row and row[0]]
        if not rows:
            return None
        return dict(self._row_to_month(row) for row in rows)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def save_all(self, months: dict[str, LedgerMonth]) -> None:
        """Rewrite the Months sheet."""
        now = datetime.now(timezone.utc)
        rows = [MONTH_COLUMNS] + [
            self._month_to_row(key, months[key], now) for key in sorted(months)
        ]
        try:
            sheet = self._client.get_months_sheet()
            self._rewrite(sheet, rows, last_column="C")
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to save months: {e}")

    def load_closed_months(self) -> set[str]:
        try:
            sheet = self._client.get_closed_months_sheet()
            all_rows = sheet.get_all_values()[1:]
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to load closed months: {e}")
        return {row[0] for row in all_rows if row and is_month_key(row[0])}

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def save_closed_months(self, month_keys: Iterable[str]) -> None:
        rows = [CLOSED_COLUMNS] + [[key] for key in sorted(month_keys)]
        try:
            sheet = self._client.get_closed_months_sheet()
            self._rewrite(sheet, rows, last_column="A")
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to save closed months: {e}")

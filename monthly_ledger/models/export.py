"""
Export Document

Shape of a backup file:
    {"exportedAt": ..., "currentMonth": "03", "data": {"01": {...}, ...}}

`data` is required; the other two fields are optional on import.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from monthly_ledger.models.ledger import LedgerMonth
from monthly_ledger.models.month_key import MonthKey


class ExportDocument(BaseModel):
    """Full snapshot of the store plus the selected month."""
    model_config = ConfigDict(populate_by_name=True)

    exported_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="exportedAt",
    )
    current_month: Optional[MonthKey] = Field(
        default=None,
        alias="currentMonth",
    )
    data: dict[MonthKey, LedgerMonth] = Field(
        ...,
        description="Every materialized month"
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)

"""Import/export package."""

from monthly_ledger.transfer.exchange import apply_import, build_export, parse_import

__all__ = ["apply_import", "build_export", "parse_import"]

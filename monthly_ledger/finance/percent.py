"""
Percentage Text Parsing

Forms collect rates as comma-decimal percentages ("1,85" for 1.85%).
The core works with fractions (0.0185). This module is the only place
that converts between the two.

IMPORTANT: Malformed input is rejected, never defaulted to zero.
"""

import re
from decimal import Decimal

from monthly_ledger.errors import ValidationError


PERCENT_PATTERN = re.compile(r"^\d+(,\d{1,3})?$")


def parse_percent(text: object, field: str = "percentage") -> float:
    """
    Parse "1,85" (or "1.85") into the fraction 0.0185.

    Accepts digits with an optional fractional part of 1-3 digits.

    Raises:
        ValidationError: If the text does not match that shape
    """
    cleaned = str(text if text is not None else "").strip().replace(".", ",", 1)
    if not PERCENT_PATTERN.match(cleaned):
        raise ValidationError(
            f"{field}: '{text}' is not a valid percentage (use a comma, e.g. 1,85)"
        )
    percent = Decimal(cleaned.replace(",", "."))
    return float(percent / 100)


def format_percent(fraction: float, decimals: int = 2) -> str:
    """Render 0.0185 as "1,85"."""
    return f"{(fraction or 0.0) * 100:.{decimals}f}".replace(".", ",")

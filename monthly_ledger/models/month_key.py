"""
Month Keys

A month is identified by a two-digit string "01".."12" with no year.
Ordering is the natural one for display, but stepping is circular:
December is followed by January again.
"""

from datetime import date
from typing import Annotated, Optional

from pydantic import StringConstraints


MonthKey = Annotated[str, StringConstraints(pattern=r"^(0[1-9]|1[0-2])$")]

MONTH_KEYS = tuple(f"{number:02d}" for number in range(1, 13))

MONTH_NAMES = {
    "01": "January",
    "02": "February",
    "03": "March",
    "04": "April",
    "05": "May",
    "06": "June",
    "07": "July",
    "08": "August",
    "09": "September",
    "10": "October",
    "11": "November",
    "12": "December",
}


def successor(key: str) -> str:
    """Next month key, wrapping "12" to "01"."""
    if key == "12":
        return "01"
    return f"{int(key) + 1:02d}"


def predecessor(key: str) -> str:
    """Previous month key, wrapping "01" to "12"."""
    if key == "01":
        return "12"
    return f"{int(key) - 1:02d}"


def is_month_key(value: object) -> bool:
    return isinstance(value, str) and value in MONTH_KEYS


def month_name(key: str) -> str:
    return MONTH_NAMES[key]


def current_month_key(today: Optional[date] = None) -> str:
    """Key for the month of `today` (defaults to the system date)."""
    today = today or date.today()
    return f"{today.month:02d}"

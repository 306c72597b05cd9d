"""ABHA date helpers (DD-MM-YYYY)."""

from datetime import date
from typing import Optional

from ..constants.validation import ValidationPatterns


def parse_abha_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse ABHA date format (DD-MM-YYYY).

    Only the exact shape is accepted. Impossible calendar dates such as
    31-02-2020 or 13-13-2020 are rejected rather than normalized.

    Returns:
        The date, or None if the string is malformed or not a real date
    """
    if not isinstance(date_str, str) or not date_str:
        return None
    match = ValidationPatterns.DATE.fullmatch(date_str)
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def to_abha_date(value: date) -> str:
    """Format a date as DD-MM-YYYY (year zero-padded to four digits)."""
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def calculate_age(dob_str: str, today: Optional[date] = None) -> Optional[int]:
    """
    Calculate age in whole years from an ABHA date string.

    Args:
        dob_str: Date of birth as DD-MM-YYYY
        today: Reference date (defaults to the current local date)

    Returns:
        Age in years, or None if the date does not parse
    """
    dob = parse_abha_date(dob_str)
    if dob is None:
        return None
    today = today or date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age

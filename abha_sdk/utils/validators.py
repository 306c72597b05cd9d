"""Input validation utilities for ABHA identifiers.

Every validator is total: ``None``, non-string, empty and malformed input
return ``False`` instead of raising. Surrounding whitespace is ignored.
"""

import re
from typing import Optional

from ..constants.validation import ValidationPatterns

_NON_DIGITS = re.compile(r"[^0-9]")


def digits_only(value: str) -> str:
    """Strip every non-digit character."""
    return _NON_DIGITS.sub("", value)


def is_valid_abha_number(value: Optional[str]) -> bool:
    """
    Validate ABHA number in display form.

    Format: XX-XXXX-XXXX-XXXX (14 digits with hyphens in 2-4-4-4 pattern)

    Examples:
        >>> is_valid_abha_number("12-3456-7890-1234")
        True
        >>> is_valid_abha_number("12345678901234")
        False
    """
    if not isinstance(value, str) or not value:
        return False
    return bool(ValidationPatterns.ABHA_NUMBER.fullmatch(value.strip()))


def is_valid_abha_number_raw(value: Optional[str]) -> bool:
    """Validate raw ABHA number (14 digits without hyphens)."""
    if not isinstance(value, str) or not value:
        return False
    return bool(ValidationPatterns.ABHA_NUMBER_RAW.fullmatch(value.strip()))


def is_valid_abha_address(value: Optional[str]) -> bool:
    """
    Validate ABHA address format.

    Username is 3-32 characters of letters, digits, dots, underscores or
    hyphens; the domain is ``abdm`` (production) or ``sbx`` (sandbox).

    Examples:
        >>> is_valid_abha_address("john.doe@abdm")
        True
        >>> is_valid_abha_address("john@gmail.com")
        False
    """
    if not isinstance(value, str) or not value:
        return False
    return bool(ValidationPatterns.ABHA_ADDRESS.fullmatch(value.strip()))


def is_valid_mobile(value: Optional[str]) -> bool:
    """Validate Indian mobile number (10 digits starting with 6-9)."""
    if not isinstance(value, str) or not value:
        return False
    return bool(ValidationPatterns.MOBILE.fullmatch(digits_only(value)))


def is_valid_aadhaar(value: Optional[str]) -> bool:
    """Validate 12-digit Aadhaar number; spaces and hyphens are ignored."""
    if not isinstance(value, str) or not value:
        return False
    return bool(ValidationPatterns.AADHAAR.fullmatch(digits_only(value)))


def is_valid_pin_code(value: Optional[str]) -> bool:
    """Validate 6-digit PIN code."""
    if not isinstance(value, str) or not value:
        return False
    return bool(ValidationPatterns.PIN_CODE.fullmatch(value.strip()))


def is_valid_otp(value: Optional[str]) -> bool:
    """Validate 6-digit OTP."""
    if not isinstance(value, str) or not value:
        return False
    return bool(ValidationPatterns.OTP.fullmatch(value.strip()))


def is_valid_email(value: Optional[str]) -> bool:
    """
    Validate email format.

    Args:
        value: Email address to validate

    Returns:
        True if email format is valid, False otherwise
    """
    if not isinstance(value, str) or not value:
        return False
    return bool(ValidationPatterns.EMAIL.fullmatch(value.strip()))

"""Formatting and parsing of ABHA identifiers, gender codes and names."""

from typing import Optional, Tuple, Union

from ..constants.errors import ErrorCodes
from ..core.enums import FormatErrorReason, Gender, Sex
from ..core.environment import Environment
from ..core.exceptions import FormatError
from .validators import digits_only, is_valid_abha_address

_SEX_TO_GENDER = {
    Sex.MALE: Gender.MALE,
    Sex.FEMALE: Gender.FEMALE,
    Sex.OTHER: Gender.OTHER,
}
_GENDER_TO_SEX = {gender: sex for sex, gender in _SEX_TO_GENDER.items()}
_GENDER_DISPLAY = {
    Gender.MALE: "Male",
    Gender.FEMALE: "Female",
    Gender.OTHER: "Other",
}


# ABHA number


def format_abha_number(digits: str) -> str:
    """
    Format 14 raw digits into ABHA number display form.

    Any non-digit characters are stripped first.

    Examples:
        >>> format_abha_number("12345678901234")
        '12-3456-7890-1234'

    Raises:
        FormatError: If the input does not contain exactly 14 digits
    """
    cleaned = digits_only(digits)
    if len(cleaned) != 14:
        raise FormatError(
            f"ABHA number must be exactly 14 digits, got {len(cleaned)}",
            reason=FormatErrorReason.WRONG_LENGTH,
            code=ErrorCodes.INVALID_ABHA_NUMBER,
            field="abha_number",
        )
    return f"{cleaned[0:2]}-{cleaned[2:6]}-{cleaned[6:10]}-{cleaned[10:14]}"


def parse_abha_number(formatted: str) -> str:
    """
    Parse formatted ABHA number back to raw digits.

    Examples:
        >>> parse_abha_number("12-3456-7890-1234")
        '12345678901234'
    """
    return formatted.strip().replace("-", "")


# ABHA address


def format_abha_address(
    username: str, environment: Optional[Union[Environment, str]] = None
) -> str:
    """
    Build an ABHA address with the domain of ``environment``.

    Examples:
        >>> format_abha_address("JohnDoe")
        'johndoe@abdm'
        >>> format_abha_address("testUser", Environment.SANDBOX)
        'testuser@sbx'
    """
    env = Environment.coerce(environment)
    return f"{username.strip().lower()}@{env.address_domain}"


def parse_abha_address(address: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Split an ABHA address into ``(username, domain)``, lower-cased.

    Returns None if the address is not valid.
    """
    if not is_valid_abha_address(address):
        return None
    username, domain = address.strip().lower().split("@")
    return username, domain


def environment_from_address(address: Optional[str]) -> Optional[Environment]:
    """Get the environment an ABHA address belongs to, or None if invalid."""
    parsed = parse_abha_address(address)
    if parsed is None:
        return None
    return Environment.from_domain(parsed[1])


# Mobile


def format_mobile(mobile: str) -> str:
    """
    Format mobile number for display; input without 10 digits is returned as-is.

    Examples:
        >>> format_mobile("9876543210")
        '98765 43210'
    """
    cleaned = digits_only(mobile)
    if len(cleaned) != 10:
        return mobile
    return f"{cleaned[:5]} {cleaned[5:]}"


def clean_mobile(mobile: str) -> str:
    """Remove non-digits and a leading 91 country code."""
    cleaned = digits_only(mobile)
    if len(cleaned) == 12 and cleaned.startswith("91"):
        return cleaned[2:]
    return cleaned


# Aadhaar


def format_aadhaar(aadhaar: str) -> str:
    """
    Format Aadhaar number with spaces; input without 12 digits is returned as-is.

    Examples:
        >>> format_aadhaar("123456789012")
        '1234 5678 9012'
    """
    cleaned = digits_only(aadhaar)
    if len(cleaned) != 12:
        return aadhaar
    return f"{cleaned[0:4]} {cleaned[4:8]} {cleaned[8:12]}"


# Gender


def to_abha_gender(sex: Sex) -> Gender:
    """Convert internal sex enum to the ABHA gender code."""
    return _SEX_TO_GENDER[Sex(sex)]


def from_abha_gender(gender: Gender) -> Sex:
    """Convert ABHA gender code to the internal sex enum."""
    return _GENDER_TO_SEX[Gender(gender)]


def gender_display(gender: Gender) -> str:
    """Human readable label for an ABHA gender code."""
    return _GENDER_DISPLAY[Gender(gender)]


# Names


def format_abha_name(
    first_name: Optional[str], middle_name: Optional[str] = None, last_name: Optional[str] = None
) -> str:
    """Join name parts with single spaces, skipping empty or missing parts."""
    parts = (part.strip() for part in (first_name, middle_name, last_name) if part)
    return " ".join(part for part in parts if part)

"""Identifier validation, formatting, masking and date helpers."""

from .dates import calculate_age, parse_abha_date, to_abha_date
from .formatting import (
    clean_mobile,
    environment_from_address,
    format_aadhaar,
    format_abha_address,
    format_abha_name,
    format_abha_number,
    format_mobile,
    from_abha_gender,
    gender_display,
    parse_abha_address,
    parse_abha_number,
    to_abha_gender,
)
from .masking import mask_aadhaar, mask_abha_number, mask_mobile, mask_sensitive_dict
from .validators import (
    is_valid_aadhaar,
    is_valid_abha_address,
    is_valid_abha_number,
    is_valid_abha_number_raw,
    is_valid_email,
    is_valid_mobile,
    is_valid_otp,
    is_valid_pin_code,
)

__all__ = [
    # Validation
    "is_valid_abha_number",
    "is_valid_abha_number_raw",
    "is_valid_abha_address",
    "is_valid_mobile",
    "is_valid_aadhaar",
    "is_valid_pin_code",
    "is_valid_otp",
    "is_valid_email",
    # Formatting
    "format_abha_number",
    "parse_abha_number",
    "format_abha_address",
    "parse_abha_address",
    "environment_from_address",
    "format_mobile",
    "clean_mobile",
    "format_aadhaar",
    "format_abha_name",
    "to_abha_gender",
    "from_abha_gender",
    "gender_display",
    # Masking
    "mask_abha_number",
    "mask_mobile",
    "mask_aadhaar",
    "mask_sensitive_dict",
    # Dates
    "parse_abha_date",
    "to_abha_date",
    "calculate_age",
]

"""Masking of identifiers for display and of sensitive data in logs."""

from typing import Any, Dict, Optional, Set

from .validators import digits_only, is_valid_aadhaar, is_valid_abha_number, is_valid_mobile

# Keys whose values never appear in logs
SENSITIVE_KEYS: Set[str] = {
    "clientsecret",
    "client_secret",
    "accesstoken",
    "access_token",
    "refreshtoken",
    "refresh_token",
    "token",
    "x-token",
    "authorization",
    "otp",
    "otpvalue",
    "loginid",
    "password",
    "publickey",
}


def mask_abha_number(abha_number: str) -> str:
    """
    Mask ABHA number for display, showing only the last 4 digits.

    Input that is not a valid display-form ABHA number is returned unchanged.

    Examples:
        >>> mask_abha_number("12-3456-7890-1234")
        'XX-XXXX-XXXX-1234'
    """
    if not is_valid_abha_number(abha_number):
        return abha_number
    return f"XX-XXXX-XXXX-{abha_number.strip()[-4:]}"


def mask_mobile(mobile: str) -> str:
    """
    Mask mobile number for display.

    Examples:
        >>> mask_mobile("98765 43210")
        'XXXXXX3210'
    """
    if not is_valid_mobile(mobile):
        return mobile
    return f"XXXXXX{digits_only(mobile)[-4:]}"


def mask_aadhaar(aadhaar: str) -> str:
    """
    Mask Aadhaar number for display.

    Examples:
        >>> mask_aadhaar("1234 5678 9012")
        'XXXXXXXX9012'
    """
    if not is_valid_aadhaar(aadhaar):
        return aadhaar
    return f"XXXXXXXX{digits_only(aadhaar)[-4:]}"


def mask_email(email: str) -> str:
    """
    Mask email address for logging purposes.

    Example: user@example.com -> u***@e***.com
    """
    if not email or email.count("@") != 1:
        return "***"

    local, domain = email.split("@")
    masked_local = local[0] + "***" if local else "***"

    domain_parts = domain.split(".")
    if len(domain_parts) >= 2 and domain_parts[0]:
        masked_domain = domain_parts[0][0] + "***." + ".".join(domain_parts[1:])
    else:
        masked_domain = "***"

    return f"{masked_local}@{masked_domain}"


def mask_sensitive_dict(
    data: Dict[str, Any], sensitive_keys: Optional[Set[str]] = None
) -> Dict[str, Any]:
    """
    Mask sensitive values in a request/response body for logging.

    Args:
        data: Dictionary with potentially sensitive data
        sensitive_keys: Lower-case keys to mask (uses SENSITIVE_KEYS if None)

    Returns:
        New dictionary with masked sensitive values
    """
    if sensitive_keys is None:
        sensitive_keys = SENSITIVE_KEYS

    masked_data: Dict[str, Any] = {}

    for key, value in data.items():
        key_lower = key.lower()
        if key_lower in sensitive_keys:
            masked_data[key] = "********"
        elif key_lower == "email" and isinstance(value, str):
            masked_data[key] = mask_email(value)
        elif key_lower in {"mobile", "phone"} and isinstance(value, str):
            masked_data[key] = mask_mobile(value)
        elif key_lower == "abhanumber" and isinstance(value, str):
            masked_data[key] = mask_abha_number(value)
        elif isinstance(value, dict):
            masked_data[key] = mask_sensitive_dict(value, sensitive_keys)
        elif isinstance(value, list):
            masked_data[key] = [
                mask_sensitive_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            masked_data[key] = value

    return masked_data

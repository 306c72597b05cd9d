"""Identifier value objects."""

from .identifiers import (
    AadhaarNumber,
    EmailAddress,
    HealthAddress,
    HealthID,
    Identifier,
    MobileNumber,
    OTPCode,
    PinCode,
    identifier_for_login_hint,
)

# National ID number alias used in the public API
NationalIDNumber = AadhaarNumber

__all__ = [
    "Identifier",
    "HealthID",
    "HealthAddress",
    "MobileNumber",
    "AadhaarNumber",
    "NationalIDNumber",
    "EmailAddress",
    "PinCode",
    "OTPCode",
    "identifier_for_login_hint",
]

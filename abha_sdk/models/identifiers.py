"""Identifier value objects.

Each identifier wraps its canonical raw string and can only be constructed
from valid input, so a value in hand is always well-formed.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from ..constants.errors import ErrorCodes, ValidationMessages
from ..core.enums import LoginHint
from ..core.environment import Environment
from ..core.exceptions import ValidationError
from ..utils.formatting import (
    clean_mobile,
    format_aadhaar,
    format_abha_address,
    format_abha_number,
    format_mobile,
    parse_abha_address,
)
from ..utils.masking import mask_aadhaar, mask_abha_number, mask_email, mask_mobile
from ..utils.validators import (
    digits_only,
    is_valid_aadhaar,
    is_valid_abha_number,
    is_valid_abha_number_raw,
    is_valid_email,
    is_valid_mobile,
    is_valid_otp,
    is_valid_pin_code,
)


@dataclass(frozen=True, repr=False)
class Identifier:
    """Base class for identifier value objects."""

    raw: str

    field_name: ClassVar[str] = "identifier"
    error_code: ClassVar[str] = ErrorCodes.UNKNOWN_ERROR
    error_message: ClassVar[str] = "Invalid identifier"

    @classmethod
    def _reject(cls, value: object) -> ValidationError:
        return ValidationError(cls.error_message, code=cls.error_code, field=cls.field_name)

    @property
    def display(self) -> str:
        """Human readable form."""
        return self.raw

    @property
    def masked(self) -> str:
        """Form that is safe to show or log."""
        return "*" * len(self.raw)

    def __str__(self) -> str:
        return self.masked

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.masked!r})"


@dataclass(frozen=True, repr=False)
class HealthID(Identifier):
    """14-digit ABHA number; ``raw`` holds the digits only."""

    field_name: ClassVar[str] = "abha_number"
    error_code: ClassVar[str] = ErrorCodes.INVALID_ABHA_NUMBER
    error_message: ClassVar[str] = ValidationMessages.ABHA_NUMBER

    @classmethod
    def parse(cls, value: str) -> "HealthID":
        """
        Accept the hyphenated display form or the 14 raw digits.

        Raises:
            ValidationError: If the value is neither
        """
        if is_valid_abha_number(value) or is_valid_abha_number_raw(value):
            return cls(digits_only(value))
        raise cls._reject(value)

    @property
    def display(self) -> str:
        return format_abha_number(self.raw)

    @property
    def masked(self) -> str:
        return mask_abha_number(self.display)


@dataclass(frozen=True, repr=False)
class HealthAddress(Identifier):
    """ABHA address ``username@domain``; ``raw`` is lower-cased."""

    field_name: ClassVar[str] = "abha_address"
    error_code: ClassVar[str] = ErrorCodes.INVALID_ABHA_ADDRESS
    error_message: ClassVar[str] = ValidationMessages.ABHA_ADDRESS

    @classmethod
    def parse(cls, value: str) -> "HealthAddress":
        parsed = parse_abha_address(value)
        if parsed is None:
            raise cls._reject(value)
        return cls(f"{parsed[0]}@{parsed[1]}")

    @classmethod
    def build(cls, username: str, environment: Union[Environment, str, None] = None) -> "HealthAddress":
        """Build an address for ``username`` in ``environment`` (default production)."""
        return cls.parse(format_abha_address(username, environment))

    @property
    def username(self) -> str:
        return self.raw.split("@")[0]

    @property
    def domain(self) -> str:
        return self.raw.split("@")[1]

    @property
    def environment(self) -> Environment:
        return Environment.from_domain(self.domain)

    @property
    def masked(self) -> str:
        return f"{self.username[0]}***@{self.domain}"


@dataclass(frozen=True, repr=False)
class MobileNumber(Identifier):
    """Indian mobile number; ``raw`` holds the 10 digits."""

    field_name: ClassVar[str] = "mobile"
    error_code: ClassVar[str] = ErrorCodes.INVALID_MOBILE
    error_message: ClassVar[str] = ValidationMessages.MOBILE

    @classmethod
    def parse(cls, value: str) -> "MobileNumber":
        """Accept the number with or without a +91/91 prefix and separators."""
        if not isinstance(value, str) or not value:
            raise cls._reject(value)
        cleaned = clean_mobile(value)
        if not is_valid_mobile(cleaned):
            raise cls._reject(value)
        return cls(cleaned)

    @property
    def display(self) -> str:
        return format_mobile(self.raw)

    @property
    def masked(self) -> str:
        return mask_mobile(self.raw)


@dataclass(frozen=True, repr=False)
class AadhaarNumber(Identifier):
    """12-digit national ID (Aadhaar) number; ``raw`` holds the digits."""

    field_name: ClassVar[str] = "aadhaar"
    error_code: ClassVar[str] = ErrorCodes.INVALID_AADHAAR
    error_message: ClassVar[str] = ValidationMessages.AADHAAR

    @classmethod
    def parse(cls, value: str) -> "AadhaarNumber":
        if not is_valid_aadhaar(value):
            raise cls._reject(value)
        return cls(digits_only(value))

    @property
    def display(self) -> str:
        return format_aadhaar(self.raw)

    @property
    def masked(self) -> str:
        return mask_aadhaar(self.raw)


@dataclass(frozen=True, repr=False)
class EmailAddress(Identifier):
    """Email address used with the email login hint."""

    field_name: ClassVar[str] = "email"
    error_code: ClassVar[str] = ErrorCodes.INVALID_EMAIL
    error_message: ClassVar[str] = ValidationMessages.EMAIL

    @classmethod
    def parse(cls, value: str) -> "EmailAddress":
        if not is_valid_email(value):
            raise cls._reject(value)
        return cls(value.strip().lower())

    @property
    def masked(self) -> str:
        return mask_email(self.raw)


@dataclass(frozen=True, repr=False)
class PinCode(Identifier):
    """6-digit postal PIN code."""

    field_name: ClassVar[str] = "pin_code"
    error_code: ClassVar[str] = ErrorCodes.INVALID_PIN_CODE
    error_message: ClassVar[str] = ValidationMessages.PIN_CODE

    @classmethod
    def parse(cls, value: str) -> "PinCode":
        if not is_valid_pin_code(value):
            raise cls._reject(value)
        return cls(value.strip())

    @property
    def masked(self) -> str:
        return self.raw


@dataclass(frozen=True, repr=False)
class OTPCode(Identifier):
    """6-digit one-time password."""

    field_name: ClassVar[str] = "otp"
    error_code: ClassVar[str] = ErrorCodes.INVALID_OTP
    error_message: ClassVar[str] = ValidationMessages.OTP

    @classmethod
    def parse(cls, value: str) -> "OTPCode":
        if not is_valid_otp(value):
            raise cls._reject(value)
        return cls(value.strip())


_LOGIN_HINT_IDENTIFIERS = {
    LoginHint.ABHA_NUMBER: HealthID,
    LoginHint.MOBILE: MobileNumber,
    LoginHint.AADHAAR: AadhaarNumber,
    LoginHint.EMAIL: EmailAddress,
}


def identifier_for_login_hint(login_hint: Union[LoginHint, str], value: str) -> Identifier:
    """
    Parse ``value`` as the identifier family that ``login_hint`` refers to.

    Raises:
        ValidationError: If the hint does not take an OTP identifier or the value is invalid
    """
    try:
        hint = LoginHint(login_hint)
    except ValueError:
        hint = None
    identifier_cls = _LOGIN_HINT_IDENTIFIERS.get(hint) if hint else None
    if identifier_cls is None:
        raise ValidationError(
            f"Login hint '{login_hint}' cannot be used for OTP login",
            code=ErrorCodes.INVALID_LOGIN_HINT,
            field="login_hint",
        )
    return identifier_cls.parse(value)

"""Centralized enum definitions for the ABHA APIs."""

from enum import Enum


class Gender(str, Enum):
    """Gender codes as exchanged with ABDM."""
    MALE = "M"
    FEMALE = "F"
    OTHER = "O"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class Sex(str, Enum):
    """Internal sex enumeration used by calling applications."""
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class Scope(str, Enum):
    """V3 API scopes."""
    ABHA_ENROL = "abha-enrol"
    DL_FLOW = "dl-flow"
    ABHA_LOGIN = "abha-login"
    ABHA_PROFILE = "abha-profile"
    AADHAAR_VERIFY = "aadhaar-verify"
    MOBILE_VERIFY = "mobile-verify"
    EMAIL_VERIFY = "email-verify"
    EMAIL_LINK_VERIFY = "email-link-verify"
    PASSWORD_VERIFY = "password-verify"
    CHANGE_PASSWORD = "change-password"
    RE_KYC = "re-kyc"
    SEARCH_ABHA = "search-abha"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class LoginHint(str, Enum):
    """Identifier type sent as ``loginHint``."""
    ABHA_NUMBER = "abha-number"
    MOBILE = "mobile"
    EMAIL = "email"
    AADHAAR = "aadhaar"
    PASSWORD = "password"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class OTPSystem(str, Enum):
    """Which system delivers the OTP."""
    AADHAAR = "aadhaar"  # Aadhaar-linked mobile
    ABDM = "abdm"  # ABHA-linked mobile

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class AuthMethod(str, Enum):
    """Verification methods accepted in ``authData.authMethods``."""
    OTP = "otp"
    PI = "pi"
    PASSWORD = "password"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class ABHAStatus(str, Enum):
    """ABHA account status."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"
    DEACTIVATED = "DEACTIVATED"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class ABHAType(str, Enum):
    """ABHA account type."""
    STANDARD = "STANDARD"
    CHILD = "CHILD"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class KYCDocumentType(str, Enum):
    """Documents accepted for KYC."""
    AADHAAR = "AADHAAR"
    DRIVING_LICENSE = "DRIVING_LICENSE"
    PAN = "PAN"
    PASSPORT = "PASSPORT"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class SessionState(str, Enum):
    """Lifecycle of the gateway session token."""
    EMPTY = "empty"
    VALID = "valid"
    EXPIRED = "expired"


class TransactionState(str, Enum):
    """Lifecycle of one OTP transaction."""
    INIT = "init"
    REQUESTED = "requested"
    VERIFIED = "verified"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Verified and failed transactions accept no further calls."""
        return self in (TransactionState.VERIFIED, TransactionState.FAILED)


class FormatErrorReason(str, Enum):
    """Why an identifier could not be formatted."""
    WRONG_LENGTH = "wrong_length"

"""Error codes and user-facing validation messages."""

from typing import Final


class ErrorCodes:
    """Machine-readable error codes attached to every :class:`ABHAError`."""

    # Authentication
    AUTH_FAILED: Final[str] = "ABHA_AUTH_FAILED"

    # Validation
    INVALID_ABHA_NUMBER: Final[str] = "ABHA_INVALID_NUMBER"
    INVALID_ABHA_ADDRESS: Final[str] = "ABHA_INVALID_ADDRESS"
    INVALID_MOBILE: Final[str] = "ABHA_INVALID_MOBILE"
    INVALID_AADHAAR: Final[str] = "ABHA_INVALID_AADHAAR"
    INVALID_PIN_CODE: Final[str] = "ABHA_INVALID_PIN_CODE"
    INVALID_EMAIL: Final[str] = "ABHA_INVALID_EMAIL"
    INVALID_OTP: Final[str] = "ABHA_INVALID_OTP"
    INVALID_LOGIN_HINT: Final[str] = "ABHA_INVALID_LOGIN_HINT"
    INVALID_SCOPE: Final[str] = "ABHA_INVALID_SCOPE"
    INVALID_OTP_SYSTEM: Final[str] = "ABHA_INVALID_OTP_SYSTEM"

    # OTP
    INVALID_TRANSACTION_STATE: Final[str] = "ABHA_INVALID_TRANSACTION_STATE"

    # Network
    NETWORK_ERROR: Final[str] = "ABHA_NETWORK_ERROR"
    TIMEOUT: Final[str] = "ABHA_TIMEOUT"
    RATE_LIMITED: Final[str] = "ABHA_RATE_LIMITED"
    SERVICE_UNAVAILABLE: Final[str] = "ABHA_SERVICE_UNAVAILABLE"
    PROTOCOL_VIOLATION: Final[str] = "ABHA_PROTOCOL_VIOLATION"

    # Encryption
    ENCRYPTION_FAILED: Final[str] = "ABHA_ENCRYPTION_FAILED"

    # Configuration
    CONFIGURATION_ERROR: Final[str] = "ABHA_CONFIGURATION_ERROR"

    UNKNOWN_ERROR: Final[str] = "ABHA_UNKNOWN_ERROR"


class ValidationMessages:
    """Messages suitable for showing to the person entering the value."""

    ABHA_NUMBER: Final[str] = "Please enter a valid ABHA number (XX-XXXX-XXXX-XXXX format)"
    ABHA_ADDRESS: Final[str] = "Please enter a valid ABHA address (username@abdm format)"
    MOBILE: Final[str] = "Please enter a valid 10-digit mobile number"
    AADHAAR: Final[str] = "Please enter a valid 12-digit Aadhaar number"
    PIN_CODE: Final[str] = "Please enter a valid 6-digit PIN code"
    OTP: Final[str] = "Please enter a valid 6-digit OTP"
    EMAIL: Final[str] = "Please enter a valid email address"


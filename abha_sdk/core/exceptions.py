"""Custom exception classes for the ABHA SDK."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..constants.errors import ErrorCodes
from .enums import FormatErrorReason, TransactionState


class ABHAError(Exception):
    """Base exception for the ABHA SDK."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.UNKNOWN_ERROR,
        recoverable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize ABHA error.

        Args:
            message: Error message
            code: Machine-readable error code (see ErrorCodes)
            recoverable: Whether the operation may succeed if retried
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details,
            "timestamp": self.timestamp,
        }


class ConfigurationError(ABHAError):
    """Client configuration is missing or invalid."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, ErrorCodes.CONFIGURATION_ERROR, False, details)


# Local validation errors - never reach the network
class ValidationError(ABHAError):
    """Malformed identifier, OTP or PIN detected locally."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.UNKNOWN_ERROR,
        field: Optional[str] = None,
    ):
        """
        Initialize validation error.

        Args:
            message: Message suitable for the person correcting the input
            code: Error code of the identifier family
            field: Name of the offending field
        """
        self.field = field
        details = {"field": field} if field else {}
        super().__init__(message, code, recoverable=False, details=details)


class FormatError(ValidationError):
    """Identifier could not be formatted into its display form."""

    def __init__(
        self,
        message: str,
        reason: FormatErrorReason = FormatErrorReason.WRONG_LENGTH,
        code: str = ErrorCodes.INVALID_ABHA_NUMBER,
        field: Optional[str] = None,
    ):
        self.reason = reason
        super().__init__(message, code, field)
        self.details["reason"] = reason.value


class EncryptionError(ABHAError):
    """Public key is malformed or the payload is too large for the key."""

    def __init__(self, message: str = "Encryption failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.ENCRYPTION_FAILED, False, details)


# Transport errors
class TransportError(ABHAError):
    """Network failure, timeout or non-2xx response from the ABHA APIs."""

    def __init__(
        self,
        message: str = "ABHA API request failed",
        code: str = ErrorCodes.NETWORK_ERROR,
        status: Optional[int] = None,
        remote_code: Optional[str] = None,
        remote_message: Optional[str] = None,
        recoverable: Optional[bool] = None,
    ):
        """
        Initialize transport error.

        Args:
            message: Error message
            code: SDK error code
            status: HTTP status, if a response was received
            remote_code: Error code from the remote error body
            remote_message: Error message from the remote error body
            recoverable: Override; defaults to True unless the server rejected the request (4xx)
        """
        self.status = status
        self.remote_code = remote_code
        self.remote_message = remote_message
        if recoverable is None:
            recoverable = status is None or status >= 500
        details: Dict[str, Any] = {}
        if status is not None:
            details["status"] = status
        if remote_code:
            details["remote_code"] = remote_code
        if remote_message:
            details["remote_message"] = remote_message
        super().__init__(message, code, recoverable, details)


class TransportTimeoutError(TransportError):
    """Network call did not complete within the allotted time."""

    def __init__(self, message: str = "ABHA API request timed out", timeout: Optional[float] = None):
        super().__init__(message, ErrorCodes.TIMEOUT, recoverable=True)
        if timeout is not None:
            self.details["timeout"] = timeout


class RateLimitError(TransportError):
    """Rate limit exceeded (HTTP 429)."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: Optional[int] = None):
        self.retry_after = retry_after
        if retry_after:
            message += f". Please wait {retry_after} seconds."
        super().__init__(message, ErrorCodes.RATE_LIMITED, status=429, recoverable=True)
        self.details["retry_after"] = retry_after


class ProtocolViolation(ABHAError):
    """Remote response shape breaks the documented contract."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.PROTOCOL_VIOLATION, False, details)


class InvalidTransactionState(ABHAError):
    """OTP verification attempted on a transaction that is not awaiting an OTP."""

    def __init__(self, txn_id: str, state: Optional[TransactionState] = None, message: str = ""):
        self.txn_id = txn_id
        self.state = state
        if not message:
            current = state.value if state else "unknown"
            message = f"Transaction {txn_id} cannot be verified in state '{current}'"
        super().__init__(
            message,
            ErrorCodes.INVALID_TRANSACTION_STATE,
            recoverable=False,
            details={"txn_id": txn_id, "state": state.value if state else None},
        )

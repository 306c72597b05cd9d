"""Timeouts, token lifetimes and encryption parameters."""

from typing import Final


class Defaults:
    """Default client configuration values."""

    TIMEOUT_SECONDS: Final[float] = 30.0
    # Session token validity as documented by ABDM (20 minutes)
    TOKEN_EXPIRY_SECONDS: Final[int] = 1200
    REFRESH_TOKEN_EXPIRY_SECONDS: Final[int] = 1800
    TOKEN_REFRESH_BUFFER_SECONDS: Final[int] = 60
    MAX_RETRIES: Final[int] = 3
    RETRY_DELAY_SECONDS: Final[float] = 1.0
    # OTP transactions kept in memory per flow
    FINISHED_TRANSACTIONS_KEPT: Final[int] = 100
    OTP_TRANSACTION_TTL_SECONDS: Final[int] = 1800


class Encryption:
    """Encryption scheme mandated by the ABHA APIs."""

    ALGORITHM: Final[str] = "RSA/ECB/OAEPWithSHA-1AndMGF1Padding"
    # SHA-1 digest size, used for the OAEP payload bound k - 2*hLen - 2
    HASH_LENGTH: Final[int] = 20

"""Constants and fixed API configuration for the ABHA SDK.

All tables are immutable and keyed by :class:`~abha_sdk.core.environment.Environment`
where they differ between sandbox and production:
    from abha_sdk.constants import ApiEndpoints, Defaults, ErrorCodes
"""

# API URLs, endpoints and headers
from .api import (
    ABDM_BASE_URLS,
    ABDM_SESSION_URLS,
    CM_IDS,
    ApiEndpoints,
    Headers,
)

# Defaults and encryption
from .defaults import Defaults, Encryption

# Error codes and validation messages
from .errors import ErrorCodes, ValidationMessages

# Regular expressions
from .validation import ValidationPatterns

__all__ = [
    # API
    "ABDM_BASE_URLS",
    "ABDM_SESSION_URLS",
    "CM_IDS",
    "ApiEndpoints",
    "Headers",
    # Defaults
    "Defaults",
    "Encryption",
    # Errors
    "ErrorCodes",
    "ValidationMessages",
    # Validation
    "ValidationPatterns",
]

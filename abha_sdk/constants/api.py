"""ABDM V3 API URLs, endpoint paths and header names."""

from types import MappingProxyType
from typing import Final, Mapping

from ..core.environment import Environment

ABDM_BASE_URLS: Final[Mapping[Environment, str]] = MappingProxyType(
    {
        Environment.SANDBOX: "https://abhasbx.abdm.gov.in/abha/api",
        Environment.PRODUCTION: "https://abha.abdm.gov.in/api/abha",
    }
)

# Gateway session URLs (credential exchange)
ABDM_SESSION_URLS: Final[Mapping[Environment, str]] = MappingProxyType(
    {
        Environment.SANDBOX: "https://dev.abdm.gov.in/api/hiecm/gateway/v3/sessions",
        Environment.PRODUCTION: "https://live.abdm.gov.in/api/hiecm/gateway/v3/sessions",
    }
)

# Consent manager id sent with the session request
CM_IDS: Final[Mapping[Environment, str]] = MappingProxyType(
    {
        Environment.SANDBOX: "sbx",
        Environment.PRODUCTION: "abdm",
    }
)


class ApiEndpoints:
    """Endpoint paths relative to the environment base URL."""

    PUBLIC_CERTIFICATE: Final[str] = "/v3/profile/public/certificate"

    # Login / verification
    LOGIN_REQUEST_OTP: Final[str] = "/v3/profile/login/request/otp"
    LOGIN_VERIFY: Final[str] = "/v3/profile/login/verify"

    # Profile
    PROFILE_ACCOUNT: Final[str] = "/v3/profile/account"


class Headers:
    """Header names required by the ABDM gateway."""

    REQUEST_ID: Final[str] = "REQUEST-ID"
    TIMESTAMP: Final[str] = "TIMESTAMP"
    AUTHORIZATION: Final[str] = "Authorization"
    USER_TOKEN: Final[str] = "X-token"
    CM_ID: Final[str] = "X-CM-ID"
    CONTENT_TYPE: Final[str] = "Content-Type"

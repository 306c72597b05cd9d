"""ABHA API Client - login, session and profile access for the ABHA V3 APIs."""

from abha_sdk.services.abha.client import ABHAClient
from abha_sdk.services.abha.encryption import (
    CryptoChallengeEncoder,
    CryptoProvider,
    PKCS1OAEPProvider,
    load_rsa_public_key,
    max_plaintext_length,
)
from abha_sdk.services.abha.headers import build_headers, iso_timestamp
from abha_sdk.services.abha.models import (
    AccountListResult,
    AccountSummary,
    OTPRequestResult,
    OTPTransaction,
    Profile,
    ProfileResult,
    PublicKeyMaterial,
    SessionToken,
    Tokens,
    VerifyResult,
    parse_verify_response,
)
from abha_sdk.services.abha.otp_flow import OTPTransactionFlow, normalize_scope
from abha_sdk.services.abha.session import SessionManager
from abha_sdk.services.abha.transport import (
    AiohttpTransport,
    Transport,
    TransportResponse,
    extract_remote_error,
)

__all__ = [
    "ABHAClient",
    "SessionManager",
    "OTPTransactionFlow",
    "CryptoChallengeEncoder",
    "CryptoProvider",
    "PKCS1OAEPProvider",
    "AiohttpTransport",
    "Transport",
    "TransportResponse",
    "SessionToken",
    "PublicKeyMaterial",
    "OTPTransaction",
    "OTPRequestResult",
    "ProfileResult",
    "AccountListResult",
    "VerifyResult",
    "Profile",
    "AccountSummary",
    "Tokens",
    "build_headers",
    "iso_timestamp",
    "extract_remote_error",
    "load_rsa_public_key",
    "max_plaintext_length",
    "normalize_scope",
    "parse_verify_response",
]

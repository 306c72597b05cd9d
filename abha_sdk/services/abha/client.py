"""ABHA API Client - Main client implementation."""

from typing import Callable, Iterable, Optional, Union

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from ...constants.api import ABDM_BASE_URLS, ApiEndpoints
from ...core.config.settings import ABHASettings, get_settings
from ...core.enums import LoginHint, OTPSystem, Scope
from ...core.environment import Environment
from ...core.exceptions import ConfigurationError, ProtocolViolation
from .encryption import CryptoChallengeEncoder, CryptoProvider
from .headers import build_headers
from .models import OTPRequestResult, Profile, PublicKeyMaterial, Tokens, VerifyResult
from .otp_flow import OTPTransactionFlow
from .session import Clock, SessionManager
from .transport import AiohttpTransport, Transport


class ABHAClient:
    """
    Client for the ABHA V3 login and profile APIs.

    Composes the transport, session manager, challenge encoder and OTP flow.
    After a successful OTP verification the user token is kept and sent as
    ``X-token`` on profile calls.
    """

    def __init__(
        self,
        settings: Optional[ABHASettings] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        environment: Union[Environment, str, None] = None,
        transport: Optional[Transport] = None,
        crypto_provider: Optional[CryptoProvider] = None,
        clock: Optional[Clock] = None,
        retry: Optional[Callable] = None,
    ):
        """
        Initialize ABHA client.

        Explicit arguments override values from ``settings``.

        Args:
            settings: Client settings (defaults to ``get_settings()``)
            client_id: ABDM client ID
            client_secret: ABDM client secret
            environment: ABDM environment
            transport: HTTP transport (defaults to AiohttpTransport)
            crypto_provider: OAEP provider (defaults to pycryptodome)
            clock: Clock used for token expiry
            retry: Retry decorator for the session credential exchange

        Raises:
            ConfigurationError: If credentials are missing
        """
        self.settings = settings or get_settings()
        client_id = client_id or self.settings.client_id
        client_secret = client_secret or self.settings.client_secret.get_secret_value()
        missing = [
            name
            for name, value in (("client_id", client_id), ("client_secret", client_secret))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "ABHA credentials not configured. "
                "Set ABHA_CLIENT_ID and ABHA_CLIENT_SECRET or pass them explicitly.",
                details={"missing": missing},
            )

        self.environment = Environment.coerce(environment or self.settings.environment)
        self._owns_transport = transport is None
        self.transport: Transport = transport or AiohttpTransport(
            timeout=self.settings.timeout, debug=self.settings.debug
        )

        self.session = SessionManager(
            client_id=client_id,
            client_secret=client_secret,
            transport=self.transport,
            environment=self.environment,
            refresh_buffer_seconds=self.settings.token_refresh_buffer_seconds,
            clock=clock,
            retry=retry,
        )
        self.encoder = CryptoChallengeEncoder(crypto_provider)
        self.otp = OTPTransactionFlow(
            session=self.session,
            encoder=self.encoder,
            transport=self.transport,
            environment=self.environment,
            clock=clock,
        )
        self._user_tokens: Optional[Tokens] = None

        logger.info(f"ABHAClient initialized ({self.environment.value})")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self.transport, AiohttpTransport):
            await self.transport.close()

    @property
    def user_tokens(self) -> Optional[Tokens]:
        """Tokens from the last successful OTP verification."""
        return self._user_tokens

    @property
    def is_logged_in(self) -> bool:
        return self._user_tokens is not None

    async def get_public_key(self, timeout: Optional[float] = None) -> PublicKeyMaterial:
        """Fetch (or return the cached) encryption public key."""
        return await self.session.get_public_key(timeout)

    async def request_otp(
        self,
        login_hint: Union[LoginHint, str],
        identifier: str,
        scope: Union[Scope, str, Iterable[Union[Scope, str]]] = (
            Scope.ABHA_LOGIN,
            Scope.MOBILE_VERIFY,
        ),
        otp_system: Union[OTPSystem, str] = OTPSystem.ABDM,
        timeout: Optional[float] = None,
        txn_id: Optional[str] = None,
    ) -> OTPRequestResult:
        """
        Request a login OTP, or resend it for a pending transaction.

        Args:
            login_hint: Identifier family (abha-number, mobile, aadhaar, email)
            identifier: Identifier value
            scope: Login scopes (defaults to abha-login + mobile-verify)
            otp_system: Which mobile receives the OTP
            timeout: Overall time limit in seconds
            txn_id: Pending transaction to resend the OTP for

        Returns:
            OTPRequestResult with the txnId
        """
        return await self.otp.request_otp(
            scope, login_hint, identifier, otp_system, timeout, txn_id=txn_id
        )

    async def verify_otp(
        self, txn_id: str, otp: str, timeout: Optional[float] = None
    ) -> VerifyResult:
        """
        Verify a login OTP and keep the returned user token.

        Returns:
            ProfileResult or AccountListResult
        """
        result = await self.otp.verify_otp(txn_id, otp, timeout)
        if result.tokens.token:
            self._user_tokens = result.tokens
        return result

    def logout(self) -> None:
        """Forget the user token. The gateway session is kept."""
        self._user_tokens = None

    async def get_profile(self, timeout: Optional[float] = None) -> Profile:
        """
        Fetch the logged-in user's ABHA profile.

        Raises:
            ConfigurationError: If no OTP verification has succeeded yet
            TransportError: On network failure, timeout or error response
            ProtocolViolation: If the profile cannot be parsed
        """
        if self._user_tokens is None:
            raise ConfigurationError("No user token: verify an OTP before fetching the profile")

        token = await self.session.get_token(timeout)
        url = ABDM_BASE_URLS[self.environment] + ApiEndpoints.PROFILE_ACCOUNT
        response = await self.transport.send(
            "GET", url, build_headers(token.value, self._user_tokens.token)
        )
        try:
            return Profile.model_validate(response.json)
        except PydanticValidationError as e:
            raise ProtocolViolation(
                f"Profile response could not be parsed: {e.error_count()} invalid field(s)"
            ) from e

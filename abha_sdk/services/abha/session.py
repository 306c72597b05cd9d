"""ABHA session management - gateway token and public key caching."""

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from loguru import logger

from ...constants.api import ABDM_BASE_URLS, ABDM_SESSION_URLS, CM_IDS, ApiEndpoints, Headers
from ...constants.defaults import Defaults, Encryption
from ...core.enums import SessionState
from ...core.environment import Environment
from ...core.exceptions import ConfigurationError, ProtocolViolation, TransportTimeoutError
from .headers import build_headers
from .models import PublicKeyMaterial, SessionToken
from .transport import Transport

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def _lifetime(data: Dict[str, Any], key: str, default: int) -> int:
    """Read a lifetime in seconds from a session response; missing means ``default``.

    Raises:
        ProtocolViolation: If the value is present but not a whole number
    """
    value = data.get(key)
    if value is None or value == "" or value == 0:
        return default
    if isinstance(value, bool):
        raise ProtocolViolation(f"Session response {key} is not a number", details={key: value})
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ProtocolViolation(
            f"Session response {key} is not a number", details={key: value}
        ) from e


class _SingleFlight:
    """Collapses concurrent callers onto one in-flight coroutine.

    Every caller awaits the same task through ``asyncio.shield`` so one
    caller's timeout does not cancel the work for the others. The task is
    cancelled only when its last waiter gives up.
    """

    def __init__(self, name: str):
        self.name = name
        self._task: Optional[asyncio.Future] = None
        self._waiters: Dict[asyncio.Future, int] = {}

    async def run(self, factory: Callable[[], Awaitable[Any]], timeout: Optional[float] = None):
        if self._task is None:
            self._task = asyncio.ensure_future(factory())
            self._task.add_done_callback(self._on_done)
        task = self._task
        self._waiters[task] = self._waiters.get(task, 0) + 1
        try:
            if timeout is None:
                return await asyncio.shield(task)
            return await asyncio.wait_for(asyncio.shield(task), timeout)
        except asyncio.TimeoutError as e:
            self._abandon(task)
            raise TransportTimeoutError(f"{self.name} timed out", timeout=timeout) from e
        except asyncio.CancelledError:
            self._abandon(task)
            raise
        finally:
            remaining = self._waiters.get(task, 1) - 1
            if remaining > 0:
                self._waiters[task] = remaining
            else:
                self._waiters.pop(task, None)

    def _abandon(self, task: asyncio.Future) -> None:
        if self._waiters.get(task, 0) <= 1 and not task.done():
            logger.debug(f"{self.name}: last waiter gone, cancelling")
            task.cancel()

    def _on_done(self, task: asyncio.Future) -> None:
        if self._task is task:
            self._task = None
        # Mark the exception retrieved even if every waiter timed out
        if not task.cancelled():
            task.exception()


class SessionManager:
    """Acquires and caches the gateway session token and the encryption public key.

    The token is renewed when less than ``refresh_buffer_seconds`` of its
    lifetime remain. Concurrent callers share one renewal. The public key is
    cached for the lifetime of the token it was fetched with.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: Transport,
        environment: Environment = Environment.SANDBOX,
        refresh_buffer_seconds: int = Defaults.TOKEN_REFRESH_BUFFER_SECONDS,
        clock: Optional[Clock] = None,
        retry: Optional[Callable] = None,
    ):
        """
        Initialize session manager.

        Args:
            client_id: ABDM client ID
            client_secret: ABDM client secret
            transport: Transport used for gateway calls
            environment: ABDM environment
            refresh_buffer_seconds: Renew this long before the token expires
            clock: Returns the current aware datetime (defaults to UTC now)
            retry: Optional retry decorator (see ``get_session_retry``) applied to
                the credential exchange only

        Raises:
            ConfigurationError: If credentials are missing
        """
        if not client_id or not client_secret:
            raise ConfigurationError(
                "ABHA client_id and client_secret must be set. "
                "Set ABHA_CLIENT_ID and ABHA_CLIENT_SECRET or pass them explicitly."
            )
        self.client_id = client_id
        self._client_secret = client_secret
        self.transport = transport
        self.environment = Environment.coerce(environment)
        self.refresh_buffer_seconds = refresh_buffer_seconds
        self._clock = clock or utc_now
        self._retry = retry

        self._token: Optional[SessionToken] = None
        self._public_key: Optional[PublicKeyMaterial] = None
        self._public_key_token: Optional[SessionToken] = None

        self._renewal = _SingleFlight("Session token acquisition")
        self._key_fetch = _SingleFlight("Public key fetch")

    @property
    def state(self) -> SessionState:
        """Current token state."""
        if self._token is None:
            return SessionState.EMPTY
        if self._token.is_expired(self._clock(), self.refresh_buffer_seconds):
            return SessionState.EXPIRED
        return SessionState.VALID

    @property
    def token(self) -> Optional[SessionToken]:
        """Cached token, whatever its state."""
        return self._token

    @property
    def public_key(self) -> Optional[PublicKeyMaterial]:
        """Cached public key, if one was fetched for the current token."""
        if self._public_key is not None and self._public_key_token is self._token:
            return self._public_key
        return None

    def invalidate(self) -> None:
        """Drop the cached token and public key."""
        self._token = None
        self._public_key = None
        self._public_key_token = None
        logger.info("ABHA session invalidated")

    async def get_token(self, timeout: Optional[float] = None) -> SessionToken:
        """
        Get a session token that is valid for at least the refresh buffer.

        Args:
            timeout: Give up waiting after this many seconds

        Returns:
            Cached or freshly acquired token

        Raises:
            TransportError: If the credential exchange fails
            TransportTimeoutError: If the timeout elapses first
        """
        token = self._token
        if token is not None and not token.is_expired(self._clock(), self.refresh_buffer_seconds):
            return token
        return await self._renewal.run(self._renew, timeout)

    async def get_public_key(self, timeout: Optional[float] = None) -> PublicKeyMaterial:
        """
        Get the encryption public key, fetching it once per session token.

        Raises:
            TransportError: If the token or the certificate cannot be fetched
            ProtocolViolation: If the certificate response carries no key
        """
        token = await self.get_token(timeout)
        cached = self.public_key
        if cached is not None and self._public_key_token is token:
            return cached
        return await self._key_fetch.run(lambda: self._fetch_public_key(token), timeout)

    async def _renew(self) -> SessionToken:
        if self._token is not None:
            logger.info("ABHA session token expiring, renewing")
        # Expired token and its key are unusable whatever the outcome
        self._token = None
        self._public_key = None
        self._public_key_token = None

        acquire = self._retry(self._acquire) if self._retry else self._acquire
        token = await acquire()
        self._token = token
        logger.info(
            f"ABHA session token acquired ({self.environment.value}), "
            f"expires in {token.expires_in_seconds}s"
        )
        return token

    async def _acquire(self) -> SessionToken:
        """Exchange client credentials for a session token."""
        requested_at = self._clock()
        headers = build_headers(extra={Headers.CM_ID: CM_IDS[self.environment]})
        body = {
            "clientId": self.client_id,
            "clientSecret": self._client_secret,
            "grantType": "client_credentials",
        }
        response = await self.transport.send(
            "POST", ABDM_SESSION_URLS[self.environment], headers, body
        )
        data = response.json
        access_token = data.get("accessToken") if isinstance(data, dict) else None
        if not isinstance(access_token, str) or not access_token:
            raise ProtocolViolation("Session response has no accessToken")

        return SessionToken(
            value=access_token,
            issued_at=requested_at,
            expires_in_seconds=_lifetime(data, "expiresIn", Defaults.TOKEN_EXPIRY_SECONDS),
            refresh_token=data.get("refreshToken") or "",
            refresh_expires_in_seconds=_lifetime(
                data, "refreshExpiresIn", Defaults.REFRESH_TOKEN_EXPIRY_SECONDS
            ),
        )

    async def _fetch_public_key(self, token: SessionToken) -> PublicKeyMaterial:
        url = ABDM_BASE_URLS[self.environment] + ApiEndpoints.PUBLIC_CERTIFICATE
        response = await self.transport.send("GET", url, build_headers(token.value))
        data = response.json
        if not isinstance(data, dict) or not data.get("publicKey"):
            raise ProtocolViolation("Public certificate response has no publicKey")

        material = PublicKeyMaterial(
            key=data["publicKey"],
            algorithm=data.get("encryptionAlgorithm") or Encryption.ALGORITHM,
        )
        # Token may have been replaced while the fetch was in flight
        if self._token is token:
            self._public_key = material
            self._public_key_token = token
        logger.debug("ABHA public key fetched")
        return material

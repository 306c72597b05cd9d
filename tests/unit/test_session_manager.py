"""Tests for SessionManager token and public key caching."""

import asyncio

import pytest

from abha_sdk.constants.api import ABDM_SESSION_URLS, CM_IDS, ApiEndpoints, Headers
from abha_sdk.core.enums import SessionState
from abha_sdk.core.environment import Environment
from abha_sdk.core.exceptions import (
    ConfigurationError,
    ProtocolViolation,
    TransportError,
    TransportTimeoutError,
)
from abha_sdk.core.infra.retry import get_session_retry
from abha_sdk.services.abha.session import SessionManager

SESSION_PATH = "/sessions"


class TestSessionManagerConstruction:
    """Tests for SessionManager construction."""

    @pytest.mark.parametrize("client_id, client_secret", [("", "secret"), ("id", ""), (None, None)])
    def test_missing_credentials(self, transport, client_id, client_secret):
        with pytest.raises(ConfigurationError):
            SessionManager(client_id, client_secret, transport)

    def test_starts_empty(self, session_manager):
        assert session_manager.state == SessionState.EMPTY
        assert session_manager.token is None
        assert session_manager.public_key is None


class TestGetToken:
    """Tests for token acquisition and renewal."""

    @pytest.mark.asyncio
    async def test_acquires_token(self, session_manager, transport, clock):
        token = await session_manager.get_token()

        assert token.value == "gateway-token"
        assert token.expires_in_seconds == 1200
        assert token.issued_at == clock.now
        assert session_manager.state == SessionState.VALID

        call = transport.calls[0]
        assert call.method == "POST"
        assert call.url == ABDM_SESSION_URLS[Environment.SANDBOX]
        assert call.body == {
            "clientId": "test-client",
            "clientSecret": "test-secret",
            "grantType": "client_credentials",
        }
        assert call.headers[Headers.CM_ID] == CM_IDS[Environment.SANDBOX]
        assert Headers.REQUEST_ID in call.headers
        assert Headers.TIMESTAMP in call.headers

    @pytest.mark.asyncio
    async def test_cached_token_reused(self, session_manager, transport):
        first = await session_manager.get_token()
        second = await session_manager.get_token()

        assert first is second
        assert len(transport.calls_to(SESSION_PATH)) == 1

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_exchange(self, session_manager, transport):
        gate = transport.block(SESSION_PATH)

        first = asyncio.create_task(session_manager.get_token())
        second = asyncio.create_task(session_manager.get_token())
        await asyncio.sleep(0)
        gate.set()
        tokens = await asyncio.gather(first, second)

        assert tokens[0] is tokens[1]
        assert len(transport.calls_to(SESSION_PATH)) == 1

    @pytest.mark.asyncio
    async def test_renews_inside_refresh_buffer(self, session_manager, transport, clock):
        transport.script(
            "POST",
            SESSION_PATH,
            {"accessToken": "first", "expiresIn": 1200},
            {"accessToken": "second", "expiresIn": 1200},
        )
        assert (await session_manager.get_token()).value == "first"

        clock.advance(1139)
        assert session_manager.state == SessionState.VALID
        assert (await session_manager.get_token()).value == "first"

        clock.advance(1)
        assert session_manager.state == SessionState.EXPIRED
        assert (await session_manager.get_token()).value == "second"
        assert len(transport.calls_to(SESSION_PATH)) == 2

    @pytest.mark.asyncio
    async def test_failure_leaves_manager_empty(self, session_manager, transport, clock):
        transport.script(
            "POST",
            SESSION_PATH,
            {"accessToken": "first", "expiresIn": 1200},
            TransportError("Unauthorized", status=401),
        )
        await session_manager.get_token()
        clock.advance(1200)

        with pytest.raises(TransportError) as exc_info:
            await session_manager.get_token()

        assert exc_info.value.status == 401
        assert session_manager.state == SessionState.EMPTY
        assert session_manager.token is None

    @pytest.mark.asyncio
    async def test_missing_access_token(self, session_manager, transport):
        transport.script("POST", SESSION_PATH, {"expiresIn": 1200})

        with pytest.raises(ProtocolViolation):
            await session_manager.get_token()
        assert session_manager.state == SessionState.EMPTY

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"accessToken": "t", "expiresIn": "soon"},
            {"accessToken": "t", "expiresIn": 1200, "refreshExpiresIn": [1]},
            {"accessToken": "t", "expiresIn": True},
            {"accessToken": 12345, "expiresIn": 1200},
        ],
    )
    async def test_malformed_session_body(self, session_manager, transport, body):
        transport.script("POST", SESSION_PATH, body)

        with pytest.raises(ProtocolViolation):
            await session_manager.get_token()
        assert session_manager.state == SessionState.EMPTY

    @pytest.mark.asyncio
    async def test_numeric_string_lifetime(self, session_manager, transport):
        transport.script("POST", SESSION_PATH, {"accessToken": "t", "expiresIn": "900"})

        token = await session_manager.get_token()

        assert token.expires_in_seconds == 900

    @pytest.mark.asyncio
    async def test_timeout(self, session_manager, transport):
        transport.block(SESSION_PATH)

        with pytest.raises(TransportTimeoutError):
            await session_manager.get_token(timeout=0.05)

        assert session_manager.state == SessionState.EMPTY

    @pytest.mark.asyncio
    async def test_one_caller_timeout_does_not_cancel_others(self, session_manager, transport):
        gate = transport.block(SESSION_PATH)

        patient = asyncio.create_task(session_manager.get_token())
        await asyncio.sleep(0)
        with pytest.raises(TransportTimeoutError):
            await session_manager.get_token(timeout=0.01)

        gate.set()
        token = await patient
        assert token.value == "gateway-token"
        assert len(transport.calls_to(SESSION_PATH)) == 1

    @pytest.mark.asyncio
    async def test_retry_policy_applied_to_exchange(self, transport, clock):
        transport.script(
            "POST",
            SESSION_PATH,
            TransportError("Bad gateway", status=502),
            {"accessToken": "after-retry", "expiresIn": 1200},
        )
        manager = SessionManager(
            "id",
            "secret",
            transport,
            clock=clock,
            retry=get_session_retry(attempts=2, min_wait=0, max_wait=0, jitter=0),
        )

        token = await manager.get_token()

        assert token.value == "after-retry"
        assert len(transport.calls_to(SESSION_PATH)) == 2

    @pytest.mark.asyncio
    async def test_invalidate(self, session_manager, transport):
        await session_manager.get_public_key()
        session_manager.invalidate()

        assert session_manager.state == SessionState.EMPTY
        assert session_manager.public_key is None


class TestGetPublicKey:
    """Tests for public key caching."""

    @pytest.mark.asyncio
    async def test_fetches_once_per_token(self, session_manager, transport, public_key_b64):
        first = await session_manager.get_public_key()
        second = await session_manager.get_public_key()

        assert first.key == public_key_b64
        assert first is second
        assert len(transport.calls_to(ApiEndpoints.PUBLIC_CERTIFICATE)) == 1
        call = transport.calls_to(ApiEndpoints.PUBLIC_CERTIFICATE)[0]
        assert call.method == "GET"
        assert call.headers[Headers.AUTHORIZATION] == "Bearer gateway-token"

    @pytest.mark.asyncio
    async def test_refetched_after_token_renewal(self, session_manager, transport, clock):
        await session_manager.get_public_key()
        clock.advance(1200)
        await session_manager.get_public_key()

        assert len(transport.calls_to(SESSION_PATH)) == 2
        assert len(transport.calls_to(ApiEndpoints.PUBLIC_CERTIFICATE)) == 2

    @pytest.mark.asyncio
    async def test_concurrent_fetches_share_one_call(self, session_manager, transport):
        await session_manager.get_token()
        gate = transport.block(ApiEndpoints.PUBLIC_CERTIFICATE)

        tasks = [asyncio.create_task(session_manager.get_public_key()) for _ in range(3)]
        await asyncio.sleep(0)
        gate.set()
        keys = await asyncio.gather(*tasks)

        assert keys[0] is keys[1] is keys[2]
        assert len(transport.calls_to(ApiEndpoints.PUBLIC_CERTIFICATE)) == 1

    @pytest.mark.asyncio
    async def test_missing_public_key(self, session_manager, transport):
        transport.script("GET", ApiEndpoints.PUBLIC_CERTIFICATE, {"encryptionAlgorithm": "RSA"})

        with pytest.raises(ProtocolViolation):
            await session_manager.get_public_key()
        assert session_manager.public_key is None

    @pytest.mark.asyncio
    async def test_default_algorithm(self, session_manager, transport, public_key_b64):
        transport.script("GET", ApiEndpoints.PUBLIC_CERTIFICATE, {"publicKey": public_key_b64})

        key = await session_manager.get_public_key()
        assert key.algorithm == "RSA/ECB/OAEPWithSHA-1AndMGF1Padding"

"""Pytest configuration and common fixtures."""

import asyncio
import base64
import sys
import warnings
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from Crypto.PublicKey import RSA

from abha_sdk.constants.api import ApiEndpoints
from abha_sdk.core.config.settings import get_settings
from abha_sdk.core.environment import Environment
from abha_sdk.services.abha.encryption import CryptoChallengeEncoder
from abha_sdk.services.abha.otp_flow import OTPTransactionFlow
from abha_sdk.services.abha.session import SessionManager
from abha_sdk.services.abha.transport import TransportResponse

SESSION_PATH = "/sessions"

PROFILE_PAYLOAD = {
    "ABHANumber": "91-1234-5678-9012",
    "preferredAbhaAddress": "johndoe@sbx",
    "firstName": "John",
    "middleName": "",
    "lastName": "Doe",
    "dob": "26-11-1989",
    "gender": "M",
    "mobile": "******3210",
    "abhaStatus": "ACTIVE",
    "abhaType": "STANDARD",
    "phrAddress": ["johndoe@sbx"],
}


def pytest_configure(config):
    """Configure pytest environment before tests run."""
    warnings.filterwarnings("ignore", message="coroutine.*was never awaited")


@dataclass
class RecordedCall:
    """One call seen by FakeTransport."""

    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[Dict[str, Any]]


@dataclass
class FakeTransport:
    """Scripted transport.

    Responses are registered per (method, url suffix). Each call consumes the
    next scripted item; the last one repeats. Exceptions are raised instead of
    returned. A gate blocks calls to a path until the event is set.
    """

    calls: List[RecordedCall] = field(default_factory=list)
    routes: Dict[tuple, list] = field(default_factory=dict)
    gates: Dict[str, asyncio.Event] = field(default_factory=dict)

    def script(self, method: str, path: str, *items: Any) -> None:
        self.routes[(method, path)] = list(items)

    def block(self, path: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[path] = event
        return event

    def calls_to(self, path: str) -> List[RecordedCall]:
        return [c for c in self.calls if c.url.endswith(path)]

    async def send(self, method, url, headers, body=None):
        self.calls.append(RecordedCall(method, url, dict(headers), body))
        for path, gate in self.gates.items():
            if url.endswith(path):
                await gate.wait()
        for (route_method, path), items in self.routes.items():
            if route_method == method and url.endswith(path):
                item = items.pop(0) if len(items) > 1 else items[0]
                if isinstance(item, BaseException):
                    raise item
                return TransportResponse(status=200, json=item)
        raise AssertionError(f"Unexpected call {method} {url}")


class FakeClock:
    """Controllable clock for token expiry."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2026, 1, 1, 10, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Isolate tests from ABHA_* variables and .env files."""
    for name in (
        "ABHA_CLIENT_ID",
        "ABHA_CLIENT_SECRET",
        "ABHA_ENVIRONMENT",
        "ABHA_TIMEOUT",
        "ABHA_TOKEN_REFRESH_BUFFER_SECONDS",
        "ABHA_LOG_LEVEL",
        "ABHA_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def rsa_key():
    """2048-bit RSA key pair shared by the session."""
    return RSA.generate(2048)


@pytest.fixture(scope="session")
def public_key_b64(rsa_key):
    """Public key as bare base64 DER, the shape the certificate endpoint serves."""
    return base64.b64encode(rsa_key.public_key().export_key(format="DER")).decode("ascii")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def transport(public_key_b64):
    """Fake transport with the session and certificate calls scripted."""
    fake = FakeTransport()
    fake.script(
        "POST",
        SESSION_PATH,
        {"accessToken": "gateway-token", "expiresIn": 1200, "refreshToken": "r", "tokenType": "bearer"},
    )
    fake.script(
        "GET",
        ApiEndpoints.PUBLIC_CERTIFICATE,
        {"publicKey": public_key_b64, "encryptionAlgorithm": "RSA/ECB/OAEPWithSHA-1AndMGF1Padding"},
    )
    return fake


@pytest.fixture
def session_manager(transport, clock):
    return SessionManager(
        client_id="test-client",
        client_secret="test-secret",
        transport=transport,
        environment=Environment.SANDBOX,
        clock=clock,
    )


@pytest.fixture
def otp_flow(session_manager, transport, clock):
    return OTPTransactionFlow(
        session=session_manager,
        encoder=CryptoChallengeEncoder(),
        transport=transport,
        environment=Environment.SANDBOX,
        clock=clock,
    )


@pytest.fixture
def profile_payload():
    return dict(PROFILE_PAYLOAD)

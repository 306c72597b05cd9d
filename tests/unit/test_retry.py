"""Tests for the session retry policy."""

import pytest

from abha_sdk.core.exceptions import (
    ProtocolViolation,
    RateLimitError,
    TransportError,
    TransportTimeoutError,
    ValidationError,
)
from abha_sdk.core.infra.retry import get_session_retry, is_retryable_transport_error


class TestIsRetryable:
    """Tests for the retry predicate."""

    @pytest.mark.parametrize(
        "error",
        [
            TransportError("reset"),
            TransportError("bad gateway", status=502),
            TransportTimeoutError(),
            RateLimitError(),
        ],
    )
    def test_retryable(self, error):
        assert is_retryable_transport_error(error) is True

    @pytest.mark.parametrize(
        "error",
        [
            TransportError("unauthorized", status=401),
            ProtocolViolation("bad body"),
            ValidationError("bad input"),
            ValueError("other"),
        ],
    )
    def test_not_retryable(self, error):
        assert is_retryable_transport_error(error) is False


class TestGetSessionRetry:
    """Tests for the tenacity policy."""

    @staticmethod
    def scripted(*outcomes):
        """Async callable that raises or returns the next outcome on each call."""
        calls = []

        async def func():
            outcome = outcomes[min(len(calls), len(outcomes) - 1)]
            calls.append(outcome)
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome

        return func, calls

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self):
        func, calls = self.scripted(TransportError("reset"), "ok")
        wrapped = get_session_retry(attempts=3, min_wait=0, max_wait=0, jitter=0)(func)

        assert await wrapped() == "ok"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_gives_up_and_reraises(self):
        func, calls = self.scripted(TransportError("reset"))
        wrapped = get_session_retry(attempts=3, min_wait=0, max_wait=0, jitter=0)(func)

        with pytest.raises(TransportError):
            await wrapped()
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_client_rejection_not_retried(self):
        func, calls = self.scripted(TransportError("unauthorized", status=401))
        wrapped = get_session_retry(attempts=3, min_wait=0, max_wait=0, jitter=0)(func)

        with pytest.raises(TransportError):
            await wrapped()
        assert len(calls) == 1

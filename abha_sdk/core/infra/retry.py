"""Retry strategies for gateway calls.

Only the session credential exchange is ever retried; OTP generate/verify calls
are surfaced to the caller untouched because OTPs are single-use.
"""

import logging as stdlib_logging

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from ...constants.defaults import Defaults
from ..exceptions import TransportError

# Stdlib logger needed for tenacity's before_sleep_log
_stdlib_logger = stdlib_logging.getLogger(__name__)


def is_retryable_transport_error(exc: BaseException) -> bool:
    """Retry transport failures the server did not explicitly reject."""
    return isinstance(exc, TransportError) and exc.recoverable


def get_session_retry(
    attempts: int = Defaults.MAX_RETRIES,
    min_wait: float = Defaults.RETRY_DELAY_SECONDS,
    max_wait: float = 10.0,
    jitter: float = 1.0,
):
    """
    Get retry strategy for session token acquisition.

    Args:
        attempts: Maximum number of attempts (including the first)
        min_wait: Lower bound of the exponential backoff in seconds
        max_wait: Upper bound of the exponential backoff in seconds
        jitter: Maximum random jitter added to each wait in seconds

    Returns:
        Retry decorator suitable for ``SessionManager(retry=...)``
    """
    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait) + wait_random(0, jitter),
        retry=retry_if_exception(is_retryable_transport_error),
        before_sleep=before_sleep_log(_stdlib_logger, stdlib_logging.WARNING),
        reraise=True,
    )

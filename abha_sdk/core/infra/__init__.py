"""Infrastructure helpers."""

from .retry import get_session_retry, is_retryable_transport_error

__all__ = ["get_session_retry", "is_retryable_transport_error"]

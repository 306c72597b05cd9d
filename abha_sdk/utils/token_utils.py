"""Token utility functions for handling token expiry calculations."""

from loguru import logger


def calculate_effective_lifetime(expires_in: int, buffer_seconds: int, min_lifetime: int = 1) -> int:
    """
    Calculate how long a token may be used before it must be renewed.

    Handles edge cases such as negative or zero expiry times and makes sure
    the buffer never consumes the whole lifetime, so a short-lived token is
    still usable once instead of triggering back-to-back renewals.

    Args:
        expires_in: Token lifetime in seconds as reported by the gateway
        buffer_seconds: Renew this many seconds before actual expiry
        min_lifetime: Minimum usable lifetime to return (default: 1 second)

    Returns:
        Usable lifetime in seconds (always >= min_lifetime)

    Examples:
        >>> calculate_effective_lifetime(1200, 60)
        1140
        >>> calculate_effective_lifetime(60, 60)
        30
        >>> calculate_effective_lifetime(0, 60)
        1
    """
    expires_in = max(min_lifetime, expires_in)

    # Buffer would swallow the token: fall back to half its lifetime
    if buffer_seconds >= expires_in:
        effective = max(min_lifetime, expires_in // 2)
    else:
        effective = max(min_lifetime, expires_in - buffer_seconds)

    logger.debug(
        f"Token lifetime calculation: expires_in={expires_in}s, "
        f"buffer={buffer_seconds}s, effective={effective}s"
    )

    return effective

"""Mandatory ABHA request headers."""

import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

from ...constants.api import Headers


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-10-01T10:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_headers(
    access_token: Optional[str] = None,
    user_token: Optional[str] = None,
    extra: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """
    Build the header set every ABHA call carries.

    Args:
        access_token: Gateway session token (``Authorization: Bearer``)
        user_token: User-level token (``X-token: Bearer``), once one exists
        extra: Additional call-specific headers

    Returns:
        Fresh header dict with a new REQUEST-ID and TIMESTAMP
    """
    headers = {
        Headers.REQUEST_ID: str(uuid.uuid4()),
        Headers.TIMESTAMP: iso_timestamp(),
        Headers.CONTENT_TYPE: "application/json",
    }
    if access_token:
        headers[Headers.AUTHORIZATION] = f"Bearer {access_token}"
    if user_token:
        headers[Headers.USER_TOKEN] = f"Bearer {user_token}"
    if extra:
        headers.update(extra)
    return headers

"""ABHA HTTP transport - JSON over HTTPS with typed error mapping."""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Tuple

import aiohttp
from loguru import logger

from ...constants.api import Headers
from ...constants.errors import ErrorCodes
from ...core.exceptions import (
    ProtocolViolation,
    RateLimitError,
    TransportError,
    TransportTimeoutError,
)
from ...core.logger import request_id_ctx
from ...utils.masking import mask_sensitive_dict


@dataclass(frozen=True)
class TransportResponse:
    """Status and parsed JSON body of a successful call."""

    status: int
    json: Any


class Transport(Protocol):
    """Performs one HTTP call and returns the parsed JSON body.

    Implementations raise :class:`TransportError` (or a subclass) for network
    failures, timeouts and non-2xx responses.
    """

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse:
        ...


def extract_remote_error(data: Any) -> Tuple[Optional[str], Optional[str]]:
    """
    Pull ``(code, message)`` out of an ABDM error body.

    Handles the flat ``{"code", "message"}`` shape and the nested
    ``{"error": {"code", "message"}}`` shape; anything else yields Nones.
    """
    if not isinstance(data, dict):
        return None, None
    error = data.get("error")
    if isinstance(error, dict):
        data = error
    code = data.get("code")
    message = data.get("message")
    return (str(code) if code is not None else None, str(message) if message is not None else None)


def _status_error_code(status: int) -> str:
    if status in (401, 403):
        return ErrorCodes.AUTH_FAILED
    if status >= 500:
        return ErrorCodes.SERVICE_UNAVAILABLE
    return ErrorCodes.UNKNOWN_ERROR


class AiohttpTransport:
    """Default transport backed by a pooled ``aiohttp.ClientSession``."""

    def __init__(self, timeout: float = 30.0, debug: bool = False):
        """
        Initialize transport.

        Args:
            timeout: Total request timeout in seconds
            debug: Log masked request and response bodies
        """
        self.timeout = timeout
        self.debug = debug
        self._http_session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self._init_http_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _init_http_session(self) -> None:
        """Initialize HTTP session with connection pooling."""
        if self._http_session is None:
            connector = aiohttp.TCPConnector(
                limit=20,
                limit_per_host=10,
                ttl_dns_cache=120,
                keepalive_timeout=30,
            )
            timeout = aiohttp.ClientTimeout(total=self.timeout, connect=10)
            self._http_session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers={"Accept": "application/json"},
            )
            logger.debug("HTTP session initialized with connection pooling")

    async def close(self) -> None:
        """Close HTTP session."""
        if self._http_session:
            await self._http_session.close()
            self._http_session = None

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse:
        """
        Send one JSON request.

        Raises:
            RateLimitError: On HTTP 429
            TransportError: On network failure or any other non-2xx status
            TransportTimeoutError: If the request times out
            ProtocolViolation: If a 2xx response body is not JSON
        """
        await self._init_http_session()
        token = request_id_ctx.set(headers.get(Headers.REQUEST_ID))
        try:
            logger.debug(f"{method} {url}")
            if self.debug and body:
                logger.debug(f"Request body: {mask_sensitive_dict(body)}")

            try:
                async with self._http_session.request(
                    method, url, headers=headers, json=body
                ) as response:
                    status = response.status
                    text = await response.text()
                    retry_after_header = response.headers.get("Retry-After")
            except asyncio.TimeoutError as e:
                logger.error(f"{method} {url} timed out after {self.timeout}s")
                raise TransportTimeoutError(
                    f"{method} {url} timed out", timeout=self.timeout
                ) from e
            except aiohttp.ClientError as e:
                logger.error(f"{method} {url} failed: {e}")
                raise TransportError(f"Network error calling {url}: {e}") from e

            try:
                data = json.loads(text) if text else {}
            except ValueError:
                data = None

            if status == 429:
                try:
                    retry_after = int(retry_after_header) if retry_after_header else None
                except ValueError:
                    retry_after = None
                logger.error(f"Rate limited by ABHA on {url} (429), retry after {retry_after}s")
                raise RateLimitError(f"Rate limited on {url}", retry_after=retry_after)

            if not 200 <= status < 300:
                remote_code, remote_message = extract_remote_error(data)
                logger.error(f"{method} {url} failed: {status} {remote_code or ''}".rstrip())
                if data is None:
                    logger.debug(f"Error details: {text[:200]}...")
                raise TransportError(
                    f"{method} {url} failed with status {status}"
                    + (f": {remote_message}" if remote_message else ""),
                    code=_status_error_code(status),
                    status=status,
                    remote_code=remote_code,
                    remote_message=remote_message,
                )

            if data is None:
                raise ProtocolViolation(
                    f"{method} {url} returned a non-JSON body", details={"status": status}
                )

            if self.debug and isinstance(data, dict):
                logger.debug(f"Response body: {mask_sensitive_dict(data)}")
            return TransportResponse(status=status, json=data)
        finally:
            request_id_ctx.reset(token)

"""Logging with Loguru."""

import contextvars
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

# REQUEST-ID of the ABHA call currently in flight
request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)

__all__ = ["request_id_ctx", "setup_logging"]


def _request_id_patcher(record: Dict[str, Any]) -> None:
    """
    Patch log records with request_id from context.

    Called by Loguru for each log record to inject the REQUEST-ID header of
    the current call into the record's extra fields.
    """
    record["extra"]["request_id"] = request_id_ctx.get() or "-"


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Setup Loguru logging for SDK consumers.

    The SDK itself only emits records through ``loguru.logger``; applications
    that do not configure Loguru themselves can call this once at startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Serialize file records as JSON lines
        log_file: Optional path of a rotating log file
    """
    # Remove default handler
    logger.remove()

    logger.configure(patcher=_request_id_patcher)

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<magenta>{extra[request_id]}</magenta> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    logger.add(
        sys.stderr,
        format=console_format,
        level=level,
        colorize=True,
    )

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        if json_format:
            logger.add(
                log_path,
                format="{message}",
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="zip",
                serialize=True,
            )
        else:
            logger.add(
                log_path,
                format=(
                    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[request_id]} | "
                    "{name}:{function}:{line} - {message}"
                ),
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="zip",
            )

    logger.debug(f"Logging configured at {level}")

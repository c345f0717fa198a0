"""
Logging configuration for the API.

Provides centralized logging setup with request tracking. Child loggers
(api.auth, api.movies, api.reviews) propagate to the "api" handlers.
"""

import logging
import os
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

# Request ID shared across the async call chain of one request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Add request_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def setup_api_logger(
    name: str = "api",
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Set up the API logger with file and console handlers.

    Args:
        name: Logger name
        log_dir: Directory for log files (defaults to $LOG_DIR or ./logs)
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    request_filter = RequestIdFilter()

    if log_dir is None:
        log_dir = Path(os.getenv("LOG_DIR", Path.cwd() / "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    file_handler.addFilter(request_filter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(request_filter)
    logger.addHandler(console_handler)

    return logger


def generate_request_id() -> str:
    """Generate a short unique request ID."""
    return uuid.uuid4().hex[:8]


def set_request_id(request_id: str) -> None:
    """Set the request ID in context."""
    request_id_var.set(request_id)


def level_for_status(status_code: int) -> int:
    """Server errors log as ERROR, client errors as WARNING."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def request_summary(method: str, path: str, status_code: int, duration_ms: float, user: Any = None) -> str:
    """
    One-line completion message for a request.

    ``user`` is the token subject the auth dependency attached to the
    request, if any; anonymous requests log ``user=-``.
    """
    username = getattr(user, "username", None) or "-"
    return (
        f"Request completed: {method} {path} "
        f"status={status_code} duration={duration_ms:.2f}ms user={username}"
    )


logger = setup_api_logger()

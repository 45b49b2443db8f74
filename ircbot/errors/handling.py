from __future__ import annotations

import logging

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    InternalError,
    NetworkError,
    TransportClosedError,
    TransportConnectError,
)


def error_type_for(error: BaseException) -> str:
    """Map an exception onto the category used for aggregation."""
    if isinstance(error, TransportConnectError):
        return "connect"
    if isinstance(error, TransportClosedError):
        return "transport"
    if isinstance(error, NetworkError | OSError):
        return "network"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(
    message: str,
    error: BaseException,
    context: dict | None = None,
    level: int = logging.ERROR,
) -> None:
    """Logs an error message with the associated exception details.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
        level: Logging level (default: ERROR).
    """
    merged: dict = dict(getattr(error, "data", {}) or {})
    if context:
        merged.update(context)
    log_structured_error(
        error_type=error_type_for(error),
        message=f"{message}: {error}",
        exception=error,
        context=merged or None,
        level=level,
    )

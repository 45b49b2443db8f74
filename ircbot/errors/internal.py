"""Centralized internal error hierarchy.

Transport code wraps raw ``OSError`` / timeout failures in these classes so the
read loop and the keepalive driver can tell a dead connection apart from a
bug in a handler.

Classes:
  InternalError          – Base for all internal errors.
  NetworkError           – Transport level failures.
  TransportConnectError  – The connection could not be opened.
  TransportClosedError   – The connection broke or closed mid-session.
  ConfigError            – Configuration could not be loaded or validated.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors."""


class TransportConnectError(NetworkError):
    """Raised when the transport fails to open.

    Fatal to the session; no automatic retry is attempted.
    """


class TransportClosedError(NetworkError):
    """Raised when a read or write fails on an open transport.

    Terminates the loop that observed it (read loop or keepalive driver).
    """


class ConfigError(InternalError):
    """Raised when configuration is missing or invalid."""


__all__ = [
    "InternalError",
    "NetworkError",
    "TransportConnectError",
    "TransportClosedError",
    "ConfigError",
]

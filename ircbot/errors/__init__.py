"""Error hierarchy and error-logging helpers."""

from .handling import log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigError,
    InternalError,
    NetworkError,
    TransportClosedError,
    TransportConnectError,
)

__all__ = [
    "InternalError",
    "NetworkError",
    "TransportConnectError",
    "TransportClosedError",
    "ConfigError",
    "log_error",
]

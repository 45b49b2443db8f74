"""IRC subsystem package.

Transport, framing, dispatch and keepalive modules. The session bootstrap
lives in ``session`` and is imported from there directly.
"""

from .dispatcher import IRCDispatcher  # noqa: F401
from .keepalive import IRCKeepalive  # noqa: F401
from .parser import ClassifiedEvent, EventCategory, classify  # noqa: F401
from .transport import IRCTransport  # noqa: F401
from .uptime import UptimeClock  # noqa: F401

__all__ = [
    "ClassifiedEvent",
    "EventCategory",
    "IRCDispatcher",
    "IRCKeepalive",
    "IRCTransport",
    "UptimeClock",
    "classify",
]

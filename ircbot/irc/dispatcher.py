"""Routes classified events to their registered handlers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType

from ..errors import TransportClosedError
from ..logs.logger import logger
from .parser import ClassifiedEvent, EventCategory

EventHandler = Callable[[ClassifiedEvent], Awaitable[None]]


class IRCDispatcher:
    """Fixed category -> handler table, consulted one event at a time.

    The table is copied and frozen at construction; there is no runtime
    re-registration. ``dispatch`` awaits the handler before returning, so
    events are handled strictly in the order the read loop produces them.
    """

    def __init__(
        self,
        handlers: Mapping[EventCategory, EventHandler],
        *,
        user: str | None = None,
    ) -> None:
        self.handlers: Mapping[EventCategory, EventHandler] = MappingProxyType(
            dict(handlers)
        )
        self.user = user
        self.dispatched = 0
        self.failures = 0

    async def dispatch(self, event: ClassifiedEvent) -> bool:
        """Run the handler registered for ``event.category``.

        Returns True when a handler ran. Transport errors propagate so the read
        loop can stop; any other handler failure is logged and swallowed.
        """
        handler = self.handlers.get(event.category)
        if handler is None:
            logger.log_event(
                "irc",
                "unhandled_event",
                level=logging.DEBUG,
                user=self.user,
                category=event.category.name,
            )
            return False
        self.dispatched += 1
        try:
            await handler(event)
        except TransportClosedError:
            raise
        except Exception as e:  # noqa: BLE001
            self.failures += 1
            logger.log_event(
                "irc",
                "handler_error",
                level=logging.ERROR,
                user=self.user,
                category=event.category.name,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
        return True

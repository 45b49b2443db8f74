"""Periodic liveness signal sent to the server."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from ..constants import KEEPALIVE_INTERVAL_SECONDS
from ..errors import TransportClosedError
from ..logs.logger import logger
from .messages import ping_line
from .transport import IRCTransport


class IRCKeepalive:
    """Writes ``PING :<host>`` through the shared transport every interval.

    The first signal goes out immediately. A write failure ends the loop;
    the driver never retries on a closed transport.
    """

    def __init__(
        self,
        transport: IRCTransport,
        host: str,
        interval: float = KEEPALIVE_INTERVAL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
        user: str | None = None,
    ) -> None:
        self.transport = transport
        self.host = host
        self.interval = interval
        self.user = user
        self._clock = clock
        self.last_sent: float | None = None
        self.sent_count = 0
        self.error: TransportClosedError | None = None

    def seconds_since_last(self) -> float | None:
        if self.last_sent is None:
            return None
        return self._clock() - self.last_sent

    async def send_once(self) -> None:
        await self.transport.write_line(ping_line(self.host))
        self.last_sent = self._clock()
        self.sent_count += 1
        logger.log_event(
            "keepalive", "sent", level=logging.DEBUG, user=self.user, host=self.host
        )

    async def run(self) -> None:
        """Loop until the transport fails or the task is cancelled."""
        logger.log_event(
            "keepalive",
            "start",
            level=logging.DEBUG,
            user=self.user,
            interval=self.interval,
        )
        try:
            while True:
                await self.send_once()
                await asyncio.sleep(self.interval)
        except TransportClosedError as e:
            self.error = e
            logger.log_event(
                "keepalive",
                "stopped",
                level=logging.WARNING,
                user=self.user,
                error=str(e),
            )
        except asyncio.CancelledError:
            logger.log_event(
                "keepalive", "cancelled", level=logging.DEBUG, user=self.user
            )
            raise

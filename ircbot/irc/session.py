"""Session bootstrap: handshake, keepalive task and the read loop."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import datetime
from enum import Enum, auto
from typing import Any

from ..bot.handlers import BotHandlers, local_now
from ..config.model import BotConfig
from ..errors import TransportClosedError, TransportConnectError, log_error
from ..logs.logger import logger
from .dispatcher import IRCDispatcher
from .keepalive import IRCKeepalive
from .messages import handshake_lines, pong_line
from .parser import classify
from .transport import IRCTransport
from .uptime import UptimeClock

TransportFactory = Callable[..., Awaitable[IRCTransport]]


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    REGISTERING = auto()
    READY = auto()
    CLOSED = auto()


class IRCSession:  # pylint: disable=too-many-instance-attributes
    """One connection's lifetime, from open to end of stream.

    Two tasks share the transport: the read loop (this coroutine) and the
    keepalive driver. Handlers run inline in the read loop, one event at a time.
    """

    def __init__(
        self,
        config: BotConfig,
        *,
        transport_factory: TransportFactory = IRCTransport.open,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = local_now,
    ) -> None:
        self.config = config
        self.identity = config.identity
        self.state = ConnectionState.DISCONNECTED
        self.transport: IRCTransport | None = None
        self.keepalive: IRCKeepalive | None = None
        self._keepalive_task: asyncio.Task[None] | None = None
        self._transport_factory = transport_factory
        self._clock = clock
        self.uptime = UptimeClock(clock)
        self.handlers = BotHandlers(
            self.identity, self.send_line, self.uptime.elapsed, now=now
        )
        self.dispatcher = IRCDispatcher(
            self.handlers.registrations(), user=self.identity.nickname
        )
        self.lines_received = 0
        self.stop_reason: str | None = None

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.identity.nickname,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    async def send_line(self, line: str) -> None:
        if self.transport is None:
            raise TransportClosedError("Session has no open transport")
        await self.transport.write_line(line)

    async def connect(self) -> None:
        """Open the transport.

        Raises:
            TransportConnectError: If the server cannot be reached.
        """
        self._set_state(ConnectionState.CONNECTING)
        try:
            self.transport = await self._transport_factory(
                self.config.host,
                self.config.port,
                connect_timeout=self.config.connect_timeout,
                read_timeout=self.config.read_timeout,
                user=self.identity.nickname,
            )
        except TransportConnectError:
            self._set_state(ConnectionState.CLOSED)
            raise

    async def register(self) -> None:
        """Send USER, NICK and JOIN, in that order."""
        self._set_state(ConnectionState.REGISTERING)
        for line in handshake_lines(self.identity):
            await self.send_line(line)
        logger.log_event(
            "irc",
            "handshake_sent",
            user=self.identity.nickname,
            nickname=self.identity.nickname,
            channel=self.identity.channel,
        )

    def start_keepalive(self) -> asyncio.Task[None]:
        if self.transport is None:
            raise TransportClosedError("Session has no open transport")
        self.keepalive = IRCKeepalive(
            self.transport,
            self.config.host,
            self.config.keepalive_interval,
            clock=self._clock,
            user=self.identity.nickname,
        )
        self._keepalive_task = asyncio.create_task(
            self.keepalive.run(), name="irc-keepalive"
        )
        return self._keepalive_task

    async def start(self) -> None:
        """Connect, register and serve until the connection ends.

        Raises:
            TransportConnectError: If the connection cannot be opened. Errors
                after that point end the session without raising.
        """
        self.uptime.start()
        await self.connect()
        try:
            await self.register()
            self._set_state(ConnectionState.READY)
            self.start_keepalive()
            await self.read_loop()
        except TransportClosedError as e:
            self.stop_reason = str(e)
            log_error("Registration failed", e, level=logging.WARNING)
        finally:
            await self.stop()

    async def read_loop(self) -> None:
        """Read, classify and dispatch lines until the stream ends or breaks."""
        assert self.transport is not None
        while True:
            try:
                line = await self.transport.read_line()
                if line is None:
                    self.stop_reason = "end of stream"
                    logger.log_event(
                        "irc",
                        "end_of_stream",
                        level=logging.WARNING,
                        user=self.identity.nickname,
                    )
                    return
                await self.handle_line(line)
            except TransportClosedError as e:
                self.stop_reason = str(e)
                log_error("Read loop stopped", e, level=logging.WARNING)
                return

    async def handle_line(self, line: str) -> None:
        self.lines_received += 1
        logger.log_event(
            "irc",
            "raw",
            level=logging.DEBUG,
            user=self.identity.nickname,
            received_at=datetime.now().strftime("%H:%M:%S"),
            raw=line,
        )
        if self.config.answer_server_ping:
            await self._maybe_answer_ping(line)
        event = classify(line, self.identity)
        if event.verb is not None:
            logger.log_event(
                "irc",
                "verb",
                level=logging.DEBUG,
                user=self.identity.nickname,
                verb=event.verb,
            )
        await self.dispatcher.dispatch(event)

    async def _maybe_answer_ping(self, line: str) -> None:
        verb, _, rest = line.strip().partition(" ")
        if verb.upper() != "PING":
            return
        token = rest.strip() or self.config.host
        logger.log_event(
            "irc",
            "server_ping",
            level=logging.DEBUG,
            user=self.identity.nickname,
            token=token,
        )
        await self.send_line(pong_line(token))

    async def stop(self) -> None:
        task = self._keepalive_task
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if self.transport is not None:
            await self.transport.close()
        if self.state != ConnectionState.CLOSED:
            self._set_state(ConnectionState.CLOSED)
            logger.log_event(
                "irc",
                "session_closed",
                user=self.identity.nickname,
                uptime=self.uptime.elapsed(),
            )

    def get_health_snapshot(self) -> dict[str, Any]:
        keepalive = self.keepalive
        since_keepalive = keepalive.seconds_since_last() if keepalive else None
        return {
            "nickname": self.identity.nickname,
            "channel": self.identity.channel,
            "state": self.state.name,
            "uptime": self.uptime.elapsed(),
            "lines_received": self.lines_received,
            "events_dispatched": self.dispatcher.dispatched,
            "handler_failures": self.dispatcher.failures,
            "keepalive_sent": keepalive.sent_count if keepalive else 0,
            "time_since_keepalive": since_keepalive,
            "stop_reason": self.stop_reason,
        }


async def run_session(config: BotConfig, **kwargs: Any) -> IRCSession:
    """Run one session to completion and return it for inspection."""
    session = IRCSession(config, **kwargs)
    await session.start()
    return session

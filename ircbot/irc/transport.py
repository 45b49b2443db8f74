"""Line-oriented connection transport over an asyncio stream pair."""

from __future__ import annotations

import asyncio
import logging

from ..constants import CONNECT_TIMEOUT_SECONDS, LINE_ENCODING, LINE_TERMINATOR
from ..errors import TransportClosedError, TransportConnectError
from ..logs.logger import logger


class IRCTransport:
    """Owns the socket streams and exposes whole-line read and write.

    Every ``write_line`` call writes and drains under one lock, so concurrent
    writers (handlers in the read loop, the keepalive driver) never interleave
    inside a line and each line reaches the socket before the next starts.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        read_timeout: float | None = None,
        user: str | None = None,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.read_timeout = read_timeout
        self.user = user
        self._write_lock = asyncio.Lock()
        self._closed = False

    @classmethod
    async def open(
        cls,
        host: str,
        port: int,
        *,
        connect_timeout: float = CONNECT_TIMEOUT_SECONDS,
        read_timeout: float | None = None,
        user: str | None = None,
    ) -> IRCTransport:
        """Open a TCP connection to ``host:port``.

        Raises:
            TransportConnectError: On refusal, DNS failure or timeout.
        """
        logger.log_event("irc", "connect_start", user=user, host=host, port=port)
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=connect_timeout
            )
        except (OSError, TimeoutError) as e:
            logger.log_event(
                "irc",
                "connect_failed",
                level=logging.ERROR,
                user=user,
                host=host,
                port=port,
                error=str(e) or type(e).__name__,
            )
            raise TransportConnectError(
                f"Could not connect to {host}:{port}",
                data={"host": host, "port": port},
            ) from e
        logger.log_event(
            "irc", "connection_established", user=user, host=host, port=port
        )
        return cls(reader, writer, read_timeout=read_timeout, user=user)

    @property
    def closed(self) -> bool:
        return self._closed

    async def read_line(self) -> str | None:
        """Return the next line without its terminator, or None at end of stream.

        Raises:
            TransportClosedError: If the read fails or the read timeout elapses.
        """
        if self._closed:
            raise TransportClosedError("Transport is closed")
        try:
            if self.read_timeout:
                data = await asyncio.wait_for(
                    self._read_raw(), timeout=self.read_timeout
                )
            else:
                data = await self._read_raw()
        except TimeoutError as e:
            raise TransportClosedError(
                f"No data received for {self.read_timeout}s"
            ) from e
        except OSError as e:
            raise TransportClosedError(f"Read failed: {e}") from e
        if not data:
            return None
        return data.decode(LINE_ENCODING, errors="replace").rstrip("\r\n")

    async def _read_raw(self) -> bytes:
        """Read up to and including the next newline, dropping oversized lines."""
        while True:
            try:
                return await self.reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as e:
                return e.partial
            except asyncio.LimitOverrunError as e:
                size = await self._skip_oversized(e.consumed)
                logger.log_event(
                    "irc",
                    "oversized_line",
                    level=logging.WARNING,
                    user=self.user,
                    size=size,
                )

    async def _skip_oversized(self, pending: int) -> int:
        """Discard buffered bytes through the end of the current line."""
        skipped = 0
        while True:
            skipped += len(await self.reader.read(pending))
            try:
                tail = await self.reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as e:
                return skipped + len(e.partial)
            except asyncio.LimitOverrunError as e:
                pending = e.consumed
                continue
            return skipped + len(tail)

    async def write_line(self, text: str) -> None:
        """Write one protocol line and flush it immediately.

        Raises:
            TransportClosedError: If the transport is closed or the write fails.
        """
        payload = f"{text}{LINE_TERMINATOR}".encode(LINE_ENCODING)
        async with self._write_lock:
            if self._closed or self.writer.is_closing():
                raise TransportClosedError("Transport is closed")
            try:
                self.writer.write(payload)
                await self.writer.drain()
            except (OSError, RuntimeError) as e:
                raise TransportClosedError(f"Write failed: {e}") from e
        logger.log_event("irc", "send", level=logging.DEBUG, user=self.user, line=text)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.writer.close()
            await self.writer.wait_closed()
        except OSError as e:
            logger.log_event(
                "irc",
                "transport_closed",
                level=logging.DEBUG,
                user=self.user,
                error=str(e),
            )
            return
        logger.log_event("irc", "transport_closed", level=logging.DEBUG, user=self.user)

"""End-to-end session against a real TCP server on localhost."""

import asyncio

import pytest

from ircbot.irc.session import ConnectionState, IRCSession
from tests.fixtures.irc_fixtures import LoopbackIRCServer, make_config


def not_keepalive(line: str) -> bool:
    return line != "PING :127.0.0.1"


@pytest.mark.asyncio
async def test_full_session_over_loopback():
    server = LoopbackIRCServer()
    await server.start()
    config = make_config(host="127.0.0.1", port=server.port, keepalive_interval=0.05)
    session = IRCSession(config)
    task = asyncio.create_task(session.start())
    try:
        handshake = [await server.expect(not_keepalive) for _ in range(3)]
        assert handshake == [
            "USER aebot 0 * :An anti-effort IRC bot!",
            "NICK AEBOT",
            "JOIN #antieffortbot",
        ]
        assert session.state is ConnectionState.READY

        await server.send(":alice!a@host JOIN #antieffortbot")
        assert (await server.expect(not_keepalive)).startswith(
            "PRIVMSG #antieffortbot :Greetings, alice"
        )

        await server.send("PING :irc.local")
        assert await server.expect(not_keepalive) == "PONG :irc.local"

        await server.send(":alice!a@host PRIVMSG AEBOT :!bot")
        assert await server.expect(not_keepalive) == "PRIVMSG #antieffortbot :Yes?"

        # Keepalive keeps running alongside the read loop
        assert await server.expect(lambda line: line == "PING :127.0.0.1")

        await server.hang_up()
        await asyncio.wait_for(task, 2)
        assert session.state is ConnectionState.CLOSED
        assert session.keepalive is not None and session.keepalive.sent_count >= 1
    finally:
        if not task.done():
            task.cancel()
        await server.close()

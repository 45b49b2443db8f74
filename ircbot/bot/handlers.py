"""Event handlers binding the reply logic to the outbound line writer."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..config.model import SessionIdentity
from ..irc.dispatcher import EventHandler
from ..irc.messages import privmsg_line
from ..irc.parser import ClassifiedEvent, EventCategory
from ..logs.logger import logger
from .commands import command_reply, greet_reply, lament_reply, parse_command


def local_now() -> datetime:
    return datetime.now().astimezone()


class BotHandlers:
    """Greet, lament and command handlers for one session.

    Every reply goes to the configured channel, never to the sender.
    """

    def __init__(
        self,
        identity: SessionIdentity,
        send_line: Callable[[str], Awaitable[None]],
        uptime: Callable[[], float],
        *,
        now: Callable[[], datetime] = local_now,
    ) -> None:
        self.identity = identity
        self.send_line = send_line
        self.uptime = uptime
        self.now = now

    def registrations(self) -> dict[EventCategory, EventHandler]:
        return {
            EventCategory.JOIN: self.on_join,
            EventCategory.PART: self.on_part,
            EventCategory.CHANNEL_MESSAGE: self.on_channel_message,
        }

    async def say(self, text: str) -> None:
        logger.log_event(
            "bot",
            "reply",
            level=logging.DEBUG,
            user=self.identity.nickname,
            channel=self.identity.channel,
            text=text,
        )
        await self.send_line(privmsg_line(self.identity.channel, text))

    async def on_join(self, event: ClassifiedEvent) -> None:
        if event.source is None:
            return
        logger.log_event(
            "bot",
            "greet",
            user=self.identity.nickname,
            channel=self.identity.channel,
            handle=event.source,
        )
        await self.say(greet_reply(event.source, self.identity))

    async def on_part(self, event: ClassifiedEvent) -> None:
        logger.log_event(
            "bot",
            "lament",
            user=self.identity.nickname,
            channel=self.identity.channel,
            handle=event.source or "someone",
        )
        await self.say(lament_reply())

    async def on_channel_message(self, event: ClassifiedEvent) -> None:
        if event.payload is None:
            return
        addressed, sub_command = parse_command(event.payload)
        if addressed:
            logger.log_event(
                "bot",
                "command",
                user=self.identity.nickname,
                channel=self.identity.channel,
                source=event.source or "?",
                command=sub_command or "!bot",
            )
        reply = command_reply(event.payload, now=self.now(), uptime=self.uptime())
        if reply is not None:
            await self.say(reply)

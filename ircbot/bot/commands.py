"""Reply logic for the JOIN, PART and ``!bot`` command handlers.

Everything here is a pure function of its arguments; the clock readings are
passed in by the caller so replies can be computed for any instant.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from ..config.model import SessionIdentity
from ..constants import COMMAND_PREFIX
from ..irc.parser import irc_lower
from . import replies

SubCommand = Callable[[datetime, float], "str | None"]


def greet_reply(handle: str, identity: SessionIdentity) -> str:
    """Welcome a joining user, or announce ourselves when the joiner is us."""
    if irc_lower(handle) == irc_lower(identity.nickname):
        return replies.SELF_ANNOUNCEMENT
    return replies.GREETING.format(handle=handle, channel=identity.channel)


def lament_reply() -> str:
    return replies.FAREWELL


def format_time(now: datetime) -> str:
    if now.tzinfo is None:
        now = now.astimezone()
    return replies.TIME.format(time=now.strftime("%H:%M:%S"), zone=now.tzname())


def format_date(now: datetime) -> str:
    return replies.DATE.format(date=f"{now:%A, %B} {now.day}, {now.year}")


def format_uptime(elapsed: float) -> str:
    """Render whole minutes and seconds; the minutes clause is dropped at zero."""
    minutes, seconds = divmod(int(elapsed), 60)
    if minutes == 0:
        return replies.UPTIME_SECONDS.format(seconds=seconds)
    return replies.UPTIME_MINUTES.format(minutes=minutes, seconds=seconds)


def _weather(now: datetime, uptime: float) -> str | None:
    # No weather source is wired up; the command is accepted but stays silent.
    return None


SUB_COMMANDS: dict[str, SubCommand] = {
    "weather": _weather,
    "time": lambda now, uptime: format_time(now),
    "uptime": lambda now, uptime: format_uptime(uptime),
    "date": lambda now, uptime: format_date(now),
}


def parse_command(payload: str) -> tuple[bool, str | None]:
    """Split a payload into (addressed_to_bot, sub_command).

    ``(False, None)`` when the payload is not a ``!bot`` command, ``(True,
    None)`` for a bare ``!bot`` and ``(True, "")`` when only whitespace
    follows the prefix.
    """
    if not payload.startswith(COMMAND_PREFIX):
        return False, None
    rest = payload[len(COMMAND_PREFIX):]
    if not rest:
        return True, None
    if not rest[0].isspace():
        # "!botany" and friends are ordinary chat
        return False, None
    tokens = rest.split()
    return True, tokens[0].lower() if tokens else ""


def command_reply(payload: str, *, now: datetime, uptime: float) -> str | None:
    """Compute the channel reply for a message payload, if any.

    Args:
        payload: Message text addressed to the channel or the bot.
        now: Current local time.
        uptime: Seconds since the session started.

    Returns:
        The reply text, or None when the bot stays silent.
    """
    addressed, sub_command = parse_command(payload)
    if not addressed:
        return None
    if sub_command is None:
        return replies.YES
    if not sub_command:
        return replies.NOT_UNDERSTOOD
    handler = SUB_COMMANDS.get(sub_command)
    if handler is None:
        return replies.UNRECOGNIZED
    return handler(now, uptime)

"""Outbound protocol line builders."""

from __future__ import annotations

from ..config.model import SessionIdentity

# RFC 2812 USER mode bitmask: bit 3 requests +i
USER_MODE_INVISIBLE = 8


def _single_line(text: str) -> str:
    # Reply text must stay on one protocol line.
    return text.replace("\r", " ").replace("\n", " ")


def user_line(identity: SessionIdentity) -> str:
    mode = USER_MODE_INVISIBLE if identity.invisible else 0
    return f"USER {identity.username} {mode} * :{identity.realname}"


def nick_line(identity: SessionIdentity) -> str:
    return f"NICK {identity.nickname}"


def join_line(channel: str) -> str:
    return f"JOIN {channel}"


def ping_line(host: str) -> str:
    return f"PING :{host}"


def pong_line(token: str) -> str:
    return f"PONG :{token.lstrip(':')}"


def privmsg_line(target: str, text: str) -> str:
    return f"PRIVMSG {target} :{_single_line(text)}"


def handshake_lines(identity: SessionIdentity) -> list[str]:
    """Registration sequence sent right after connecting, in wire order."""
    return [user_line(identity), nick_line(identity), join_line(identity.channel)]

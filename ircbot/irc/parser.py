"""Inbound line framing and classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..config.model import SessionIdentity


class EventCategory(Enum):
    JOIN = "JOIN"
    PART = "PART"
    CHANNEL_MESSAGE = "PRIVMSG"
    OTHER = "OTHER"


_VERB_CATEGORIES: dict[str, EventCategory] = {
    "JOIN": EventCategory.JOIN,
    "PART": EventCategory.PART,
    "PRIVMSG": EventCategory.CHANNEL_MESSAGE,
}


@dataclass(frozen=True, slots=True)
class ClassifiedEvent:
    """One inbound line after classification.

    Attributes:
        category: Which handler (if any) the event is routed to.
        raw: The line as received, terminator stripped.
        verb: Token at index 1, or None for lines too short to carry one.
        source: Handle of the originating user, when the line has a prefix.
        payload: Message text of a PRIVMSG addressed to the channel or the bot.
    """

    category: EventCategory
    raw: str
    verb: str | None = None
    source: str | None = None
    payload: str | None = None


_RFC1459_FOLD = str.maketrans("[]\\~", "{}|^")


def irc_lower(text: str) -> str:
    """Case-fold by RFC 1459 rules ({}|^ are the lowercase forms of []\\~)."""
    return text.lower().translate(_RFC1459_FOLD)


def extract_handle(prefix: str) -> str | None:
    """Return the nick part of a ``:nick!user@host`` prefix token."""
    if not prefix.startswith(":") or len(prefix) < 2:
        return None
    nick, _, _ = prefix[1:].partition("!")
    return nick or None


def extract_payload(raw_line: str, verb: str, identity: SessionIdentity) -> str | None:
    """Return the text after ``<target> :`` when target is our channel or nick."""
    _, _, after_verb = raw_line.partition(f" {verb} ")
    if not after_verb:
        return None
    target, sep, text = after_verb.lstrip(" ").partition(" :")
    if not sep:
        return None
    target = irc_lower(target.strip())
    if target not in (irc_lower(identity.channel), irc_lower(identity.nickname)):
        return None
    return text


def classify(raw_line: str, identity: SessionIdentity) -> ClassifiedEvent:
    """Classify one raw line; never raises for malformed input."""
    tokens = raw_line.split()
    if len(tokens) < 2:
        return ClassifiedEvent(category=EventCategory.OTHER, raw=raw_line)

    prefix, verb = tokens[0], tokens[1]
    category = _VERB_CATEGORIES.get(verb.upper(), EventCategory.OTHER)
    source = extract_handle(prefix)
    payload = None
    if category is EventCategory.CHANNEL_MESSAGE:
        payload = extract_payload(raw_line, verb, identity)
    return ClassifiedEvent(
        category=category, raw=raw_line, verb=verb, source=source, payload=payload
    )

"""Classification of inbound lines."""

import pytest

from ircbot.irc.messages import privmsg_line
from ircbot.irc.parser import (
    EventCategory,
    classify,
    extract_handle,
    extract_payload,
    irc_lower,
)


@pytest.mark.parametrize("line", ["", "   ", "PING", "JUNK"])
def test_short_lines_are_other(identity, line):
    event = classify(line, identity)
    assert event.category is EventCategory.OTHER
    assert event.verb is None
    assert event.raw == line


def test_server_ping_is_not_a_channel_event(identity):
    # The verb is read from the second token; an unprefixed PING carries none.
    event = classify("PING :irc.example.net", identity)
    assert event.category is EventCategory.OTHER


def test_numeric_reply_is_other_with_server_source(identity):
    event = classify(":irc.example.net 001 AEBOT :Welcome", identity)
    assert event.category is EventCategory.OTHER
    assert event.verb == "001"
    assert event.source == "irc.example.net"


@pytest.mark.parametrize(
    "line",
    [
        ":alice!alice@host JOIN #antieffortbot",
        ":alice!alice@host JOIN :#antieffortbot",
    ],
)
def test_join(identity, line):
    event = classify(line, identity)
    assert event.category is EventCategory.JOIN
    assert event.source == "alice"
    assert event.payload is None


def test_part(identity):
    event = classify(":bob!b@host PART #antieffortbot :see ya", identity)
    assert event.category is EventCategory.PART
    assert event.source == "bob"


def test_channel_message_payload(identity):
    event = classify(":alice!a@host PRIVMSG #antieffortbot :!bot time", identity)
    assert event.category is EventCategory.CHANNEL_MESSAGE
    assert event.payload == "!bot time"
    assert event.source == "alice"


def test_payload_keeps_later_colons(identity):
    event = classify(":alice!a@host PRIVMSG #antieffortbot :hi :) there", identity)
    assert event.payload == "hi :) there"


def test_channel_target_is_case_insensitive(identity):
    event = classify(":alice!a@host PRIVMSG #AntiEffortBot :hello", identity)
    assert event.payload == "hello"


def test_private_message_to_bot_has_payload(identity):
    event = classify(":alice!a@host PRIVMSG aebot :!bot", identity)
    assert event.category is EventCategory.CHANNEL_MESSAGE
    assert event.payload == "!bot"


def test_message_for_other_target_has_no_payload(identity):
    event = classify(":alice!a@host PRIVMSG #elsewhere :!bot", identity)
    assert event.category is EventCategory.CHANNEL_MESSAGE
    assert event.payload is None


def test_lowercase_verb_is_recognised(identity):
    event = classify(":alice!a@host privmsg #antieffortbot :hey", identity)
    assert event.category is EventCategory.CHANNEL_MESSAGE
    assert event.verb == "privmsg"
    assert event.payload == "hey"


def test_privmsg_without_trailing_text(identity):
    event = classify(":alice!a@host PRIVMSG #antieffortbot", identity)
    assert event.category is EventCategory.CHANNEL_MESSAGE
    assert event.payload is None


def test_outbound_message_classifies_back_to_its_text(identity):
    text = "Greetings: how are you? :)"
    line = ":AEBOT!aebot@host " + privmsg_line(identity.channel, text)
    event = classify(line, identity)
    assert event.category is EventCategory.CHANNEL_MESSAGE
    assert event.payload == text


@pytest.mark.parametrize(
    "prefix,expected",
    [
        (":alice!alice@host", "alice"),
        (":irc.example.net", "irc.example.net"),
        ("alice!alice@host", None),
        (":", None),
        (":!user@host", None),
    ],
)
def test_extract_handle(prefix, expected):
    assert extract_handle(prefix) == expected


def test_extract_payload_requires_verb(identity):
    assert extract_payload(":a!b@c NOTICE #antieffortbot :x", "PRIVMSG", identity) is None


def test_irc_lower_folds_rfc1459_specials():
    assert irc_lower("[Foo]\\~") == "{foo}|^"

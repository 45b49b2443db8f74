import logging

import pytest

from ircbot.logs.logger import BotLogger


@pytest.fixture
def bot_logger(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    return BotLogger("ircbot.test")


def test_renders_catalogued_template(bot_logger, caplog):
    with caplog.at_level(logging.INFO, logger="ircbot.test"):
        bot_logger.log_event("bot", "greet", user="AEBOT", channel="#c", handle="alice")
    assert "👋 Greeting alice" in caplog.text
    assert "[AEBOT#c" in caplog.text


def test_unknown_event_falls_back_to_name(bot_logger, caplog):
    with caplog.at_level(logging.INFO, logger="ircbot.test"):
        bot_logger.log_event("some_domain", "odd_action")
    assert "some domain: odd action" in caplog.text


def test_missing_placeholder_logs_raw_template(bot_logger, caplog):
    with caplog.at_level(logging.INFO, logger="ircbot.test"):
        bot_logger.log_event("bot", "greet")
    assert "Greeting {handle}" in caplog.text


def test_explicit_human_text_wins(bot_logger, caplog):
    with caplog.at_level(logging.INFO, logger="ircbot.test"):
        bot_logger.log_event("bot", "greet", human="custom text", handle="x")
    assert "custom text" in caplog.text


def test_disabled_level_is_skipped(bot_logger, caplog):
    bot_logger.set_level(logging.INFO)
    with caplog.at_level(logging.DEBUG):
        bot_logger.log_event("irc", "send", level=logging.DEBUG, line="NICK x")
    assert caplog.records == []


def test_debug_format_includes_event_and_context(bot_logger, caplog, monkeypatch):
    monkeypatch.setenv("DEBUG", "1")
    bot_logger.set_level(logging.DEBUG)
    with caplog.at_level(logging.DEBUG, logger="ircbot.test"):
        bot_logger.log_event("bot", "greet", user="AEBOT", handle="alice")
    message = caplog.records[-1].getMessage()
    assert message.startswith("bot_greet")
    assert "(handle=alice)" in message


def test_prefix_defaults_to_system_and_is_padded():
    prefix = BotLogger._build_prefix(None, None)
    assert prefix.startswith("[system")
    assert len(prefix) == BotLogger.PREFIX_WIDTH + 2

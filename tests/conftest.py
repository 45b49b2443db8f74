import logging
import os

import pytest

from ircbot.config import SessionIdentity
from ircbot.logging_config import error_aggregator

from tests.fixtures.irc_fixtures import FakeWriter, make_config

# Keep environment overrides from leaking into config tests
for _name in (
    "IRCBOT_HOST",
    "IRCBOT_PORT",
    "IRCBOT_NICK",
    "IRCBOT_USERNAME",
    "IRCBOT_REALNAME",
    "IRCBOT_CHANNEL",
    "IRCBOT_INVISIBLE",
    "IRCBOT_CONF_FILE",
):
    os.environ.pop(_name, None)


@pytest.fixture
def identity() -> SessionIdentity:
    return SessionIdentity(
        nickname="AEBOT",
        username="aebot",
        realname="An anti-effort IRC bot!",
        channel="#antieffortbot",
    )


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def writer() -> FakeWriter:
    return FakeWriter()


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    """Reset process-wide error counts between tests."""
    error_aggregator.clear()
    yield
    error_aggregator.clear()


@pytest.fixture
def preserve_root_logging():
    """Restore root handlers after tests that reconfigure logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)

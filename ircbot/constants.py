"""
Configuration constants for the antieffort IRC bot

Each constant can be overridden by setting an environment variable with the
same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Falls back to ``default`` when the variable is unset or not an integer.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Falls back to ``default`` when the variable is unset or not a float.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Connection defaults
DEFAULT_HOST = os.getenv("IRCBOT_DEFAULT_HOST", "avarice.az.us.synirc.net")
DEFAULT_PORT = _get_env_int("IRCBOT_DEFAULT_PORT", 6666)
DEFAULT_CHANNEL = "#antieffortbot"

# Identity defaults
DEFAULT_NICKNAME = "AEBOT"
DEFAULT_USERNAME = "aebot"
DEFAULT_REALNAME = "An anti-effort IRC bot!"

# Timing
KEEPALIVE_INTERVAL_SECONDS = _get_env_float(
    "KEEPALIVE_INTERVAL_SECONDS", 15.0
)  # Seconds between PING signals to the server
CONNECT_TIMEOUT_SECONDS = _get_env_float(
    "CONNECT_TIMEOUT_SECONDS", 30.0
)  # Max seconds to wait for the TCP connection
READ_TIMEOUT_SECONDS = _get_env_float(
    "READ_TIMEOUT_SECONDS", 0.0
)  # Per-read timeout; 0 waits forever

# Protocol
LINE_TERMINATOR = "\r\n"
LINE_ENCODING = "utf-8"
COMMAND_PREFIX = "!bot"

# Config file
DEFAULT_CONFIG_FILE = "ircbot.conf"

"""Bot behaviour: canned replies, command parsing and event handlers."""

from .commands import command_reply, greet_reply, lament_reply  # noqa: F401
from .handlers import BotHandlers  # noqa: F401

__all__ = ["BotHandlers", "command_reply", "greet_reply", "lament_reply"]

"""Configuration package exports."""

from .loader import ConfigLoader, load_config  # noqa: F401
from .model import BotConfig, SessionIdentity  # noqa: F401

__all__ = ["BotConfig", "SessionIdentity", "ConfigLoader", "load_config"]

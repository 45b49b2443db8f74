"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..constants import DEFAULT_CONFIG_FILE
from ..errors import ConfigError
from ..logs.logger import logger
from .model import BotConfig

# Environment variable -> config key
ENV_KEYS: dict[str, str] = {
    "IRCBOT_HOST": "host",
    "IRCBOT_PORT": "port",
    "IRCBOT_NICK": "nickname",
    "IRCBOT_USERNAME": "username",
    "IRCBOT_REALNAME": "realname",
    "IRCBOT_CHANNEL": "channel",
    "IRCBOT_INVISIBLE": "invisible",
}


class ConfigLoader:
    """Merges file, environment and explicit overrides into a ``BotConfig``.

    Precedence, lowest first: defaults, JSON file, environment, overrides.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def config_path(self, path: str | os.PathLike[str] | None = None) -> Path:
        if path is not None:
            return Path(path)
        return Path(self.environ.get("IRCBOT_CONF_FILE", DEFAULT_CONFIG_FILE))

    def load_file(self, path: Path) -> dict[str, Any]:
        """Read the JSON config file; a missing file yields an empty mapping."""
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.log_event(
                "config", "file_missing", level=logging.DEBUG, path=str(path)
            )
            return {}
        except (OSError, ValueError) as e:
            raise ConfigError(
                f"Cannot read configuration file {path}: {e}", data={"path": str(path)}
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration file {path} must contain a JSON object",
                data={"path": str(path)},
            )
        return data

    def load_env(self) -> dict[str, Any]:
        return {
            key: self.environ[name]
            for name, key in ENV_KEYS.items()
            if self.environ.get(name)
        }

    def load(
        self,
        path: str | os.PathLike[str] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> BotConfig:
        """Load and validate the configuration.

        Raises:
            ConfigError: If the file is unreadable or validation fails.
        """
        config_path = self.config_path(path)
        merged: dict[str, Any] = self._flatten(self.load_file(config_path))
        merged.update(self.load_env())
        if overrides:
            merged.update({k: v for k, v in overrides.items() if v is not None})
        try:
            config = BotConfig.from_dict(merged)
        except ValidationError as e:
            logger.log_event("config", "invalid", level=logging.ERROR, error=str(e))
            raise ConfigError(f"Invalid configuration: {e}") from e
        logger.log_event(
            "config", "loaded", level=logging.DEBUG, source=str(config_path)
        )
        return config

    @staticmethod
    def _flatten(data: Mapping[str, Any]) -> dict[str, Any]:
        flat = dict(data)
        identity = flat.pop("identity", None)
        if isinstance(identity, Mapping):
            for key, value in identity.items():
                flat.setdefault(key, value)
        return flat


def load_config(
    path: str | os.PathLike[str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> BotConfig:
    """Module-level convenience wrapper around ``ConfigLoader.load``."""
    return ConfigLoader().load(path, overrides)

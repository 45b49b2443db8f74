from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import (
    CONNECT_TIMEOUT_SECONDS,
    DEFAULT_CHANNEL,
    DEFAULT_HOST,
    DEFAULT_NICKNAME,
    DEFAULT_PORT,
    DEFAULT_REALNAME,
    DEFAULT_USERNAME,
    KEEPALIVE_INTERVAL_SECONDS,
    READ_TIMEOUT_SECONDS,
)

# No whitespace, no leading ':' and no NUL/CR/LF: anything else is a valid
# middle parameter on the wire.
_TOKEN_RE = re.compile(r"^[^\s:\x00][^\s\x00]*$")


def _validate_token(value: str, field: str) -> str:
    value = value.strip()
    if not _TOKEN_RE.match(value):
        raise ValueError(f"{field} must be a single IRC token, got {value!r}")
    return value


class SessionIdentity(BaseModel):
    """Who the bot is and where it sits.

    Frozen: set once before the connection opens and never mutated.

    Attributes:
        nickname: Nick claimed with NICK and compared against JOIN sources.
        username: Ident sent with USER.
        realname: Free-form "real name" trailing parameter of USER.
        invisible: Whether USER requests the invisible (+i) mode.
        channel: The single channel joined and replied to.
    """

    model_config = ConfigDict(frozen=True)

    nickname: str = Field(default=DEFAULT_NICKNAME, min_length=1, max_length=30)
    username: str = Field(default=DEFAULT_USERNAME, min_length=1, max_length=30)
    realname: str = Field(default=DEFAULT_REALNAME, min_length=1)
    invisible: bool = False
    channel: str = Field(default=DEFAULT_CHANNEL, min_length=1)

    @field_validator("nickname")
    @classmethod
    def validate_nickname(cls, v: str) -> str:
        return _validate_token(v, "nickname")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _validate_token(v, "username")

    @field_validator("realname")
    @classmethod
    def validate_realname(cls, v: str) -> str:
        if "\r" in v or "\n" in v:
            raise ValueError("realname must not contain line breaks")
        return v

    @field_validator("channel")
    @classmethod
    def validate_channel(cls, v: str) -> str:
        """Ensure the channel carries a prefix ('#' added when missing)."""
        v = _validate_token(v, "channel")
        if v[0] not in "#&+!":
            v = f"#{v}"
        return v


class BotConfig(BaseModel):
    """Complete runtime configuration for one session."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default=DEFAULT_HOST, min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    identity: SessionIdentity = Field(default_factory=SessionIdentity)
    keepalive_interval: float = Field(default=KEEPALIVE_INTERVAL_SECONDS, gt=0)
    connect_timeout: float = Field(default=CONNECT_TIMEOUT_SECONDS, gt=0)
    read_timeout: float | None = Field(default=READ_TIMEOUT_SECONDS or None, gt=0)
    answer_server_ping: bool = True

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        return _validate_token(v, "host")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BotConfig:
        """Build a config from a flat or nested mapping.

        Identity fields may be given either under an ``identity`` key or at the
        top level (``nickname``, ``channel`` ...).
        """
        norm = dict(data)
        identity = dict(norm.pop("identity", None) or {})
        for key in SessionIdentity.model_fields:
            if key in norm:
                identity.setdefault(key, norm.pop(key))
        norm["identity"] = identity
        return cls.model_validate(norm)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

"""Command line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import Any

from .config import BotConfig, load_config
from .errors import ConfigError, TransportConnectError, log_error
from .irc.session import run_session
from .logging_config import LoggerConfigurator
from .logs.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ircbot",
        description="Single-channel IRC bot that greets, laments and answers !bot commands.",
    )
    parser.add_argument("host", nargs="?", help="IRC server host to connect to")
    parser.add_argument("port", nargs="?", type=int, help="IRC server port")
    parser.add_argument("-n", "--nick", dest="nickname", help="Nickname to claim")
    parser.add_argument("-c", "--channel", help="Channel to join")
    parser.add_argument(
        "--config",
        help="JSON configuration file (default: $IRCBOT_CONF_FILE or ircbot.conf)",
    )
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Validate the configuration and exit",
    )
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "host": args.host,
        "port": args.port,
        "nickname": args.nickname,
        "channel": args.channel,
    }


async def main(config: BotConfig) -> None:
    """Run one bot session until the server closes the connection."""
    logger.log_event("app", "start")
    try:
        await run_session(config)
    finally:
        logger.log_event("app", "shutdown")


def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    LoggerConfigurator().configure()

    try:
        config = load_config(args.config, overrides_from_args(args))
    except ConfigError as e:
        log_error("Configuration error", e)
        return 1

    if args.health_check:
        logger.log_event(
            "app",
            "health_check_ok",
            host=config.host,
            port=config.port,
            channel=config.identity.channel,
            nickname=config.identity.nickname,
        )
        return 0

    try:
        asyncio.run(main(config))
    except TransportConnectError as e:
        log_error("Connection failed", e, level=logging.CRITICAL)
        return 1
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
    return 0


if __name__ == "__main__":
    sys.exit(run())

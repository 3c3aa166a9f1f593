"""Command-line entry point: ``python -m lexbot``."""

import argparse
import asyncio
from pathlib import Path

from loguru import logger

from lexbot import __logo__, __version__
from lexbot.app import serve
from lexbot.bus.queue import MessageBus
from lexbot.channels.console import ConsoleChannel
from lexbot.config.loader import load_config
from lexbot.errors import ConfigError
from lexbot.log import setup_logging


def main() -> int:
    parser = argparse.ArgumentParser(description="Relay chat messages to a conversational backend")
    parser.add_argument("--config", type=Path, help="path to a JSON config file")
    parser.add_argument("--user", default="user", help="sender id for console messages")
    parser.add_argument("--room", default="console", help="room id for console messages")
    parser.add_argument("--version", action="version", version=f"{__logo__} lexbot {__version__}")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        setup_logging()
        logger.error(str(e))
        return 1

    setup_logging(config.log_level)

    bus = MessageBus()
    channel = ConsoleChannel(bus, user_id=args.user, room_id=args.room)
    try:
        return asyncio.run(serve(config, channel, bus))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())

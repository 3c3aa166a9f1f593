"""Console channel: read messages from stdin, print replies to stdout.

A local stand-in for a chat platform, useful for trying a backend by hand.
Every line typed is a message from ``user_id`` in ``room_id``.
"""

import asyncio
import sys
from typing import TextIO

from loguru import logger

from lexbot.bus.events import OutboundMessage
from lexbot.bus.queue import MessageBus
from lexbot.channels.base import BaseChannel


class ConsoleChannel(BaseChannel):

    name = "console"

    def __init__(
        self,
        bus: MessageBus,
        user_id: str = "user",
        room_id: str = "console",
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ):
        super().__init__(bus)
        self.user_id = user_id
        self.room_id = room_id
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    async def start(self) -> None:
        """Read lines until EOF or :meth:`stop`."""
        self._running = True
        loop = asyncio.get_running_loop()
        logger.info(f"Console channel reading as {self.user_id} in {self.room_id}")

        while self._running:
            line = await loop.run_in_executor(None, self._stdin.readline)
            if not line:
                break
            text = line.strip()
            if text:
                await self._handle_message(self.user_id, self.room_id, text)

        self._running = False

    async def stop(self) -> None:
        self._running = False

    async def send(self, msg: OutboundMessage) -> None:
        prefix = f"{msg.reply_to}: " if msg.reply_to else ""
        self._stdout.write(f"{prefix}{msg.text}\n")
        self._stdout.flush()

"""Base channel interface and outbound dispatch."""

import abc
import asyncio
from typing import Any

from loguru import logger

from lexbot.bus.events import InboundMessage, OutboundMessage
from lexbot.bus.queue import MessageBus


class BaseChannel(abc.ABC):
    """
    A chat transport.

    Subclasses receive platform events, turn them into
    :class:`InboundMessage` via :meth:`_handle_message`, and deliver
    :class:`OutboundMessage` in :meth:`send`.
    """

    name: str = "base"

    def __init__(self, bus: MessageBus):
        self.bus = bus
        self._running = False

    @abc.abstractmethod
    async def start(self) -> None:
        """Connect and start receiving messages."""

    @abc.abstractmethod
    async def stop(self) -> None:
        """Disconnect."""

    @abc.abstractmethod
    async def send(self, msg: OutboundMessage) -> None:
        """Deliver a message to the platform."""

    async def _handle_message(
        self,
        sender_id: str,
        room_id: str,
        text: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Publish a received message to the bus."""
        msg = InboundMessage(
            channel=self.name,
            sender_id=str(sender_id),
            room_id=str(room_id),
            text=text,
            metadata=metadata or {},
        )
        await self.bus.publish_inbound(msg)


class ChannelManager:
    """Routes outbound messages from the bus to their channel."""

    def __init__(self, bus: MessageBus, channels: list[BaseChannel] | None = None):
        self.bus = bus
        self.channels: dict[str, BaseChannel] = {c.name: c for c in channels or []}
        self._running = False

    async def dispatch_outbound(self) -> None:
        """Deliver outbound messages until :meth:`stop` is called."""
        self._running = True
        while self._running:
            try:
                msg = await asyncio.wait_for(self.bus.consume_outbound(), timeout=1.0)
            except asyncio.TimeoutError:
                continue

            try:
                await self._deliver(msg)
            finally:
                self.bus.outbound_done()

    async def _deliver(self, msg: OutboundMessage) -> None:
        channel = self.channels.get(msg.channel)
        if channel is None:
            logger.warning(f"Unknown channel {msg.channel!r}, dropping reply to {msg.room_id}")
            return
        try:
            await channel.send(msg)
        except Exception as e:
            logger.error(f"Error sending to {msg.channel}: {e}")

    def stop(self) -> None:
        self._running = False

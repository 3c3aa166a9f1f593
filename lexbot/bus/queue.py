"""Async message queue decoupling channels from the relay."""

import asyncio

from lexbot.bus.events import InboundMessage, OutboundMessage


class MessageBus:
    """
    Two asyncio queues: channels push inbound messages, the relay pushes
    outbound replies, and each side consumes the other's.
    """

    def __init__(self) -> None:
        self.inbound: asyncio.Queue[InboundMessage] = asyncio.Queue()
        self.outbound: asyncio.Queue[OutboundMessage] = asyncio.Queue()

    async def publish_inbound(self, msg: InboundMessage) -> None:
        await self.inbound.put(msg)

    async def consume_inbound(self) -> InboundMessage:
        return await self.inbound.get()

    def inbound_done(self) -> None:
        """Mark a consumed inbound message as fully dispatched."""
        self.inbound.task_done()

    async def publish_outbound(self, msg: OutboundMessage) -> None:
        await self.outbound.put(msg)

    async def consume_outbound(self) -> OutboundMessage:
        return await self.outbound.get()

    def outbound_done(self) -> None:
        """Mark a consumed outbound message as delivered (or dropped)."""
        self.outbound.task_done()

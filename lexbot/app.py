"""Wire configuration, brain, bus and backend into a running relay."""

import asyncio
from pathlib import Path

import httpx
from loguru import logger

from lexbot.agent.loop import RelayLoop
from lexbot.backend.client import BackendClient
from lexbot.brain.store import Brain
from lexbot.bus.dispatch import Dispatcher
from lexbot.bus.queue import MessageBus
from lexbot.channels.base import BaseChannel, ChannelManager
from lexbot.config.schema import Config
from lexbot.conversation.state import ConversationStore
from lexbot.errors import ConfigError
from lexbot.routing.base import MessageRouter
from lexbot.routing.filters import ActiveConversationFilter, IgnoredSenderFilter, TriggerFilter
from lexbot.routing.trigger import TriggerMatcher


def build_router(config: Config, conversations: ConversationStore) -> MessageRouter:
    """Filter chain: ignored senders, then active conversation, then trigger."""
    router = MessageRouter()
    router.add_filter(IgnoredSenderFilter(config.ignored_sender_ids))
    router.add_filter(ActiveConversationFilter(conversations))
    matcher = TriggerMatcher.from_pattern(config.start_pattern)
    router.add_filter(TriggerFilter(matcher, config.bot_name, config.bot_alias))
    return router


def create_relay(
    config: Config,
    bus: MessageBus,
    brain: Brain,
    dispatcher: Dispatcher | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RelayLoop | None:
    """
    Build the relay, or return None (after logging) when disabled.

    The host keeps running without a relay when ``backend_url`` is missing.
    """
    try:
        backend_url = config.require_backend_url()
    except ConfigError as e:
        logger.error(f"{e}; lex relay disabled")
        return None

    conversations = ConversationStore(brain, ttl=config.conversation_ttl)
    client = BackendClient(
        backend_url,
        api_key=config.api_key,
        timeout=config.http_timeout,
        transport=transport,
    )
    return RelayLoop(
        bus=bus,
        client=client,
        conversations=conversations,
        router=build_router(config, conversations),
        bot_name=config.bot_name,
        bot_alias=config.bot_alias,
        error_message=config.error_message,
        serialize_rooms=config.serialize_rooms,
        dispatcher=dispatcher,
    )


async def serve(config: Config, channel: BaseChannel, bus: MessageBus) -> int:
    """Run the relay against ``channel`` until the channel stops."""
    brain = Brain(Path(config.brain_path).expanduser() if config.brain_path else None)
    brain.load()

    relay = create_relay(config, bus, brain)
    if relay is None:
        return 1

    manager = ChannelManager(bus, [channel])
    relay_task = asyncio.create_task(relay.run())
    outbound_task = asyncio.create_task(manager.dispatch_outbound())
    try:
        await channel.start()
        # let queued messages and their replies get through
        await bus.inbound.join()
        await relay.drain()
        await bus.outbound.join()
    finally:
        relay.stop()
        manager.stop()
        relay_task.cancel()
        outbound_task.cancel()
        await asyncio.gather(relay_task, outbound_task, return_exceptions=True)
        await relay.client.aclose()
        brain.save()
    return 0

"""Relay loop: the per-message processing engine."""

import asyncio
import weakref

from loguru import logger

from lexbot.backend.client import BackendClient
from lexbot.backend.errors import ClientError
from lexbot.backend.interpreter import apply, interpret
from lexbot.backend.models import BackendRequest
from lexbot.bus.dispatch import Dispatcher, Listener, always
from lexbot.bus.events import InboundMessage, OutboundMessage
from lexbot.bus.queue import MessageBus
from lexbot.config.schema import DEFAULT_ERROR_MESSAGE
from lexbot.conversation.state import ConversationStore
from lexbot.routing.text import strip_mention
from lexbot.routing.base import MessageRouter


class RelayLoop:
    """
    The relay loop is the core processing engine.

    It:
    1. Receives messages from the bus
    2. Offers each to the registered listeners
    3. Routes: ignored sender / active conversation / start pattern
    4. Calls the backend
    5. Updates the room's conversation flag and sends the reply back

    Backend calls run as separate tasks so one slow call does not hold up
    the messages behind it.
    """

    def __init__(
        self,
        bus: MessageBus,
        client: BackendClient,
        conversations: ConversationStore,
        router: MessageRouter,
        bot_name: str = "lexbot",
        bot_alias: str | None = None,
        error_message: str = DEFAULT_ERROR_MESSAGE,
        serialize_rooms: bool = False,
        dispatcher: Dispatcher | None = None,
    ):
        self.bus = bus
        self.client = client
        self.conversations = conversations
        self.router = router
        self.bot_name = bot_name
        self.bot_alias = bot_alias
        self.error_message = error_message
        self.serialize_rooms = serialize_rooms
        self.dispatcher = dispatcher or Dispatcher()

        self._running = False
        self._tasks: set[asyncio.Task] = set()
        # Dropped once no message for the room holds or awaits it
        self._room_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

        # Filtering happens inside the handler, so it sees every message
        self.dispatcher.listen(always, self.handle, name="lex")

    async def run(self) -> None:
        """Run the relay loop, dispatching messages from the bus."""
        self._running = True
        logger.info("Relay loop started")

        while self._running:
            try:
                msg = await asyncio.wait_for(
                    self.bus.consume_inbound(),
                    timeout=1.0
                )
            except asyncio.TimeoutError:
                continue

            for listener in self.dispatcher.matching(msg):
                self._spawn(listener, msg)
            self.bus.inbound_done()

    def stop(self) -> None:
        """Stop the relay loop."""
        self._running = False
        logger.info("Relay loop stopping")

    async def drain(self) -> None:
        """Wait for every in-flight message to finish."""
        while self._tasks:
            pending = list(self._tasks)
            await asyncio.gather(*pending, return_exceptions=True)
            self._tasks.difference_update(pending)

    def _spawn(self, listener: Listener, msg: InboundMessage) -> None:
        task = asyncio.create_task(self._run_listener(listener, msg))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_listener(self, listener: Listener, msg: InboundMessage) -> None:
        try:
            response = await listener.handler(msg)
        except Exception:
            logger.exception(f"Listener {listener.name} failed on message from {msg.session_key}")
            return
        if response:
            await self.bus.publish_outbound(response)

    # ------------------------------------------------------------------
    # Per-message pipeline
    # ------------------------------------------------------------------

    async def handle(self, msg: InboundMessage) -> OutboundMessage | None:
        """
        Process a single inbound message.

        Returns:
            The reply, or None if the message was not for us or the
            backend had nothing to say.
        """
        if not self.serialize_rooms:
            return await self._process_message(msg)

        async with self._lock_for(msg.room_id):
            return await self._process_message(msg)

    def _lock_for(self, room_id: str) -> asyncio.Lock:
        lock = self._room_locks.get(room_id)
        if lock is None:
            lock = self._room_locks[room_id] = asyncio.Lock()
        return lock

    async def _process_message(self, msg: InboundMessage) -> OutboundMessage | None:
        if not self.router.should_respond(msg):
            return None

        text = strip_mention(msg.text, self.bot_name, self.bot_alias)
        preview = text[:80] + "..." if len(text) > 80 else text
        logger.info(f"Forwarding message from {msg.session_key}:{msg.sender_id}: {preview}")

        request = BackendRequest(
            text=text,
            sender=msg.sender_id,
            room=msg.room_id,
            channel=msg.channel,
        )
        try:
            response = await self.client.send(request)
        except ClientError as e:
            logger.warning(f"Backend call failed for {msg.session_key}: {e}")
            return self._reply(msg, self.error_message)

        # Transition first so the next message in the room sees it
        result = interpret(response)
        apply(result, self.conversations, msg.room_id)

        if result.reply is None:
            logger.debug(f"Backend returned no message for {msg.session_key}")
            return None

        preview = result.reply[:120] + "..." if len(result.reply) > 120 else result.reply
        logger.info(f"Reply to {msg.session_key}:{msg.sender_id}: {preview}")
        return self._reply(msg, result.reply)

    @staticmethod
    def _reply(msg: InboundMessage, text: str) -> OutboundMessage:
        return OutboundMessage(
            channel=msg.channel,
            room_id=msg.room_id,
            text=text,
            reply_to=msg.sender_id,
            metadata=dict(msg.metadata),
        )

    async def process_direct(
        self,
        text: str,
        sender_id: str = "user",
        room_id: str = "direct",
        channel: str = "cli",
    ) -> str:
        """
        Process a message directly, bypassing the bus.

        Returns:
            The reply text, or an empty string when there is none.
        """
        msg = InboundMessage(
            channel=channel,
            sender_id=sender_id,
            room_id=room_id,
            text=text,
        )
        response = await self.handle(msg)
        return response.text if response else ""

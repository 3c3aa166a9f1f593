"""Routing filters applied to every inbound message, in this order:

1. :class:`IgnoredSenderFilter` – drop messages from excluded senders.
2. :class:`ActiveConversationFilter` – forward anything while the room
   has a conversation in progress.
3. :class:`TriggerFilter` – otherwise forward only trigger matches.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from lexbot.bus.events import InboundMessage
from lexbot.conversation.state import ConversationStore
from lexbot.routing.base import ResponseFilter
from lexbot.routing.text import strip_mention
from lexbot.routing.trigger import TriggerMatcher


def parse_ignored_ids(raw: str | Iterable[str] | None) -> frozenset[str]:
    """Parse ``"1, 3,Bob"`` into ``{"1", "3", "bob"}``."""
    if not raw:
        return frozenset()
    items = raw.split(",") if isinstance(raw, str) else raw
    return frozenset(s.strip().lower() for s in items if s and s.strip())


class IgnoredSenderFilter(ResponseFilter):
    """Suppress messages from configured sender ids (case-insensitive)."""

    name = "ignored_sender"

    def __init__(self, ignored_ids: Iterable[str] | str | None) -> None:
        self.ignored_ids = parse_ignored_ids(ignored_ids)

    def is_ignored(self, sender_id: str) -> bool:
        return sender_id.lower() in self.ignored_ids

    def should_respond(self, msg: InboundMessage) -> bool | None:
        if self.is_ignored(msg.sender_id):
            logger.debug(f"Suppressed message from ignored sender {msg.sender_id}")
            return False
        return None


class ActiveConversationFilter(ResponseFilter):
    """Forward every message in a room whose conversation is active."""

    name = "active_conversation"

    def __init__(self, conversations: ConversationStore) -> None:
        self.conversations = conversations

    def should_respond(self, msg: InboundMessage) -> bool | None:
        if self.conversations.is_active(msg.room_id):
            return True
        return None


class TriggerFilter(ResponseFilter):
    """
    Forward messages matching the start pattern; drop the rest.

    The pattern sees the text with the bot address removed, so the bot's
    own name never counts as a trigger.
    """

    name = "trigger"

    def __init__(
        self,
        matcher: TriggerMatcher,
        bot_name: str | None = None,
        bot_alias: str | None = None,
    ) -> None:
        self.matcher = matcher
        self.bot_name = bot_name
        self.bot_alias = bot_alias

    def should_respond(self, msg: InboundMessage) -> bool | None:
        text = msg.text
        if self.bot_name:
            text = strip_mention(text, self.bot_name, self.bot_alias)
        if self.matcher.matches(text):
            return True
        logger.debug(f"No start pattern match from {msg.session_key}:{msg.sender_id}")
        return False

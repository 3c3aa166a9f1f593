"""Per-room "conversation in progress" flag kept in the shared brain.

A room is *Active* while the backend expects a direct follow-up and *Idle*
otherwise. The flag value is the epoch timestamp at which the conversation
started; an Idle room holds ``None`` (or no key at all).
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from lexbot.brain.store import Brain

KEY_PREFIX = "conversation-"


@dataclass(frozen=True)
class ConversationFlag:
    active: bool
    started_at: float | None = None


class ConversationStore:
    """
    Read and write conversation flags under ``conversation-<room_id>``.

    Args:
        brain: Shared key-value store.
        ttl: Seconds after which an active flag is treated as expired.
            ``None`` keeps flags until a terminal dialog state clears them.
        clock: Time source, seconds since the epoch.
    """

    def __init__(
        self,
        brain: Brain,
        ttl: float | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._ns = brain.namespace(KEY_PREFIX)
        self.ttl = ttl
        self._clock = clock

    def key_for(self, room_id: str) -> str:
        return self._ns.key_for(room_id)

    def get(self, room_id: str) -> ConversationFlag | None:
        started_at = self._ns.get(room_id)
        if started_at is None:
            return None

        if self.ttl is not None and self._clock() - started_at > self.ttl:
            logger.info(f"Conversation in {room_id} expired after {self.ttl:g}s")
            self._ns.set(room_id, None)
            return None

        return ConversationFlag(active=True, started_at=started_at)

    def set(self, room_id: str, active: bool) -> None:
        if active:
            self._ns.set(room_id, self._clock())
            logger.debug(f"Conversation started in {room_id}")
        else:
            self._ns.set(room_id, None)
            logger.debug(f"Conversation stopped in {room_id}")

    def is_active(self, room_id: str) -> bool:
        return self.get(room_id) is not None

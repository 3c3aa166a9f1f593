"""Event types passed between channels and the relay."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class InboundMessage:
    """A chat message received from a channel."""

    channel: str  # e.g. "console"
    sender_id: str
    room_id: str
    text: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def session_key(self) -> str:
        """Key identifying the room across channels."""
        return f"{self.channel}:{self.room_id}"


@dataclass
class OutboundMessage:
    """A message to deliver back to a channel.

    ``reply_to`` carries the original sender's id when the message is a
    reply addressed to that sender rather than a plain room post.
    """

    channel: str
    room_id: str
    text: str
    reply_to: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

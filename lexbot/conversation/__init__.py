"""Per-room conversation tracking."""

from lexbot.conversation.state import ConversationFlag, ConversationStore

__all__ = ["ConversationFlag", "ConversationStore"]

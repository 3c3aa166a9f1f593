"""Message routing.

Each routing rule is encapsulated in a :class:`ResponseFilter` subclass
that independently gates messages (forward / drop / no opinion).

Architecture
------------
MessageRouter
  └── ResponseFilter (chain)
        ├── IgnoredSenderFilter       – excluded senders, evaluated first
        ├── ActiveConversationFilter  – room has a dialog in progress
        └── TriggerFilter             – start pattern match (safety-checked)
"""

from lexbot.routing.base import MessageRouter, ResponseFilter
from lexbot.routing.filters import (
    ActiveConversationFilter,
    IgnoredSenderFilter,
    TriggerFilter,
    parse_ignored_ids,
)
from lexbot.routing.trigger import DEFAULT_PATTERN, TriggerMatcher

__all__ = [
    "MessageRouter",
    "ResponseFilter",
    "ActiveConversationFilter",
    "IgnoredSenderFilter",
    "TriggerFilter",
    "parse_ignored_ids",
    "DEFAULT_PATTERN",
    "TriggerMatcher",
]

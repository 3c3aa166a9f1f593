"""Message bus: event types, queue and listener dispatch."""

from lexbot.bus.dispatch import Dispatcher, Listener
from lexbot.bus.events import InboundMessage, OutboundMessage
from lexbot.bus.queue import MessageBus

__all__ = ["Dispatcher", "Listener", "InboundMessage", "OutboundMessage", "MessageBus"]

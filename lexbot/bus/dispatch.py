"""Listener registry evaluated against every inbound message.

A chat host lets scripts register ``(predicate, handler)`` pairs; each
inbound message is offered to every listener in registration order and
the handler runs when its predicate accepts the message.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from loguru import logger

from lexbot.bus.events import InboundMessage, OutboundMessage

Predicate = Callable[[InboundMessage], bool]
Handler = Callable[[InboundMessage], Awaitable[OutboundMessage | None]]


def always(msg: InboundMessage) -> bool:
    """Predicate that accepts every message."""
    return True


@dataclass
class Listener:
    predicate: Predicate
    handler: Handler
    name: str = ""


class Dispatcher:
    """Ordered collection of listeners."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def listen(self, predicate: Predicate, handler: Handler, name: str = "") -> Listener:
        """Register a listener and return it."""
        listener = Listener(predicate=predicate, handler=handler, name=name or handler.__name__)
        self._listeners.append(listener)
        logger.debug(f"Registered listener {listener.name}")
        return listener

    @property
    def listeners(self) -> list[Listener]:
        return list(self._listeners)

    def matching(self, msg: InboundMessage) -> list[Listener]:
        """Listeners whose predicate accepts ``msg``, in registration order."""
        return [l for l in self._listeners if l.predicate(msg)]

    def __len__(self) -> int:
        return len(self._listeners)

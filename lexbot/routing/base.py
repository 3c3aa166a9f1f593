"""Base classes for message routing.

See :mod:`lexbot.routing` package docstring for the overall architecture.
"""

from __future__ import annotations

import abc

from lexbot.bus.events import InboundMessage


# -----------------------------------------------------------------------
# ResponseFilter
# -----------------------------------------------------------------------

class ResponseFilter(abc.ABC):
    """Base class for a single routing rule."""

    name: str = "filter"

    @abc.abstractmethod
    def should_respond(self, msg: InboundMessage) -> bool | None:
        """Decide whether the message is forwarded to the backend.

        Returns
        -------
        bool | None
            * ``True``  – forward the message.
            * ``False`` – drop the message.
            * ``None``  – this filter has no opinion; defer to the next one.
        """
        ...


# -----------------------------------------------------------------------
# MessageRouter
# -----------------------------------------------------------------------

class MessageRouter:
    """Chains :class:`ResponseFilter` instances to reach a forward/drop decision.

    Filters are evaluated **in order**.  The first filter that returns a
    definitive ``True`` or ``False`` wins.  If every filter returns ``None``
    the router defaults to **forward** (``True``).
    """

    def __init__(self, filters: list[ResponseFilter] | None = None) -> None:
        self._filters: list[ResponseFilter] = list(filters or [])

    def add_filter(self, f: ResponseFilter) -> None:
        """Append a filter to the chain."""
        self._filters.append(f)

    @property
    def filters(self) -> list[ResponseFilter]:
        return list(self._filters)

    def should_respond(self, msg: InboundMessage) -> bool:
        for f in self._filters:
            result = f.should_respond(msg)
            if result is not None:
                return result
        return True  # default: respond

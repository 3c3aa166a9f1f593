"""Relay core module."""

from lexbot.agent.loop import RelayLoop
from lexbot.routing.text import strip_mention

__all__ = ["RelayLoop", "strip_mention"]

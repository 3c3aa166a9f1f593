"""Chat channels: host transports that feed the bus."""

from lexbot.channels.base import BaseChannel, ChannelManager
from lexbot.channels.console import ConsoleChannel

__all__ = ["BaseChannel", "ChannelManager", "ConsoleChannel"]

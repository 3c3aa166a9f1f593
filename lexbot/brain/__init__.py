"""Shared key-value state owned by the host."""

from lexbot.brain.store import Brain, BrainNamespace

__all__ = ["Brain", "BrainNamespace"]

"""Utility helpers."""

from lexbot.utils.helpers import ensure_dir, get_lexbot_home

__all__ = ["ensure_dir", "get_lexbot_home"]

"""Process-wide key-value store shared by every script running in the host."""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from lexbot.utils.helpers import ensure_dir


class Brain:
    """
    In-memory key-value store with optional JSON snapshot persistence.

    Values must be JSON-serializable when a path is configured. A key set
    to ``None`` is kept (cleared, not removed) so readers can distinguish
    "never set" only through :meth:`keys`.
    """

    def __init__(self, path: Path | None = None):
        self.path = path
        self._data: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if removed, False if not found.
        """
        return self._data.pop(key, _MISSING) is not _MISSING

    def keys(self) -> list[str]:
        return list(self._data)

    def namespace(self, prefix: str) -> "BrainNamespace":
        """Return a view that prefixes every key with ``prefix``."""
        return BrainNamespace(self, prefix)

    def load(self) -> None:
        """Load the snapshot from disk, if one exists."""
        if self.path is None or not self.path.exists():
            return

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load brain from {self.path}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning(f"Brain snapshot should be a JSON object, got {type(data).__name__}")
            return

        self._data.update(data)
        logger.debug(f"Loaded {len(data)} brain keys from {self.path}")

    def save(self) -> None:
        """Write the snapshot to disk (no-op without a path)."""
        if self.path is None:
            return

        ensure_dir(self.path.parent)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)


class BrainNamespace:
    """Prefixed view over a :class:`Brain`."""

    def __init__(self, brain: Brain, prefix: str):
        self.brain = brain
        self.prefix = prefix

    def key_for(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def get(self, name: str, default: Any = None) -> Any:
        return self.brain.get(self.key_for(name), default)

    def set(self, name: str, value: Any) -> None:
        self.brain.set(self.key_for(name), value)

    def names(self) -> list[str]:
        """Unprefixed names of every key in this namespace."""
        return [k[len(self.prefix):] for k in self.brain.keys() if k.startswith(self.prefix)]


_MISSING = object()

"""Decide whether a message starts a new conversation."""

import re

from loguru import logger

from lexbot.errors import UnsafePatternError
from lexbot.routing.safe_regex import check_pattern

DEFAULT_PATTERN = "lex"


class TriggerMatcher:
    """Case-insensitive search of message text for the start pattern."""

    def __init__(self, regex: re.Pattern[str], is_default: bool = False):
        self.regex = regex
        self.is_default = is_default

    @property
    def pattern(self) -> str:
        return self.regex.pattern

    @classmethod
    def default(cls) -> "TriggerMatcher":
        return cls(re.compile(DEFAULT_PATTERN, re.IGNORECASE), is_default=True)

    @classmethod
    def from_pattern(cls, raw: str | None) -> "TriggerMatcher":
        """
        Build a matcher from a configured pattern.

        The pattern is checked for catastrophic-backtracking risk before it
        is compiled. Absent, unsafe or invalid patterns fall back to the
        default ``lex`` pattern.
        """
        if not raw:
            logger.debug(f"No start pattern configured, using default /{DEFAULT_PATTERN}/i")
            return cls.default()

        try:
            check_pattern(raw)
        except UnsafePatternError as e:
            logger.info(f"{e}; falling back to default /{DEFAULT_PATTERN}/i")
            return cls.default()

        return cls(re.compile(raw, re.IGNORECASE))

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None

    def __repr__(self) -> str:
        return f"TriggerMatcher(/{self.pattern}/i)"

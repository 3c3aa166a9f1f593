"""Error types shared across lexbot."""


class LexbotError(Exception):
    """Base class for lexbot errors."""


class ConfigError(LexbotError):
    """Required configuration is missing; the relay stays disabled."""


class UnsafePatternError(LexbotError):
    """A configured regular expression was rejected before compilation."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Unsafe pattern {pattern!r}: {reason}")

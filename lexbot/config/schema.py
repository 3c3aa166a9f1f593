"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lexbot.errors import ConfigError
from lexbot.routing.filters import parse_ignored_ids

DEFAULT_ERROR_MESSAGE = "Unable to communicate with the backend."


class Config(BaseModel):
    """Relay configuration, read once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    backend_url: str | None = None
    api_key: str | None = None
    start_pattern: str | None = None
    ignored_sender_ids: frozenset[str] = frozenset()
    bot_name: str = "lexbot"
    bot_alias: str | None = None
    http_timeout: float = Field(default=30.0, gt=0)
    conversation_ttl: float | None = Field(default=None, gt=0)
    serialize_rooms: bool = False
    error_message: str = DEFAULT_ERROR_MESSAGE
    brain_path: str | None = None
    log_level: str = "INFO"

    @field_validator("backend_url", "api_key", "start_pattern", "bot_alias", "brain_path", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("conversation_ttl", mode="before")
    @classmethod
    def _zero_ttl_is_none(cls, v):
        if v in ("", "0", 0, None):
            return None
        return v

    @field_validator("ignored_sender_ids", mode="before")
    @classmethod
    def _split_ids(cls, v):
        if v is None or isinstance(v, str):
            return parse_ignored_ids(v)
        return parse_ignored_ids(str(x) for x in v)

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()

    @property
    def enabled(self) -> bool:
        return self.backend_url is not None

    def require_backend_url(self) -> str:
        if self.backend_url is None:
            raise ConfigError("BACKEND_URL is not set")
        return self.backend_url

"""Configuration loading utilities."""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from lexbot.config.schema import Config
from lexbot.errors import ConfigError
from lexbot.utils.helpers import get_lexbot_home

# Field name -> environment variables, preferred name first.
# The LEX_* names are accepted for deployments configured before the
# backend was generalized.
ENV_VARS: dict[str, tuple[str, ...]] = {
    "backend_url": ("BACKEND_URL", "LEX_API_URL"),
    "api_key": ("BACKEND_API_KEY", "LEX_API_KEY"),
    "ignored_sender_ids": ("IGNORED_SENDER_IDS", "LEX_IGNORE_USER_IDS"),
    "start_pattern": ("START_PATTERN", "LEX_START_REGEXP"),
    "bot_name": ("BOT_NAME",),
    "bot_alias": ("BOT_ALIAS",),
    "http_timeout": ("HTTP_TIMEOUT",),
    "conversation_ttl": ("CONVERSATION_TTL",),
    "serialize_rooms": ("SERIALIZE_ROOMS",),
    "error_message": ("ERROR_MESSAGE",),
    "brain_path": ("BRAIN_PATH",),
    "log_level": ("LOG_LEVEL",),
}


def get_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Get the configuration file path (``LEXBOT_CONFIG`` or ~/.lexbot/config.json)."""
    env = os.environ if environ is None else environ
    explicit = env.get("LEXBOT_CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    return get_lexbot_home() / "config.json"


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """
    Load configuration from an optional JSON file and the environment.

    File values (camelCase keys) are defaults; environment variables
    override them.

    Args:
        config_path: Optional explicit path to config file.
        environ: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Loaded configuration object.

    Raises:
        ConfigError: A value failed validation.
    """
    env = os.environ if environ is None else environ
    path = config_path or get_config_path(env)

    data = _load_file(path)
    data.update(env_overrides(env))

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect config values present in ``environ``."""
    values: dict[str, str] = {}
    for field_name, names in ENV_VARS.items():
        for name in names:
            if name in environ:
                values[field_name] = environ[name]
                break
    return values


def _load_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load config from {path}: {e}")
        return {}

    if not isinstance(raw, dict):
        logger.warning(f"Config file should be a JSON object, got {type(raw).__name__}")
        return {}

    return convert_keys(raw)


# ---------------------------------------------------------------------------
# Key conversion helpers
# ---------------------------------------------------------------------------


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)

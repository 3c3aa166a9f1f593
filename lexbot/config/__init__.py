"""Configuration module for lexbot."""

from lexbot.config.loader import ENV_VARS, get_config_path, load_config
from lexbot.config.schema import DEFAULT_ERROR_MESSAGE, Config

__all__ = [
    "Config",
    "DEFAULT_ERROR_MESSAGE",
    "ENV_VARS",
    "get_config_path",
    "load_config",
]

"""Configuration and environment helpers for jsonapi_client."""

from jsonapi_client.utils.config import (
    ConfigError,
    load_and_resolve_config,
    load_config_from_module,
    resolve_config_inheritance,
)
from jsonapi_client.utils.env import env_flag, load_env_file_if_present

__all__ = [
    "load_env_file_if_present",
    "env_flag",
    "load_config_from_module",
    "load_and_resolve_config",
    "resolve_config_inheritance",
    "ConfigError",
]

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from jsonapi_client.utils.config import ConfigError, load_and_resolve_config
from jsonapi_client.utils.env import env_flag, load_env_file_if_present

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_MODULE = "configs.json_api_client"


@dataclass
class ClientSettings:
    base_url: str
    token: str | None = None
    timeout: float = 30.0
    log: bool = False
    verify: bool = True


def load_settings(
    profile: str = "default",
    module_path: str = DEFAULT_CONFIG_MODULE,
    configuration: dict[str, dict[str, Any]] | None = None,
    dotenv: bool = True,
) -> ClientSettings:
    """Build ClientSettings from a named profile plus environment overrides.

    Profiles come from `configuration` when given, otherwise from the
    CONFIGURATION dict in `module_path`. JSONAPI_BASE_URL, JSONAPI_TOKEN,
    JSONAPI_TIMEOUT and JSONAPI_CLIENT_LOG (read from the environment or .env)
    override the profile values.

    Raises ConfigError if the profile is unknown or no base URL is configured.
    """
    if configuration is None:
        configuration = load_and_resolve_config(module_path, default={})
    if dotenv:
        load_env_file_if_present()

    if profile not in configuration:
        raise ConfigError(f"Unknown profile '{profile}'. Available: {', '.join(configuration) or 'none'}")
    values = dict(configuration[profile])

    base_url = os.getenv("JSONAPI_BASE_URL") or values.get("base_url")
    if not base_url:
        raise ConfigError(f"Profile '{profile}' has no base_url. Set it or JSONAPI_BASE_URL")

    timeout = os.getenv("JSONAPI_TIMEOUT") or values.get("timeout", 30.0)
    try:
        timeout = float(timeout)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid timeout for profile '{profile}': {timeout!r}") from e

    settings = ClientSettings(
        base_url=base_url,
        token=os.getenv("JSONAPI_TOKEN") or values.get("token"),
        timeout=timeout,
        log=env_flag("JSONAPI_CLIENT_LOG", default=bool(values.get("log", False))),
        verify=bool(values.get("verify", True)),
    )
    logger.debug(f"Using profile '{profile}' against {settings.base_url}")
    return settings

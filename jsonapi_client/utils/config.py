"""Profile loading for client connection settings.

Connection profiles live in plain Python modules (by default
``configs/json_api_client.py``) as a ``CONFIGURATION`` dict mapping profile
names to keyword settings. Modules are imported with importlib so callers can
point at their own configuration module without code changes.

A profile may extend another one through the ``"__inherits__"`` key.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when connection profiles cannot be loaded or resolved."""

    pass


def load_config_from_module(
    module_path: str,
    config_name: str = "CONFIGURATION",
    default: Any | None = None,
) -> Any:
    """Import `module_path` and return its `config_name` attribute.

    Args:
        module_path: Dotted module path (e.g., "configs.json_api_client")
        config_name: Attribute holding the profiles (default: "CONFIGURATION")
        default: Returned when the module or the attribute is missing

    Examples:
        >>> profiles = load_config_from_module("configs.json_api_client")
        >>> profiles["default"]["base_url"]
        'http://localhost:8000/api/v1'
    """
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        logger.warning(f"Could not import module '{module_path}': {e}")
        return default

    if not hasattr(module, config_name):
        logger.warning(f"Module '{module_path}' does not have attribute '{config_name}'")
        return default

    logger.debug(f"Loaded configuration from {module_path}.{config_name}")
    return getattr(module, config_name)


def resolve_config_inheritance(config_dict: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Expand ``__inherits__`` chains so every profile carries its full settings.

    Child keys override parent keys; the ``__inherits__`` marker itself is
    removed from the result.

    Raises:
        ConfigError: If a cycle is found or a parent profile does not exist

    Examples:
        >>> resolved = resolve_config_inheritance({
        ...     "default": {"base_url": "https://api.example.com", "timeout": 30},
        ...     "slow": {"__inherits__": "default", "timeout": 120},
        ... })
        >>> resolved["slow"]["base_url"]
        'https://api.example.com'
    """
    resolved_configs: dict[str, dict[str, Any]] = {}

    def _resolve(name: str, chain: tuple[str, ...]) -> dict[str, Any]:
        if name in chain:
            raise ConfigError(f"Circular inheritance detected: {' -> '.join(chain + (name,))}")
        if name in resolved_configs:
            return resolved_configs[name]

        config = config_dict[name]
        parent_name = config.get("__inherits__")
        if parent_name is None:
            resolved = dict(config)
        else:
            if parent_name not in config_dict:
                raise ConfigError(
                    f"Profile '{name}' inherits from '{parent_name}', "
                    f"but '{parent_name}' not found"
                )
            resolved = dict(_resolve(parent_name, chain + (name,)))
            resolved.update({k: v for k, v in config.items() if k != "__inherits__"})
            logger.debug(f"Resolved profile '{name}' from '{parent_name}'")

        resolved_configs[name] = resolved
        return resolved

    for name in config_dict:
        _resolve(name, ())

    return resolved_configs


def load_and_resolve_config(
    module_path: str,
    config_name: str = "CONFIGURATION",
    default: dict[str, dict[str, Any]] | None = None,
) -> dict[str, dict[str, Any]]:
    """Load profiles from `module_path` and resolve their inheritance.

    An unimportable module or a non-dict attribute yields `default` (or an
    empty dict); inheritance errors are logged and re-raised.
    """
    raw_config = load_config_from_module(module_path, config_name, default)

    if not isinstance(raw_config, dict):
        logger.warning(f"Invalid configuration loaded from {module_path}, using default")
        return default or {}

    try:
        resolved = resolve_config_inheritance(raw_config)
    except ConfigError as e:
        logger.error(f"Failed to resolve profile inheritance: {e}")
        raise

    logger.info(f"Loaded {len(resolved)} profiles from {module_path}")
    return resolved

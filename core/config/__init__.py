"""
Runtime Configuration Module

Provides configuration loading and management for the CLI and API.
"""

from .runtime import (
    ENV_PREFIX,
    RuntimeConfig,
    default_config_paths,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "RuntimeConfig",
    "default_config_paths",
    "get_default_config",
    "set_default_config",
]

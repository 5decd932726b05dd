"""
CLI Configuration

Locates and loads the runtime configuration for the CLI.
Environment variables always override file settings.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.config.runtime import RuntimeConfig, default_config_paths


logger = logging.getLogger(__name__)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Optional explicit path to a JSON or YAML config file

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                logger.debug(f"Loading config from {default_path}")
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "tree": {
    "algorithm": "keccak",
    "pad_strategy": "copy",
    "combine_method": "concat",
    "commutative": false
  },
  "log_level": "INFO",
  "log_file": null
}
"""

"""
Hashtree API Dependencies

Loads the server-wide configuration and merges per-request tree options
into it.
"""

from __future__ import annotations

import logging

from api.models.requests import TreeOptions
from core.config.runtime import RuntimeConfig, default_config_paths
from core.crypto import resolve_algorithm
from core.merkle import resolve_combine_method, resolve_pad_strategy
from core.schemas.tree import TreeConfig

logger = logging.getLogger(__name__)


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    The config file is the first of default_config_paths() that exists.

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    config: RuntimeConfig | None = None

    for path in default_config_paths():
        if path.exists():
            try:
                config = RuntimeConfig.from_file(path)
                logger.info(f"Loaded config from {path}")
                break
            except Exception as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        # No config file found, start with defaults
        config = RuntimeConfig()

    # Always apply environment variable overrides
    return config.with_env_overrides()


def get_tree_config(options: TreeOptions | None = None) -> TreeConfig:
    """
    Server tree configuration with any per-request options applied.

    Raises:
        UnsupportedAlgorithmException: If options name an unknown algorithm
        SchemaValidationException: If options name an unknown pad strategy
            or combine method
    """
    base = _load_runtime_config().tree
    if options is None:
        return base

    update: dict = {}
    if options.algorithm is not None:
        update["algorithm"] = resolve_algorithm(options.algorithm)
    if options.pad_strategy is not None:
        update["pad_strategy"] = resolve_pad_strategy(options.pad_strategy)
    if options.combine_method is not None:
        update["combine_method"] = resolve_combine_method(options.combine_method)
    if options.commutative is not None:
        update["commutative"] = options.commutative

    return base.model_copy(update=update) if update else base

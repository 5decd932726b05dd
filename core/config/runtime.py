"""
Runtime Configuration

Central configuration for the CLI and API: default tree settings and logging.
The tree engine itself never reads configuration; callers pass a TreeConfig.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from core.schemas.errors import ConfigurationException
from core.schemas.tree import TreeConfig

load_dotenv()


ENV_PREFIX = "HASHTREE_"

_TREE_ENV_KEYS = {
    "algorithm": f"{ENV_PREFIX}ALGORITHM",
    "pad_strategy": f"{ENV_PREFIX}PAD_STRATEGY",
    "combine_method": f"{ENV_PREFIX}COMBINE_METHOD",
    "commutative": f"{ENV_PREFIX}COMMUTATIVE",
}


def _to_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _build_tree_config(data: dict[str, Any], source: str) -> TreeConfig:
    try:
        return TreeConfig(**data)
    except ValidationError as e:
        raise ConfigurationException(
            f"Invalid tree settings in {source}",
            source=source,
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the single place env vars are read.

        Supported variables:
        - HASHTREE_ALGORITHM: keccak, sha256, blake2b, ripemd160
        - HASHTREE_PAD_STRATEGY: copy, zero
        - HASHTREE_COMBINE_METHOD: concat, sum
        - HASHTREE_COMMUTATIVE: true/false
        - HASHTREE_LOG_LEVEL: log level name
        - HASHTREE_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        for key, env_var in _TREE_ENV_KEYS.items():
            raw = os.getenv(env_var)
            if raw:
                value: Any = _to_bool(raw) if key == "commutative" else raw.strip().lower()
                overrides.setdefault("tree", {})[key] = value

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides(), source="environment")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data, source=str(path))

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data, source=str(path))

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load from YAML or JSON depending on the file suffix."""
        path = Path(path)
        if path.suffix.lower() in {".yaml", ".yml"}:
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "dict") -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Configuration in {source} must be a mapping",
                source=source,
            )
        tree_data = data.get("tree", {}) or {}
        return cls(
            tree=_build_tree_config(tree_data, source),
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        Allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "tree" in overrides:
            merged = {**self.tree.model_dump(mode="json"), **overrides["tree"]}
            new_config.tree = _build_tree_config(merged, "environment")

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": self.tree.model_dump(mode="json"),
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


def default_config_paths() -> list[Path]:
    """Config files searched when no explicit path is given, in order."""
    return [
        Path.cwd() / "hashtree.json",
        Path.cwd() / ".hashtree.json",
        Path.cwd() / "hashtree.yaml",
        Path.home() / ".config" / "hashtree" / "config.json",
    ]


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config

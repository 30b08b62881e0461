"""
Configuration for reindex.

Loads settings from environment variables, with an optional YAML file for
the extra plugin table.
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def default_home() -> Path:
    """Root directory for local reindex state ($REINDEX_HOME or ~/.reindex)."""
    home = os.getenv("REINDEX_HOME")
    return Path(home).expanduser() if home else Path.home() / ".reindex"


def path_from_env(name: str, default_name: str, home: Optional[Path] = None) -> Path:
    """Path from an environment variable, falling back to a file under home."""
    value = os.getenv(name)
    if value:
        return Path(value).expanduser()
    return (home or default_home()) / default_name


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Load the optional reindex YAML file.

    Expected shape::

        plugins:
          - mypkg.indexers:ProjectIndexer
        fail_fast: true

    Args:
        config_path: Path to YAML file

    Returns:
        Config dict (empty if the file is empty)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has an invalid shape
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(f"Invalid config in {config_path}: must be a YAML dict")

    plugins = data.get('plugins', [])
    if not isinstance(plugins, list) or not all(isinstance(p, str) for p in plugins):
        raise ValueError(f"Invalid config in {config_path}: 'plugins' must be a list of strings")

    if 'fail_fast' in data and not isinstance(data['fail_fast'], bool):
        raise ValueError(f"Invalid config in {config_path}: 'fail_fast' must be a boolean")

    return data


class ReindexConfig:
    """Configuration for a reindex invocation."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Load configuration from environment.

        Args:
            config_path: YAML file overriding $REINDEX_CONFIG_PATH

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the config file or REINDEX_LOG_LEVEL is invalid
        """
        self.home = default_home()

        self.catalog_path = path_from_env("REINDEX_CATALOG_PATH", "catalog.ndjson", self.home)
        self.spool_path = path_from_env("REINDEX_SPOOL_PATH", "queue.ndjson", self.home)
        self.documents_path = path_from_env("REINDEX_DOCUMENTS_PATH", "documents.ndjson", self.home)

        self.fail_fast = _env_flag("REINDEX_FAIL_FAST", True)
        self.log_level = os.getenv("REINDEX_LOG_LEVEL", "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Invalid REINDEX_LOG_LEVEL: {self.log_level!r}")

        self.plugins: List[str] = []

        if config_path is None and os.getenv("REINDEX_CONFIG_PATH"):
            config_path = Path(os.environ["REINDEX_CONFIG_PATH"])
        self.config_path = Path(config_path).expanduser() if config_path else None

        if self.config_path is not None:
            data = load_config_file(self.config_path)
            self.plugins = list(data.get('plugins', []))
            if 'fail_fast' in data:
                self.fail_fast = data['fail_fast']


def get_config(config_path: Optional[Path] = None) -> ReindexConfig:
    """Get reindex configuration."""
    return ReindexConfig(config_path)

"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from beatshelf.core.config.models import AppConfig
from beatshelf.core.utils.json import read_json

logger = logging.getLogger(__name__)

# Default app config path (can be overridden)
_DEFAULT_APP_CONFIG_PATH = Path("beatshelf.yaml")

ENV_MOUNTS_ROOT = "BEATSHELF_MOUNTS_ROOT"
ENV_CACHE_PATH = "BEATSHELF_CACHE_PATH"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("beatshelf.json")
        'json'
        >>> detect_format("beatshelf.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Supports both JSON and YAML formats. Format is auto-detected
    from file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            content = read_json(path)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {path}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    A missing file at the default location yields all defaults; an explicitly
    requested file must exist. Environment variables override the device
    mounts root and the cache path.

    Args:
        path: Path to app config file (.json, .yaml, or .yml)
              Defaults to beatshelf.yaml

    Returns:
        Validated AppConfig instance with defaults for missing values

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the file cannot be parsed
        ValidationError: If config is invalid
    """
    if path is None:
        path = _DEFAULT_APP_CONFIG_PATH
        config = (
            AppConfig.model_validate(load_config(path)) if Path(path).exists() else AppConfig()
        )
    else:
        config = AppConfig.model_validate(load_config(path))

    return _apply_env_overrides(config)


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    """Return config with environment variable overrides applied."""
    device_updates: dict[str, Any] = {}
    cache_updates: dict[str, Any] = {}

    mounts_root = os.getenv(ENV_MOUNTS_ROOT)
    if mounts_root:
        logger.debug(f"Loaded {ENV_MOUNTS_ROOT} from environment")
        device_updates["mounts_root"] = mounts_root

    cache_path = os.getenv(ENV_CACHE_PATH)
    if cache_path:
        logger.debug(f"Loaded {ENV_CACHE_PATH} from environment")
        cache_updates["path"] = cache_path

    if not device_updates and not cache_updates:
        return config

    return config.model_copy(
        update={
            "device": config.device.model_copy(update=device_updates),
            "cache": config.cache.model_copy(update=cache_updates),
        }
    )

"""
imagesmith Config - Loader.

Loads configuration from ~/.imagesmith/config.yaml.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from imagesmith.config.constants import CONFIG_FILE_NAME, DEFAULT_DATA_DIR_NAME
from imagesmith.config.models import Config
from imagesmith.core.exceptions import InvalidConfigError
from imagesmith.utils.logger import log_prefix

DEFAULT_CONFIG_PATH = Path.home() / DEFAULT_DATA_DIR_NAME / CONFIG_FILE_NAME

_config: Config | None = None


def load_config(path: Path | None = None) -> Config:
    """
    Load configuration from a YAML file.

    A missing file yields the defaults.

    Args:
        path: Config file path (default: ~/.imagesmith/config.yaml).

    Returns:
        Validated Config.

    Raises:
        InvalidConfigError: If the file cannot be parsed or validated.
    """
    path = path or DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.debug(f"{log_prefix('📁')} No config file at {path}, using defaults")
        return Config()

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise InvalidConfigError(str(path), str(e)) from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise InvalidConfigError(str(path), "top level must be a mapping")

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigError(str(path), str(e)) from e

    logger.debug(f"{log_prefix('📁')} Loaded config from {path}")
    return config


def save_config(config: Config, path: Path | None = None) -> Path:
    """Write configuration to a YAML file and return its path."""
    path = path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)

    logger.debug(f"{log_prefix('📁')} Saved config to {path}")
    return path


def get_config() -> Config:
    """Get the cached default configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached config (for tests)."""
    global _config
    _config = None

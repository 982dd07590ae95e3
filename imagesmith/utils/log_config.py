"""
Logging configuration for imagesmith.

Provides configurable logging with:
- Log directory management
- Size based rotation and retention
- Verbosity levels
- Persistent configuration
"""
import json
import os
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional


class LogLevel(str, Enum):
    """Log verbosity levels."""
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_string(cls, level: str) -> "LogLevel":
        """Parse log level from string (case-insensitive)."""
        level = level.upper()
        try:
            return cls(level)
        except ValueError:
            aliases = {
                "WARN": cls.WARNING,
                "ERR": cls.ERROR,
                "FATAL": cls.CRITICAL,
            }
            if level in aliases:
                return aliases[level]
            raise ValueError(f"Unknown log level: {level}") from None


@dataclass
class LogConfig:
    """
    Configuration for imagesmith logging.

    Attributes:
        log_dir: Directory for log files (default: ~/.imagesmith/logs)
        app_log_name: Main log filename
        console_level: Log level for console output
        file_level: Log level for file output
        rotation_size: Max size before rotation (e.g., "10 MB")
        retention: How long to keep old logs (e.g., "1 week")
        compression: Compress rotated files (zip, gz, or None)
        json_logs: Use JSON serialization for file logs
        console_enabled: Log to stderr even without --verbose
    """
    log_dir: str = ""
    app_log_name: str = "imagesmith.log"

    console_level: str = "WARNING"
    file_level: str = "DEBUG"

    rotation_size: str = "10 MB"
    retention: str = "1 week"
    compression: Optional[str] = "gz"

    json_logs: bool = False
    console_enabled: bool = False

    _VALID_COMPRESSION: ClassVar[frozenset] = frozenset({"zip", "gz", None})
    _VALID_UNITS: ClassVar[frozenset] = frozenset({"B", "KB", "MB", "GB"})

    def __post_init__(self):
        if not self.log_dir:
            self.log_dir = str(Path.home() / ".imagesmith" / "logs")

        for name in ("console_level", "file_level"):
            try:
                LogLevel.from_string(getattr(self, name))
            except ValueError as e:
                raise ValueError(f"Invalid {name}: {e}") from e

        if self.compression not in self._VALID_COMPRESSION:
            raise ValueError(
                f"compression must be one of {set(self._VALID_COMPRESSION)}, "
                f"got: {self.compression!r}"
            )

        self._validate_size_format(self.rotation_size)

    def _validate_size_format(self, size_str: str) -> None:
        """Validate size format like '10 MB'."""
        parts = size_str.strip().split()
        if len(parts) != 2:
            raise ValueError(f"Invalid size format: {size_str!r} (expected: '10 MB')")

        try:
            value = float(parts[0])
        except ValueError as e:
            raise ValueError(f"Invalid size value: {parts[0]!r}") from e
        if value <= 0:
            raise ValueError(f"Size must be positive: {size_str!r}")

        if parts[1].upper() not in self._VALID_UNITS:
            raise ValueError(f"Invalid size unit: {parts[1]!r} (valid: {set(self._VALID_UNITS)})")

    @property
    def log_path(self) -> Path:
        """Full path to the main log file."""
        return Path(self.log_dir) / self.app_log_name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogConfig":
        """Create from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known_fields})


CONFIG_FILE = Path.home() / ".imagesmith" / "log_config.json"

_ENV_MAPPINGS = {
    "IMAGESMITH_LOG_DIR": "log_dir",
    "IMAGESMITH_LOG_LEVEL": "console_level",
    "IMAGESMITH_LOG_FILE_LEVEL": "file_level",
    "IMAGESMITH_LOG_ROTATION_SIZE": "rotation_size",
    "IMAGESMITH_LOG_RETENTION": "retention",
    "IMAGESMITH_LOG_COMPRESSION": "compression",
    "IMAGESMITH_LOG_JSON": "json_logs",
}


def load_log_config(path: Optional[Path] = None) -> LogConfig:
    """
    Load logging configuration.

    Priority:
    1. Environment variables (IMAGESMITH_LOG_*)
    2. Config file (~/.imagesmith/log_config.json)
    3. Defaults
    """
    path = path or CONFIG_FILE
    config_data: Dict[str, Any] = {}

    if path.exists():
        try:
            with open(path) as f:
                config_data = json.load(f)
        except (json.JSONDecodeError, OSError):
            pass  # Use defaults

    for env_var, config_key in _ENV_MAPPINGS.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        if config_key == "json_logs":
            config_data[config_key] = value.lower() in ("1", "true", "yes", "on")
        elif config_key == "compression":
            config_data[config_key] = value if value.lower() not in ("none", "") else None
        else:
            config_data[config_key] = value

    return LogConfig.from_dict(config_data)


def save_log_config(config: LogConfig, path: Optional[Path] = None) -> bool:
    """Save logging configuration to file. Returns True on success."""
    path = path or CONFIG_FILE
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
        return True
    except OSError:
        return False


def get_log_config() -> LogConfig:
    """Get the current logging configuration (cached)."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_log_config()
    return _cached_config


def reset_log_config() -> None:
    """Reset the cached configuration."""
    global _cached_config
    _cached_config = None


_cached_config: Optional[LogConfig] = None

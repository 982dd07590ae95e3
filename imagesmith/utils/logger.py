"""
Centralized logging for imagesmith.

Provides:
- Configurable log levels and rotation
- Credential redaction
- File and console output targets

Configuration is loaded from ~/.imagesmith/log_config.json or environment
variables. See log_config.py for details.
"""
import os
import sys
from typing import Optional

from loguru import logger

from imagesmith.utils.log_config import LogConfig, get_log_config
from imagesmith.utils.security import redact_sensitive_info


def use_emoji_logs() -> bool:
    """
    Check if emoji prefixes should be used in log messages.

    Returns True unless USE_EMOJI_LOGS is set to "0", "false", "no" or "off".
    """
    value = os.environ.get("USE_EMOJI_LOGS", "1").lower()
    return value not in ("0", "false", "no", "off")


_EMOJI_TO_ASCII = {
    "🔄": "[RETRY]",
    "⚠️": "[WARN]",
    "✅": "[OK]",
    "❌": "[ERROR]",
    "🧹": "[CLEANUP]",
    "🔒": "[SECGROUP]",
    "📁": "[FILE]",
    "⏱️": "[TIMING]",
}


def log_prefix(emoji: str) -> str:
    """
    Return the emoji, or its ASCII equivalent when USE_EMOJI_LOGS is off.

    Unknown emojis map to an empty string in ASCII mode.
    """
    if use_emoji_logs():
        return emoji
    return _EMOJI_TO_ASCII.get(emoji, "")


def _redaction_patcher(record) -> None:
    """Redact credentials from every log message."""
    try:
        record["message"] = redact_sensitive_info(record["message"])
    except Exception:
        record["message"] = "[REDACTED]"


def setup_logger(verbose: bool = False, config: Optional[LogConfig] = None) -> None:
    """
    Configure the logger.

    Rules:
    1. FILE: Always log to ~/.imagesmith/logs/imagesmith.log (rotated).
    2. CONSOLE: Log DEBUG+ to stderr when verbose, otherwise only if
       console_enabled is set. Build progress goes through ConsoleUI.

    Args:
        verbose: Enable console logging
        config: Optional LogConfig override (for testing)
    """
    logger.remove()

    if config is None:
        config = get_log_config()

    config.log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        config.log_path,
        rotation=config.rotation_size,
        retention=config.retention,
        level=config.file_level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        serialize=config.json_logs,
        compression=config.compression,
        enqueue=True,
    )

    if verbose or config.console_enabled:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
            level="DEBUG" if verbose else config.console_level.upper(),
            colorize=True,
        )

    logger.configure(patcher=_redaction_patcher)

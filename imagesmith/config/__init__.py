"""
imagesmith Config - Configuration management.
"""

from imagesmith.config.constants import (
    CLEANUP_RETRY_ATTEMPTS,
    CLEANUP_RETRY_DELAY_SECONDS,
    DEFAULT_SSH_CIDR,
    SECURITY_GROUP_DESCRIPTION,
    SECURITY_GROUP_NAME_PREFIX,
)
from imagesmith.config.models import AWSConfig, Config, RetryConfig, SecurityGroupConfig
from imagesmith.config.loader import get_config, load_config, reset_config, save_config

__all__ = [
    "AWSConfig",
    "CLEANUP_RETRY_ATTEMPTS",
    "CLEANUP_RETRY_DELAY_SECONDS",
    "Config",
    "DEFAULT_SSH_CIDR",
    "RetryConfig",
    "SECURITY_GROUP_DESCRIPTION",
    "SECURITY_GROUP_NAME_PREFIX",
    "SecurityGroupConfig",
    "get_config",
    "load_config",
    "reset_config",
    "save_config",
]

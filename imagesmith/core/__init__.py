"""
imagesmith Core - Shared context, types and error handling.
"""

from imagesmith.core.context import SharedContext
from imagesmith.core.exceptions import (
    AuthorizationError,
    CleanupError,
    CloudAPIError,
    ConfigurationError,
    CreationError,
    ImageSmithError,
    InvalidConfigError,
    RetryExhaustedError,
    StateKeyError,
    StepError,
)
from imagesmith.core.resilience import RetryPolicy, retry
from imagesmith.core.types import IngressRule, StepAction

__all__ = [
    "AuthorizationError",
    "CleanupError",
    "CloudAPIError",
    "ConfigurationError",
    "CreationError",
    "ImageSmithError",
    "IngressRule",
    "InvalidConfigError",
    "RetryExhaustedError",
    "RetryPolicy",
    "SharedContext",
    "StateKeyError",
    "StepAction",
    "StepError",
    "retry",
]

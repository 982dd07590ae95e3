"""
Core Exceptions - Unified error hierarchy for imagesmith.

Each exception type handles one category of errors.
"""

from __future__ import annotations


class ImageSmithError(Exception):
    """Base exception for all imagesmith errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(ImageSmithError):
    """Step or application configuration is invalid."""
    pass


class InvalidConfigError(ConfigurationError):
    """Configuration file could not be parsed or validated."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Invalid configuration in '{path}': {reason}",
            {"path": path}
        )
        self.path = path
        self.reason = reason


# =============================================================================
# Context Errors
# =============================================================================

class StateKeyError(ImageSmithError):
    """A step read a context key that was never published, or wrote a wrong type."""

    def __init__(self, key: str, reason: str = "not set"):
        super().__init__(
            f"State key '{key}' {reason}",
            {"key": key}
        )
        self.key = key


# =============================================================================
# Cloud Errors
# =============================================================================

class CloudAPIError(ImageSmithError):
    """A cloud provider API call failed."""

    def __init__(self, operation: str, reason: str, code: str | None = None):
        details = {"operation": operation}
        if code:
            details["code"] = code
        super().__init__(f"{operation} failed: {reason}", details)
        self.operation = operation
        self.reason = reason
        self.code = code


# =============================================================================
# Step Errors
# =============================================================================

class StepError(ImageSmithError):
    """A build step failed."""

    def __init__(
        self,
        message: str,
        group_id: str | None = None,
        original_error: Exception | None = None,
    ):
        details: dict = {}
        if group_id:
            details["group_id"] = group_id
        if original_error is not None:
            details["original_error_type"] = type(original_error).__name__
        super().__init__(message, details)
        self.group_id = group_id
        self.original_error = original_error


class CreationError(StepError):
    """Security group creation failed. Nothing exists to clean up."""
    pass


class AuthorizationError(StepError):
    """Ingress authorization failed after the group was created."""
    pass


class CleanupError(StepError):
    """Deleting a created resource failed after every retry."""
    pass


# =============================================================================
# Resilience Errors
# =============================================================================

class RetryExhaustedError(ImageSmithError):
    """Every attempt of a retried call failed."""

    def __init__(self, operation: str, attempts: int, last_error: Exception):
        super().__init__(
            f"{operation} failed after {attempts} attempts: {last_error}",
            {"operation": operation, "attempts": attempts}
        )
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error

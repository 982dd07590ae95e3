"""
Security utilities for imagesmith.
"""
import re
from typing import List, Optional

# AKIA... (long-term) and ASIA... (temporary) access key ids
_ACCESS_KEY_ID = re.compile(r"\b(?:AKIA|ASIA)[A-Z0-9]{16}\b")

_SECRET_NAMES = [
    "aws_secret_access_key", "aws_session_token", "secret_access_key",
    "session_token", "SecretAccessKey", "SessionToken", "password", "token",
]


def redact_sensitive_info(text: str, extra_secrets: Optional[List[str]] = None) -> Optional[str]:
    """
    Redact AWS credentials from text before it is logged.

    Patterns redacted:
    - Access key ids: AKIA..., ASIA...
    - Key/value pairs: aws_secret_access_key=..., "SessionToken": "..."
    - Known secrets provided in extra_secrets

    Args:
        text: Original text with potential sensitive data
        extra_secrets: Optional list of specific secret values to redact

    Returns:
        Text with sensitive values replaced by [REDACTED]
    """
    if not text:
        return text

    redacted = text

    if extra_secrets:
        # Longest first so overlapping secrets are fully removed
        for secret in sorted((s for s in extra_secrets if s), key=len, reverse=True):
            if len(secret) < 3:
                continue
            redacted = redacted.replace(secret, "[REDACTED]")

    redacted = _ACCESS_KEY_ID.sub("[REDACTED]", redacted)

    for name in _SECRET_NAMES:
        # name=value / name: value, optionally quoted
        redacted = re.sub(
            rf"""(["']?{name}["']?\s*[=:]\s*)(["']?)([^\s,'"}}]+)(\2)""",
            r"\1\2[REDACTED]\4",
            redacted,
            flags=re.IGNORECASE,
        )

    return redacted

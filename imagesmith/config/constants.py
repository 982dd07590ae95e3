"""
imagesmith Configuration Constants.

Centralized constants for naming, network rules and retry limits.
"""

# Security group naming
SECURITY_GROUP_NAME_PREFIX = "imagesmith"
SECURITY_GROUP_DESCRIPTION = "Temporary group for imagesmith"

# Ingress
DEFAULT_SSH_PORT = 22
SSH_PROTOCOL = "tcp"
DEFAULT_SSH_CIDR = "0.0.0.0/0"  # Open to all

# Cleanup retry
CLEANUP_RETRY_ATTEMPTS = 5  # Total attempts, including the first
CLEANUP_RETRY_DELAY_SECONDS = 5.0
MAX_CLEANUP_WAIT_SECONDS = 600.0  # Upper bound on total sleep across all attempts

# AWS
DEFAULT_AWS_REGION = "us-east-1"

# Paths
DEFAULT_DATA_DIR_NAME = ".imagesmith"
CONFIG_FILE_NAME = "config.yaml"

"""
imagesmith Config - Configuration models.

Pydantic models for type-safe configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from imagesmith.config.constants import (
    CLEANUP_RETRY_ATTEMPTS,
    CLEANUP_RETRY_DELAY_SECONDS,
    DEFAULT_AWS_REGION,
    DEFAULT_SSH_PORT,
    MAX_CLEANUP_WAIT_SECONDS,
)


class AWSConfig(BaseModel):
    """AWS connection settings."""

    region: str = Field(default=DEFAULT_AWS_REGION, description="AWS region")
    profile: str | None = Field(default=None, description="Named profile from ~/.aws/config")


class SecurityGroupConfig(BaseModel):
    """Security group step settings."""

    security_group_id: str = Field(
        default="", description="Existing security group to use instead of creating one"
    )
    # 0 is accepted here and rejected by the step, which reports it as a halt
    ssh_port: int = Field(
        default=DEFAULT_SSH_PORT, ge=0, le=65535, description="Port opened for SSH access"
    )
    vpc_id: str = Field(default="", description="VPC to create the security group in")


class RetryConfig(BaseModel):
    """Cleanup retry settings."""

    attempts: int = Field(
        default=CLEANUP_RETRY_ATTEMPTS, ge=1, le=20, description="Total delete attempts"
    )
    delay_seconds: float = Field(
        default=CLEANUP_RETRY_DELAY_SECONDS, ge=0, le=300, description="Delay between attempts"
    )
    backoff: float = Field(default=1.0, ge=1, le=10, description="Delay multiplier per attempt")
    max_delay_seconds: float | None = Field(
        default=None, ge=0, le=300, description="Cap on a single delay"
    )

    @property
    def worst_case_wait(self) -> float:
        """Total sleep if every attempt fails."""
        total = 0.0
        for attempt in range(1, self.attempts):
            delay = self.delay_seconds * self.backoff ** (attempt - 1)
            if self.max_delay_seconds is not None:
                delay = min(delay, self.max_delay_seconds)
            total += delay
        return total

    @model_validator(mode="after")
    def _bound_total_wait(self):
        """Reject schedules that could keep cleanup sleeping too long."""
        if self.worst_case_wait > MAX_CLEANUP_WAIT_SECONDS:
            raise ValueError(
                f"cleanup retry could wait {self.worst_case_wait:.0f}s in total, "
                f"limit is {MAX_CLEANUP_WAIT_SECONDS:.0f}s; lower attempts, "
                "delay_seconds or backoff, or set max_delay_seconds"
            )
        return self


class Config(BaseModel):
    """Root configuration."""

    aws: AWSConfig = Field(default_factory=AWSConfig)
    security_group: SecurityGroupConfig = Field(default_factory=SecurityGroupConfig)
    cleanup_retry: RetryConfig = Field(default_factory=RetryConfig)

"""
imagesmith Steps - Security group.

Ensures a security group allowing inbound SSH exists for the build
instance, publishes its id for later steps, and deletes it again during
cleanup if this step created it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger

from imagesmith.config.constants import (
    DEFAULT_SSH_CIDR,
    SECURITY_GROUP_DESCRIPTION,
    SECURITY_GROUP_NAME_PREFIX,
    SSH_PROTOCOL,
)
from imagesmith.core.exceptions import (
    AuthorizationError,
    CleanupError,
    ConfigurationError,
    CreationError,
    RetryExhaustedError,
)
from imagesmith.core.metrics import timing, track_cleanup_failure
from imagesmith.core.resilience import RetryPolicy
from imagesmith.core.types import IngressRule, StepAction
from imagesmith.steps.base import BaseStep
from imagesmith.utils.ids import time_ordered_uuid
from imagesmith.utils.logger import log_prefix

if TYPE_CHECKING:
    from imagesmith.config.models import RetryConfig, SecurityGroupConfig
    from imagesmith.core.context import SharedContext


class SecurityGroupStep(BaseStep):
    """
    Create a temporary security group, or reuse an existing one.

    When ``security_group_id`` is given the step only publishes it and
    never touches the cloud API. Otherwise it creates a group named
    ``imagesmith <time ordered uuid>``, opens ``ssh_port`` to 0.0.0.0/0
    and remembers the id so cleanup() can delete it.

    Example:
        >>> step = SecurityGroupStep(ssh_port=22, vpc_id="vpc-1")
        >>> step.run(ctx)
        <StepAction.CONTINUE: 'continue'>
        >>> ctx.security_group_id
        'sg-0123456789abcdef0'
    """

    name = "security_group"

    def __init__(
        self,
        security_group_id: str = "",
        ssh_port: int = 0,
        vpc_id: str = "",
        retry_policy: RetryPolicy | None = None,
        token_generator: Callable[[], str] = time_ordered_uuid,
    ):
        """
        Initialize the step.

        Args:
            security_group_id: Existing group to use; disables creation.
            ssh_port: Port to open for SSH; 1..65535 when creating.
            vpc_id: VPC to create the group in; EC2-Classic/default VPC if empty.
            retry_policy: Policy for deleting the group during cleanup.
            token_generator: Source of the unique part of the group name.
        """
        self.security_group_id = security_group_id
        self.ssh_port = ssh_port
        self.vpc_id = vpc_id
        self.retry_policy = retry_policy or RetryPolicy()
        self.token_generator = token_generator

        self.created_group_id: str | None = None

    @classmethod
    def from_config(
        cls,
        config: SecurityGroupConfig,
        retry: RetryConfig | None = None,
    ) -> SecurityGroupStep:
        """Build a step from configuration models."""
        policy = None
        if retry is not None:
            policy = RetryPolicy(
                max_attempts=retry.attempts,
                delay=retry.delay_seconds,
                backoff=retry.backoff,
                max_delay=retry.max_delay_seconds,
            )
        return cls(
            security_group_id=config.security_group_id,
            ssh_port=config.ssh_port,
            vpc_id=config.vpc_id,
            retry_policy=policy,
        )

    def run(self, ctx: SharedContext) -> StepAction:
        if self.security_group_id:
            logger.info(f"Using specified security group: {self.security_group_id}")
            ctx.security_group_id = self.security_group_id
            return StepAction.CONTINUE

        if self.ssh_port == 0:
            return self.halt(
                ctx, ConfigurationError("ssh_port must be set to a non-zero value.")
            )
        if not 0 < self.ssh_port <= 65535:
            return self.halt(
                ctx,
                ConfigurationError(f"ssh_port must be between 1 and 65535, got: {self.ssh_port}"),
            )

        client = ctx.cloud_client
        ui = ctx.ui

        ui.say("Creating temporary security group for this instance...")
        group_name = f"{SECURITY_GROUP_NAME_PREFIX} {self.token_generator()}"
        logger.info(f"{log_prefix('🔒')} Temporary group name: {group_name}")

        try:
            with timing("create_security_group"):
                group_id = client.create_security_group(
                    group_name, SECURITY_GROUP_DESCRIPTION, self.vpc_id or None
                )
        except Exception as e:
            return self.halt(ctx, CreationError(str(e), original_error=e))

        # Remembered before authorizing so cleanup deletes it even if that fails
        self.created_group_id = group_id

        rules = [
            IngressRule(
                protocol=SSH_PROTOCOL,
                from_port=self.ssh_port,
                to_port=self.ssh_port,
                cidr_blocks=(DEFAULT_SSH_CIDR,),
            )
        ]

        ui.say("Authorizing SSH access on the temporary security group...")
        try:
            client.authorize_ingress(group_id, rules)
        except Exception as e:
            return self.halt(
                ctx,
                AuthorizationError(
                    f"Error creating temporary security group: {e}",
                    group_id=group_id,
                    original_error=e,
                ),
            )

        ctx.security_group_id = group_id
        return StepAction.CONTINUE

    def cleanup(self, ctx: SharedContext) -> None:
        if not self.created_group_id:
            return

        client = ctx.cloud_client
        ui = ctx.ui
        group_id = self.created_group_id

        ui.say("Deleting temporary security group...")

        try:
            self.retry_policy.call(client.delete_security_group, group_id)
        except RetryExhaustedError as e:
            self._report_orphan(ui, group_id, e.last_error)
            return
        except Exception as e:
            # Errors outside the policy's retryable set end the loop early
            self._report_orphan(ui, group_id, e)
            return

        logger.info(f"{log_prefix('🧹')} Deleted temporary security group {group_id}")

    def _report_orphan(self, ui, group_id: str, last_error: Exception) -> None:
        error = CleanupError(
            f"Error cleaning up security group. Please delete the group manually: {group_id}",
            group_id=group_id,
            original_error=last_error,
        )
        logger.warning(f"{log_prefix('⚠️')} {error} (last error: {last_error})")
        track_cleanup_failure("security_group")
        ui.error(error.message)

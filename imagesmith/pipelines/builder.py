"""
imagesmith Pipelines - Builder.

Wires configuration into a ready-to-run security group pipeline: the
EC2 client from ``aws``, the step from ``security_group`` and the cleanup
policy from ``cleanup_retry``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from imagesmith.cloud.client import EC2SecurityGroupClient
from imagesmith.config.loader import get_config
from imagesmith.core.context import SharedContext
from imagesmith.pipelines.runner import StepRunner
from imagesmith.steps.security_group import SecurityGroupStep
from imagesmith.ui.console import ConsoleUI

if TYPE_CHECKING:
    from imagesmith.cloud.client import CloudResourceClient
    from imagesmith.config.models import Config
    from imagesmith.ui.console import OutputSink


def build_pipeline(
    config: Config | None = None,
    ui: OutputSink | None = None,
    cloud_client: CloudResourceClient | None = None,
) -> tuple[SharedContext, StepRunner]:
    """
    Build a context and runner for the security group step.

    Args:
        config: Configuration to use (default: the cached ~/.imagesmith config).
        ui: Output sink (default: a rich ConsoleUI).
        cloud_client: Cloud client (default: EC2 client for ``config.aws``).

    Returns:
        Tuple of (context, runner); call ``runner.run(context)``.
    """
    config = config or get_config()
    if cloud_client is None:
        cloud_client = EC2SecurityGroupClient.from_config(config.aws)
    ctx = SharedContext.create(cloud_client=cloud_client, ui=ui or ConsoleUI())

    step = SecurityGroupStep.from_config(config.security_group, config.cleanup_retry)
    logger.debug(
        f"Built pipeline for {config.aws.region} "
        f"(cleanup worst case {step.retry_policy.worst_case_wait:.0f}s)"
    )
    return ctx, StepRunner([step])

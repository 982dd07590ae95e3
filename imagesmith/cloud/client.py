"""
imagesmith Cloud - Security group API client.

Defines the capability surface the build steps need and a boto3
implementation of it for EC2.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from imagesmith.core.exceptions import CloudAPIError
from imagesmith.core.types import IngressRule

if TYPE_CHECKING:
    from imagesmith.config.models import AWSConfig


@runtime_checkable
class CloudResourceClient(Protocol):
    """
    Protocol for security group management.

    Every method raises on failure. Deleting a group that no longer
    exists is reported as a failure like any other.
    """

    def create_security_group(self, name: str, description: str, vpc_id: str | None = None) -> str:
        """Create a security group and return its id."""
        ...

    def authorize_ingress(self, group_id: str, rules: Sequence[IngressRule]) -> None:
        """Add inbound rules to a security group."""
        ...

    def delete_security_group(self, group_id: str) -> None:
        """Delete a security group by id."""
        ...


class EC2SecurityGroupClient:
    """EC2 security group client backed by boto3."""

    def __init__(
        self,
        region: str = "us-east-1",
        profile: str | None = None,
        client: Any | None = None,
    ):
        """
        Initialize the client.

        Args:
            region: AWS region.
            profile: Optional named profile; the default credential chain otherwise.
            client: Pre-built boto3 EC2 client (mainly for tests).
        """
        self.region = region
        if client is None:
            session = boto3.Session(profile_name=profile, region_name=region)
            client = session.client("ec2")
        self.ec2 = client

    @classmethod
    def from_config(cls, config: AWSConfig, client: Any | None = None) -> EC2SecurityGroupClient:
        """Build a client for the configured region and profile."""
        return cls(region=config.region, profile=config.profile, client=client)

    def create_security_group(self, name: str, description: str, vpc_id: str | None = None) -> str:
        """Create a security group and return its GroupId."""
        params: dict[str, Any] = {"GroupName": name, "Description": description}
        if vpc_id:
            params["VpcId"] = vpc_id

        logger.info(f"Creating security group {name} in {self.region}")
        response = self._call("CreateSecurityGroup", self.ec2.create_security_group, **params)
        group_id = response["GroupId"]
        logger.debug(f"Created security group {group_id}")
        return group_id

    def authorize_ingress(self, group_id: str, rules: Sequence[IngressRule]) -> None:
        """Authorize inbound rules on a security group."""
        logger.info(f"Authorizing {len(rules)} ingress rule(s) on {group_id}")
        self._call(
            "AuthorizeSecurityGroupIngress",
            self.ec2.authorize_security_group_ingress,
            GroupId=group_id,
            IpPermissions=[rule.to_ip_permission() for rule in rules],
        )

    def delete_security_group(self, group_id: str) -> None:
        """Delete a security group by id."""
        logger.info(f"Deleting security group {group_id}")
        self._call("DeleteSecurityGroup", self.ec2.delete_security_group, GroupId=group_id)

    def _call(self, operation: str, method: Any, **params: Any) -> dict[str, Any]:
        try:
            return method(**params)
        except ClientError as e:
            error = e.response.get("Error", {})
            code = error.get("Code")
            logger.error(f"{operation} failed ({code}): {error.get('Message', e)}")
            raise CloudAPIError(operation, error.get("Message") or str(e), code) from e
        except BotoCoreError as e:
            logger.error(f"{operation} failed: {e}")
            raise CloudAPIError(operation, str(e)) from e

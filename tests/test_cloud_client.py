"""Tests for the boto3-backed EC2 security group client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from imagesmith.cloud.client import CloudResourceClient, EC2SecurityGroupClient
from imagesmith.config.models import AWSConfig
from imagesmith.core.exceptions import CloudAPIError
from imagesmith.core.types import IngressRule


def _client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def ec2() -> MagicMock:
    mock = MagicMock()
    mock.create_security_group.return_value = {"GroupId": "sg-0123"}
    return mock


@pytest.fixture
def client(ec2) -> EC2SecurityGroupClient:
    return EC2SecurityGroupClient(region="eu-west-1", client=ec2)


class TestEC2SecurityGroupClient:
    def test_implements_protocol(self, client):
        assert isinstance(client, CloudResourceClient)

    def test_create_in_vpc(self, client, ec2):
        group_id = client.create_security_group("imagesmith x", "Temporary group", "vpc-1")

        assert group_id == "sg-0123"
        ec2.create_security_group.assert_called_once_with(
            GroupName="imagesmith x", Description="Temporary group", VpcId="vpc-1"
        )

    def test_create_without_vpc_omits_vpc_id(self, client, ec2):
        client.create_security_group("imagesmith x", "Temporary group")

        assert "VpcId" not in ec2.create_security_group.call_args.kwargs

    def test_authorize_builds_ip_permissions(self, client, ec2):
        client.authorize_ingress("sg-0123", [IngressRule("tcp", 22, 22, ("0.0.0.0/0",))])

        ec2.authorize_security_group_ingress.assert_called_once_with(
            GroupId="sg-0123",
            IpPermissions=[
                {
                    "IpProtocol": "tcp",
                    "FromPort": 22,
                    "ToPort": 22,
                    "IpRanges": [{"CidrIp": "0.0.0.0/0"}],
                }
            ],
        )

    def test_delete(self, client, ec2):
        client.delete_security_group("sg-0123")

        ec2.delete_security_group.assert_called_once_with(GroupId="sg-0123")

    def test_client_error_becomes_cloud_api_error(self, client, ec2):
        ec2.delete_security_group.side_effect = _client_error(
            "DependencyViolation", "resource sg-0123 has a dependent object", "DeleteSecurityGroup"
        )

        with pytest.raises(CloudAPIError) as exc_info:
            client.delete_security_group("sg-0123")

        assert exc_info.value.operation == "DeleteSecurityGroup"
        assert exc_info.value.code == "DependencyViolation"
        assert "dependent object" in exc_info.value.reason

    def test_already_deleted_group_is_an_error(self, client, ec2):
        ec2.delete_security_group.side_effect = _client_error(
            "InvalidGroup.NotFound", "The security group 'sg-0123' does not exist", "DeleteSecurityGroup"
        )

        with pytest.raises(CloudAPIError) as exc_info:
            client.delete_security_group("sg-0123")
        assert exc_info.value.code == "InvalidGroup.NotFound"

    def test_transport_error_becomes_cloud_api_error(self, client, ec2):
        ec2.create_security_group.side_effect = EndpointConnectionError(
            endpoint_url="https://ec2.eu-west-1.amazonaws.com"
        )

        with pytest.raises(CloudAPIError) as exc_info:
            client.create_security_group("imagesmith x", "Temporary group")
        assert exc_info.value.code is None


class TestFromConfig:
    def test_session_uses_configured_region_and_profile(self):
        with patch("imagesmith.cloud.client.boto3.Session") as session_cls:
            client = EC2SecurityGroupClient.from_config(
                AWSConfig(region="ap-northeast-1", profile="builder")
            )

        session_cls.assert_called_once_with(profile_name="builder", region_name="ap-northeast-1")
        session_cls.return_value.client.assert_called_once_with("ec2")
        assert client.ec2 is session_cls.return_value.client.return_value
        assert client.region == "ap-northeast-1"

    def test_default_config_uses_credential_chain(self):
        with patch("imagesmith.cloud.client.boto3.Session") as session_cls:
            EC2SecurityGroupClient.from_config(AWSConfig())

        session_cls.assert_called_once_with(profile_name=None, region_name="us-east-1")

    def test_prebuilt_client_skips_session(self, ec2):
        with patch("imagesmith.cloud.client.boto3.Session") as session_cls:
            client = EC2SecurityGroupClient.from_config(AWSConfig(region="eu-west-1"), client=ec2)

        session_cls.assert_not_called()
        assert client.ec2 is ec2

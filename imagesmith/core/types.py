"""
imagesmith Core - Shared types and enums.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class StepAction(StrEnum):
    """Outcome of a step's forward action."""

    CONTINUE = "continue"
    HALT = "halt"


@dataclass(frozen=True)
class IngressRule:
    """Inbound rule for a security group."""

    protocol: str
    from_port: int
    to_port: int
    cidr_blocks: tuple[str, ...] = field(default_factory=tuple)

    def to_ip_permission(self) -> dict[str, Any]:
        """Convert to an EC2 IpPermissions entry."""
        return {
            "IpProtocol": self.protocol,
            "FromPort": self.from_port,
            "ToPort": self.to_port,
            "IpRanges": [{"CidrIp": cidr} for cidr in self.cidr_blocks],
        }

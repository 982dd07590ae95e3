"""
imagesmith Cloud - Provider API clients.
"""

from imagesmith.cloud.client import CloudResourceClient, EC2SecurityGroupClient

__all__ = ["CloudResourceClient", "EC2SecurityGroupClient"]

"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from imagesmith.cloud.client import CloudResourceClient
from imagesmith.core.context import SharedContext
from imagesmith.core.metrics import reset_metrics
from imagesmith.core.resilience import RetryPolicy
from imagesmith.ui.console import OutputSink


@pytest.fixture(autouse=True)
def clean_metrics():
    """Reset global metrics around each test."""
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def cloud_client() -> MagicMock:
    """Cloud client whose calls all succeed."""
    client = MagicMock(spec=CloudResourceClient)
    client.create_security_group.return_value = "sg-abc"
    client.authorize_ingress.return_value = None
    client.delete_security_group.return_value = None
    return client


@pytest.fixture
def ui() -> MagicMock:
    """Output sink recording say/error calls."""
    return MagicMock(spec=OutputSink)


@pytest.fixture
def ctx(cloud_client: MagicMock, ui: MagicMock) -> SharedContext:
    """Shared context wired to the mock client and UI."""
    return SharedContext.create(cloud_client=cloud_client, ui=ui)


@pytest.fixture
def sleeps() -> list[float]:
    """Delays requested by the retry policy."""
    return []


@pytest.fixture
def retry_policy(sleeps: list[float]) -> RetryPolicy:
    """Default cleanup policy that records delays instead of sleeping."""
    return RetryPolicy(sleep=sleeps.append)

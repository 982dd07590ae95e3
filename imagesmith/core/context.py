"""
imagesmith Core - Shared Context.

The SharedContext is passed by reference through every step of a build
pipeline. Keys this package relies on have typed accessors; any other
step may still exchange values through the generic string-keyed bag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from loguru import logger

from imagesmith.core.exceptions import StateKeyError
from imagesmith.utils.logger import log_prefix

if TYPE_CHECKING:
    from imagesmith.cloud.client import CloudResourceClient
    from imagesmith.ui.console import OutputSink

# Well-known state keys
CLOUD_CLIENT = "cloud-client"
UI_SINK = "ui-sink"
SECURITY_GROUP_ID = "security-group-id"
LAST_ERROR = "last-error"

_TYPED_KEYS = {
    SECURITY_GROUP_ID: str,
    LAST_ERROR: Exception,
}


@dataclass
class SharedContext:
    """
    Shared state between all steps of one pipeline run.

    Reading a required key that was never set raises StateKeyError,
    a contract violation between steps rather than a runtime condition.
    """

    _cloud_client: CloudResourceClient | None = field(default=None, repr=False)
    _ui: OutputSink | None = field(default=None, repr=False)
    _security_group_id: str | None = None
    last_error: Exception | None = None
    halted: bool = False
    _values: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def create(cls, cloud_client: CloudResourceClient, ui: OutputSink) -> SharedContext:
        """Create a context wired to a cloud client and an output sink."""
        ctx = cls(_cloud_client=cloud_client, _ui=ui)
        logger.debug(f"{log_prefix('✅')} SharedContext created")
        return ctx

    @property
    def cloud_client(self) -> CloudResourceClient:
        """Get the cloud API client."""
        if self._cloud_client is None:
            raise StateKeyError(CLOUD_CLIENT)
        return self._cloud_client

    @property
    def ui(self) -> OutputSink:
        """Get the user-visible output sink."""
        if self._ui is None:
            raise StateKeyError(UI_SINK)
        return self._ui

    @property
    def security_group_id(self) -> str:
        """Get the security group id published for later steps."""
        if self._security_group_id is None:
            raise StateKeyError(SECURITY_GROUP_ID)
        return self._security_group_id

    @security_group_id.setter
    def security_group_id(self, value: str) -> None:
        if not isinstance(value, str) or not value:
            raise StateKeyError(SECURITY_GROUP_ID, "must be a non-empty string")
        self._security_group_id = value

    def get(self, key: str) -> Any:
        """
        Get a value by key.

        Typed keys are routed to their accessors.

        Raises:
            StateKeyError: If the key was never set.
        """
        if key == CLOUD_CLIENT:
            return self.cloud_client
        if key == UI_SINK:
            return self.ui
        if key == SECURITY_GROUP_ID:
            return self.security_group_id
        if key == LAST_ERROR:
            return self.last_error
        if key not in self._values:
            raise StateKeyError(key)
        return self._values[key]

    def put(self, key: str, value: Any) -> None:
        """
        Store a value by key.

        Raises:
            StateKeyError: If a typed key receives a value of the wrong type.
        """
        expected = _TYPED_KEYS.get(key)
        if expected is not None and value is not None and not isinstance(value, expected):
            raise StateKeyError(key, f"expects {expected.__name__}, got {type(value).__name__}")

        if key == CLOUD_CLIENT:
            self._cloud_client = value
        elif key == UI_SINK:
            self._ui = value
        elif key == SECURITY_GROUP_ID:
            self.security_group_id = value
        elif key == LAST_ERROR:
            self.last_error = value
        else:
            self._values[key] = value

    def __contains__(self, key: str) -> bool:
        try:
            self.get(key)
        except StateKeyError:
            return False
        return True

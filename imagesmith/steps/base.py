"""
imagesmith Steps - Base step.

A step is one unit of a build pipeline with a forward action and a
best-effort cleanup action.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from loguru import logger

from imagesmith.core.types import StepAction
from imagesmith.utils.logger import log_prefix

if TYPE_CHECKING:
    from imagesmith.core.context import SharedContext
    from imagesmith.core.exceptions import ImageSmithError


@runtime_checkable
class Step(Protocol):
    """Protocol for pipeline steps."""

    name: str

    def run(self, ctx: SharedContext) -> StepAction:
        """Execute the forward action."""
        ...

    def cleanup(self, ctx: SharedContext) -> None:
        """Undo what run() created. Must not raise."""
        ...


class BaseStep(ABC):
    """
    Base class for steps.

    Subclasses implement run() and cleanup(); halt() records a failure
    where the runner and later reporting can find it.
    """

    name: str = "step"

    @abstractmethod
    def run(self, ctx: SharedContext) -> StepAction:
        """Execute the forward action."""

    @abstractmethod
    def cleanup(self, ctx: SharedContext) -> None:
        """Undo what run() created."""

    def halt(self, ctx: SharedContext, error: ImageSmithError) -> StepAction:
        """Record error in the context, report it and signal HALT."""
        logger.error(f"{log_prefix('❌')} Step {self.name} failed: {error}")
        ctx.last_error = error
        ctx.ui.error(error.message)
        return StepAction.HALT

"""
imagesmith Pipelines - Sequential step runner.

Runs steps in order, stops at the first HALT and then cleans up every
step that was started, in reverse order.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from loguru import logger

from imagesmith.core.exceptions import ImageSmithError
from imagesmith.core.metrics import track_step_execution
from imagesmith.core.types import StepAction
from imagesmith.utils.logger import log_prefix

if TYPE_CHECKING:
    from imagesmith.core.context import SharedContext
    from imagesmith.steps.base import Step


class StepRunner:
    """
    Basic sequential pipeline runner.

    Cleanup always runs, whether the pipeline completed or halted, so
    every step releases what it created once the run is over.
    """

    def __init__(self, steps: Sequence[Step]):
        self.steps = list(steps)

    def run(self, ctx: SharedContext) -> StepAction:
        """
        Run all steps, then clean them up.

        Args:
            ctx: Shared context passed to every step.

        Returns:
            CONTINUE if every step continued, HALT otherwise.
        """
        started: list[Step] = []
        action = StepAction.CONTINUE

        try:
            for step in self.steps:
                started.append(step)
                action = self._run_step(step, ctx)
                if action == StepAction.HALT:
                    ctx.halted = True
                    logger.warning(f"{log_prefix('⚠️')} Pipeline halted at step {step.name}")
                    break
        finally:
            self._cleanup(started, ctx)

        return action

    def _run_step(self, step: Step, ctx: SharedContext) -> StepAction:
        logger.debug(f"Running step {step.name}")
        start = time.monotonic()
        try:
            action = step.run(ctx)
        except ImageSmithError as e:
            # Contract violations (e.g. a missing state key) halt like any failure
            logger.error(f"{log_prefix('❌')} Step {step.name} raised: {e}")
            ctx.last_error = e
            action = StepAction.HALT
            track_step_execution(step.name, time.monotonic() - start, "error")
            return action

        track_step_execution(step.name, time.monotonic() - start, action.value)
        return action

    def _cleanup(self, started: list[Step], ctx: SharedContext) -> None:
        for step in reversed(started):
            logger.debug(f"Cleaning up step {step.name}")
            try:
                step.cleanup(ctx)
            except Exception as e:
                logger.error(f"{log_prefix('❌')} Cleanup of step {step.name} failed: {e}")

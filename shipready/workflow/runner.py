"""
Workflow Runner

Executes workflow steps in order, one at a time, recording status and
timing for each. A failing step is recorded and the run carries on with
the next one.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Union

from ..errors import WorkflowDefinitionError
from .models import (
    StepStatus,
    WorkflowConfig,
    WorkflowResult,
    WorkflowStep,
    coerce_step_result,
    duration_ms,
)

logger = logging.getLogger(__name__)

StepFunction = Callable[[Path, WorkflowConfig], Awaitable[Any]]
StepCondition = Callable[[Sequence[WorkflowStep], WorkflowConfig], bool]
StepListener = Callable[[WorkflowStep], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _error_text(error: Exception) -> str:
    return str(error) or error.__class__.__name__


@dataclass(frozen=True)
class StepDefinition:
    """
    A named unit of work.

    `run` is awaited with the project root and the run's config. When
    `condition` is set it sees the steps finished so far and decides
    whether the step runs at all; if not the step is recorded as skipped.
    """
    id: str
    name: str
    run: StepFunction
    description: str = ""
    condition: Optional[StepCondition] = None

    def new_step(self) -> WorkflowStep:
        return WorkflowStep(id=self.id, name=self.name, description=self.description)


def validate_definitions(definitions: Sequence[StepDefinition]) -> None:
    """
    Raises:
        WorkflowDefinitionError: If there are no steps or ids repeat
    """
    if not definitions:
        raise WorkflowDefinitionError("A workflow needs at least one step")

    seen = set()
    for definition in definitions:
        if definition.id in seen:
            raise WorkflowDefinitionError(f"Duplicate step id: {definition.id}")
        seen.add(definition.id)


class WorkflowRunner:
    """
    Sequences step definitions.

    The runner itself does no I/O. Callers observe progress through the
    on_step_start and on_step_end listeners, which is where state gets
    persisted and progress gets printed.
    """

    def __init__(
        self,
        project_root: Union[str, Path],
        on_step_start: Optional[StepListener] = None,
        on_step_end: Optional[StepListener] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the runner.

        Args:
            project_root: Passed to every step
            on_step_start: Called right after a step enters running
            on_step_end: Called once a step reaches a terminal status
            clock: Time source. Defaults to UTC now.
        """
        self.project_root = Path(project_root)
        self.on_step_start = on_step_start
        self.on_step_end = on_step_end
        self.clock = clock or _utcnow

    async def run(
        self,
        definitions: Sequence[StepDefinition],
        config: WorkflowConfig,
        completed: Optional[Sequence[WorkflowStep]] = None,
    ) -> WorkflowResult:
        """
        Run the steps in order.

        Args:
            definitions: Steps to execute, in order
            config: Run parameters handed to every step
            completed: Steps already finished by an earlier, interrupted
                run. Terminal ones are reused as-is and not executed again.

        Returns:
            WorkflowResult covering every step

        Raises:
            WorkflowDefinitionError: If the step list is empty or has
                duplicate ids
        """
        validate_definitions(definitions)

        finished = {s.id: s for s in (completed or []) if s.is_terminal}
        started = self.clock()
        steps: List[WorkflowStep] = []

        for definition in definitions:
            previous = finished.get(definition.id)
            if previous is not None:
                logger.debug("Step %s already %s, not running it again", definition.id, previous.status.value)
                steps.append(previous)
                continue

            step = definition.new_step()

            try:
                should_run = definition.condition is None or definition.condition(list(steps), config)
            except Exception as e:
                logger.error("Condition of step %s failed: %s", definition.id, e)
                step.mark_finished(StepStatus.FAILED, self.clock(), error=_error_text(e))
            else:
                if should_run:
                    await self._execute(definition, step, config)
                else:
                    logger.info("Skipping step %s: condition not met", definition.id)
                    step.mark_finished(StepStatus.SKIPPED, self.clock())

            steps.append(step)
            self._notify(self.on_step_end, step)

        return WorkflowResult.from_steps(steps, duration_ms(started, self.clock()))

    def _notify(self, listener: Optional[StepListener], step: WorkflowStep) -> None:
        """Call a progress listener. Its errors are logged, never raised."""
        if listener is None:
            return
        try:
            listener(step)
        except Exception as e:
            logger.warning("Progress listener failed on step %s: %s", step.id, e)
            logger.debug("Listener traceback", exc_info=True)

    async def _execute(self, definition: StepDefinition, step: WorkflowStep, config: WorkflowConfig) -> None:
        step.mark_running(self.clock())
        self._notify(self.on_step_start, step)

        try:
            payload = coerce_step_result(await definition.run(self.project_root, config))
        except Exception as e:
            logger.error("Step %s failed: %s", definition.id, e)
            logger.debug("Step %s traceback", definition.id, exc_info=True)
            step.mark_finished(StepStatus.FAILED, self.clock(), error=_error_text(e))
            return

        step.result = payload
        status = StepStatus.SKIPPED if payload is not None and payload.skipped else StepStatus.COMPLETED
        step.mark_finished(status, self.clock())

"""
Workflow Orchestrator

Runs the complete ship workflow for a project: composes the step list,
persists progress after every step so an interrupted run can pick up
where it stopped, and records finished runs in the history.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from rich.console import Console

from .models import WorkflowConfig, WorkflowResult, WorkflowState, WorkflowStep
from .report import (
    display_progress,
    display_step_header,
    display_step_outcome,
    display_workflow_summary,
)
from .runner import StepDefinition, WorkflowRunner
from .state import WorkflowStateStore
from .steps import build_default_steps

logger = logging.getLogger(__name__)


class WorkflowOrchestrator:
    """
    Drives one workflow run against a project directory.

    Example:
        orchestrator = WorkflowOrchestrator("./my-app", WorkflowConfig(skip_deploy=False))
        result = await orchestrator.run(resume=True)
    """

    def __init__(
        self,
        project_root: Union[str, Path],
        config: Optional[WorkflowConfig] = None,
        console: Optional[Console] = None,
        store: Optional[WorkflowStateStore] = None,
        steps: Optional[Sequence[StepDefinition]] = None,
        step_factory: Optional[Callable[[WorkflowConfig], List[StepDefinition]]] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            project_root: Project directory
            config: Run parameters. Ignored when a saved run is resumed,
                which keeps its own.
            console: Where progress is printed
            store: State store. Defaults to one for project_root.
            steps: Fixed step list, overriding the built-in steps
            step_factory: Builds the step list from the run's config.
                Defaults to the built-in ship steps.
        """
        self.project_root = Path(project_root)
        self.config = config or WorkflowConfig()
        self.console = console or Console()
        self.store = store or WorkflowStateStore(self.project_root)
        self.steps = list(steps) if steps is not None else None
        self.step_factory = step_factory or build_default_steps

    def _definitions(self, config: WorkflowConfig) -> List[StepDefinition]:
        if self.steps is not None:
            return self.steps
        return self.step_factory(config)

    def _resumable_state(self) -> Optional[WorkflowState]:
        saved = self.store.load()
        if saved is None:
            self.console.print("[dim]No saved workflow to resume, starting a new run[/dim]")
            return None

        if not self.store.can_resume(saved):
            logger.info("Saved workflow %s is finished or stale, starting over", saved.id)
            self.console.print("[yellow]Saved workflow cannot be resumed, starting a new run[/yellow]")
            self.store.clear()
            return None

        self.console.print(f"[cyan]Resuming workflow {saved.id}[/cyan]")
        display_progress(saved, self.console)
        return saved

    async def run(self, resume: bool = False) -> WorkflowResult:
        """
        Run the workflow.

        Args:
            resume: Continue a saved run if one is resumable. Steps it
                already finished are kept and not executed again.

        Returns:
            WorkflowResult of the run, resumed steps included
        """
        state = self._resumable_state() if resume else None
        completed: List[WorkflowStep] = []

        if state is not None:
            config = state.config
            definitions = self._definitions(config)
            completed = list(state.steps)
        else:
            config = self.config
            definitions = self._definitions(config)
            state = self.store.create(len(definitions), config)
            self.store.save(state)

        positions = {d.id: index for index, d in enumerate(definitions, start=1)}
        total = len(definitions)

        def on_step_start(step: WorkflowStep) -> None:
            display_step_header(positions[step.id], total, step.name, self.console)

        def on_step_end(step: WorkflowStep) -> None:
            self.store.update(state, step)
            self.store.save(state)
            display_step_outcome(step, self.console)

        logger.info("Running workflow %s with %d steps", state.id, total)
        runner = WorkflowRunner(
            self.project_root,
            on_step_start=on_step_start,
            on_step_end=on_step_end,
            clock=self.store.clock,
        )
        result = await runner.run(definitions, config, completed=completed)

        self.store.append_to_history(result)
        display_workflow_summary(result, self.console)
        return result


async def run_complete_workflow(
    project_root: Union[str, Path],
    config: Optional[WorkflowConfig] = None,
    resume: bool = False,
    console: Optional[Console] = None,
) -> WorkflowResult:
    """Run the built-in ship workflow."""
    orchestrator = WorkflowOrchestrator(project_root, config=config, console=console)
    return await orchestrator.run(resume=resume)


async def quick_complete(project_root: Union[str, Path], console: Optional[Console] = None) -> bool:
    """
    Run every check with deployment left out.

    Returns:
        Whether the project is ready to launch
    """
    result = await run_complete_workflow(project_root, WorkflowConfig(skip_deploy=True), console=console)
    return result.summary.ready_to_launch

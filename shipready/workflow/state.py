"""
Workflow State Management

Persists run progress to .ship-toolkit/workflow-state.json so an
interrupted run can be resumed, and keeps a short history of finished
runs in .ship-toolkit/workflow-history.json.

Both files are rewritten in full on every write with no locking; only
one run per project directory is supported at a time. Persistence is
best effort: unreadable files count as absent, failed writes are
reported and otherwise ignored.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List, Optional, Union

from pydantic import TypeAdapter

from ..config.defaults import TOOL_DIR
from ..errors import WorkflowDefinitionError
from .models import (
    HistoryEntry,
    StepStatus,
    WorkflowConfig,
    WorkflowResult,
    WorkflowState,
    WorkflowStatus,
    WorkflowStep,
)

logger = logging.getLogger(__name__)

DiagnosticCallback = Callable[[str, Exception], None]

_history_adapter = TypeAdapter(List[HistoryEntry])


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_workflow_id(now: datetime) -> str:
    return f"workflow-{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:9]}"


class WorkflowStateStore:
    """
    Owns the state and history files of one project.

    Args:
        project_root: Project directory
        on_diagnostic: Called with (message, error) whenever a read or
            write problem is swallowed
        clock: Time source. Defaults to UTC now.
    """

    STATE_FILENAME = "workflow-state.json"
    HISTORY_FILENAME = "workflow-history.json"
    HISTORY_LIMIT = 10
    RESUME_WINDOW = timedelta(hours=24)

    def __init__(
        self,
        project_root: Union[str, Path],
        on_diagnostic: Optional[DiagnosticCallback] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.project_root = Path(project_root)
        self.state_dir = self.project_root / TOOL_DIR
        self.state_file = self.state_dir / self.STATE_FILENAME
        self.history_file = self.state_dir / self.HISTORY_FILENAME
        self.on_diagnostic = on_diagnostic
        self.clock = clock or _utcnow

    def _report(self, message: str, error: Exception) -> None:
        logger.warning("%s: %s", message, error)
        if self.on_diagnostic:
            self.on_diagnostic(message, error)

    # ------------------------------------------------------------
    # State
    # ------------------------------------------------------------

    def create(self, total_steps: int, config: Optional[WorkflowConfig] = None) -> WorkflowState:
        """
        Start a new run.

        Raises:
            WorkflowDefinitionError: If total_steps is below 1
        """
        if total_steps < 1:
            raise WorkflowDefinitionError(f"total_steps must be at least 1, got {total_steps}")

        now = self.clock()
        return WorkflowState(
            id=new_workflow_id(now),
            project_root=str(self.project_root),
            start_time=now,
            last_update=now,
            status=WorkflowStatus.IN_PROGRESS,
            current_step=0,
            total_steps=total_steps,
            steps=[],
            config=config or WorkflowConfig(),
        )

    def update(self, state: WorkflowState, step: WorkflowStep) -> WorkflowState:
        """
        Record a step in the state.

        The step replaces one with the same id or is appended. The step
        counter becomes the number of finished steps; once every step has
        finished the run is marked failed if any step failed, else
        completed.
        """
        for index, existing in enumerate(state.steps):
            if existing.id == step.id:
                state.steps[index] = step
                break
        else:
            state.steps.append(step)

        state.current_step = sum(1 for s in state.steps if s.is_terminal)

        if state.current_step >= state.total_steps:
            failed = any(s.status == StepStatus.FAILED for s in state.steps)
            state.status = WorkflowStatus.FAILED if failed else WorkflowStatus.COMPLETED

        state.last_update = self.clock()
        return state

    def save(self, state: WorkflowState) -> bool:
        """
        Overwrite the state file with the given state.

        Returns:
            True if the file was written
        """
        try:
            self.state_dir.mkdir(parents=True, exist_ok=True)
            self.state_file.write_text(state.to_json(), encoding="utf-8")
        except (OSError, ValueError) as e:
            self._report(f"Failed to save workflow state to {self.state_file}", e)
            return False
        return True

    def load(self) -> Optional[WorkflowState]:
        """
        Read the saved state.

        Returns:
            The state, or None if there is no file or it cannot be parsed
        """
        if not self.state_file.exists():
            return None

        try:
            return WorkflowState.model_validate_json(self.state_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self._report(f"Failed to load workflow state from {self.state_file}", e)
            return None

    def clear(self) -> bool:
        """
        Delete the saved state file.

        Returns:
            True if no state file is left behind
        """
        try:
            self.state_file.unlink(missing_ok=True)
        except OSError as e:
            self._report(f"Failed to remove workflow state {self.state_file}", e)
            return False
        return True

    def next_step(self, state: WorkflowState) -> int:
        """Index of the step a resumed run starts at."""
        return state.current_step

    def can_resume(self, state: WorkflowState, now: Optional[datetime] = None) -> bool:
        """
        Whether a saved run should be picked up again.

        Only unfinished, in-progress runs touched within the last 24
        hours qualify. Anything older is stale and starts over.
        """
        now = now or self.clock()
        return (
            state.status == WorkflowStatus.IN_PROGRESS
            and state.current_step < state.total_steps
            and now - state.last_update < self.RESUME_WINDOW
        )

    # ------------------------------------------------------------
    # History
    # ------------------------------------------------------------

    def load_history(self) -> List[HistoryEntry]:
        """Read the history, newest first. Empty if missing or unreadable."""
        if not self.history_file.exists():
            return []

        try:
            return _history_adapter.validate_json(self.history_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self._report(f"Failed to load workflow history from {self.history_file}", e)
            return []

    def append_to_history(self, result: WorkflowResult) -> List[HistoryEntry]:
        """
        Add a finished run to the front of the history.

        Only the newest HISTORY_LIMIT entries are kept.

        Returns:
            The history as written
        """
        history = self.load_history()
        history.insert(0, HistoryEntry.from_result(result, self.clock()))
        history = history[:self.HISTORY_LIMIT]

        try:
            self.state_dir.mkdir(parents=True, exist_ok=True)
            self.history_file.write_bytes(
                _history_adapter.dump_json(history, by_alias=True, indent=2)
            )
        except (OSError, ValueError) as e:
            self._report(f"Failed to save workflow history to {self.history_file}", e)

        return history

"""
Workflow Models

Step, state and result types for the ship workflow. Everything here
serializes to camelCase JSON and loads back with the same shape, which
is what makes interrupted runs resumable.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..errors import WorkflowDefinitionError
from ..launch.models import LaunchChecklist


class StepStatus(str, Enum):
    """Status of a workflow step."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


TERMINAL_STATUSES = frozenset({StepStatus.COMPLETED, StepStatus.FAILED, StepStatus.SKIPPED})


class WorkflowStatus(str, Enum):
    """Status of a whole workflow run."""
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class WorkflowModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


def as_utc(value: datetime) -> datetime:
    """Timestamps without an offset are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


def duration_ms(start: datetime, end: datetime) -> int:
    return int(round((end - start).total_seconds() * 1000))


# ============================================================
# Step result payloads
# ============================================================

class StepPayload(WorkflowModel):
    """Base for step results. A payload with skipped=True ends the step as skipped."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    skipped: bool = False


class AssetsResult(StepPayload):
    kind: Literal["assets"] = "assets"
    assets_generated: int = 0
    total_bytes: int = 0


class SeoResult(StepPayload):
    kind: Literal["seo"] = "seo"
    seo_score: int = Field(default=0, ge=0, le=100)
    items_found: int = 0
    items_total: int = 4


class PerformanceResult(StepPayload):
    kind: Literal["performance"] = "performance"
    performance_score: int = Field(default=0, ge=0, le=100)
    images_optimized: int = 0
    oversized_images: int = 0
    meets_target: bool = False


class ChecklistResult(StepPayload):
    kind: Literal["launch-checklist"] = "launch-checklist"
    checklist: LaunchChecklist
    fixes: List[str] = Field(default_factory=list, description="Automated fix commands to apply")


class DeploymentResult(StepPayload):
    kind: Literal["deployment"] = "deployment"
    platform: Optional[str] = None
    url: Optional[str] = None
    production: bool = False
    message: Optional[str] = None


class GenericResult(StepPayload):
    """Free-form payload for steps that are not built in."""
    kind: Literal["generic"] = "generic"
    data: Dict[str, Any] = Field(default_factory=dict)


StepResult = Annotated[
    Union[AssetsResult, SeoResult, PerformanceResult, ChecklistResult, DeploymentResult, GenericResult],
    Field(discriminator="kind"),
]


def coerce_step_result(value: Any) -> Optional[StepPayload]:
    """
    Normalize whatever a step returned into a payload.

    Raises:
        TypeError: If the value is neither a payload, a dict nor None
    """
    if value is None or isinstance(value, StepPayload):
        return value
    if isinstance(value, dict):
        return GenericResult(data=value)
    raise TypeError(f"step returned unsupported result type {type(value).__name__}")


# ============================================================
# Steps, config, state
# ============================================================

class WorkflowStep(WorkflowModel):
    """
    One unit of orchestrated work.

    pending -> running -> completed | failed | skipped. Terminal states
    are final.
    """

    id: str
    name: str
    description: str = ""
    status: StepStatus = StepStatus.PENDING
    start_time: Optional[UtcDatetime] = None
    end_time: Optional[UtcDatetime] = None
    duration: Optional[int] = Field(None, description="Milliseconds from start to end")
    error: Optional[str] = None
    result: Optional[StepResult] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def mark_running(self, now: datetime) -> None:
        if self.status != StepStatus.PENDING:
            raise WorkflowDefinitionError(f"Step '{self.id}' cannot start from status {self.status.value}")
        self.status = StepStatus.RUNNING
        self.start_time = now

    def mark_finished(self, status: StepStatus, now: datetime, error: Optional[str] = None) -> None:
        if status not in TERMINAL_STATUSES:
            raise WorkflowDefinitionError(f"{status.value} is not a terminal step status")
        if self.is_terminal:
            raise WorkflowDefinitionError(f"Step '{self.id}' already finished as {self.status.value}")

        if self.start_time is None:
            # Finished without ever running.
            self.start_time = now
        self.status = status
        self.end_time = now
        self.duration = duration_ms(self.start_time, now)
        self.error = error


class WorkflowConfig(WorkflowModel):
    """Parameters of one workflow run. Passed unchanged to every step."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    skip_assets: bool = False
    skip_seo: bool = False
    skip_perf: bool = False
    skip_deploy: bool = True
    auto_fix: bool = True
    target_score: int = Field(default=90, ge=0, le=100)
    production: bool = False


class WorkflowState(WorkflowModel):
    """Durable progress record of one run."""

    id: str
    project_root: str
    start_time: UtcDatetime
    last_update: UtcDatetime
    status: WorkflowStatus = WorkflowStatus.IN_PROGRESS
    current_step: int = 0
    total_steps: int
    steps: List[WorkflowStep] = Field(default_factory=list)
    config: WorkflowConfig = Field(default_factory=WorkflowConfig)

    @property
    def next_step(self) -> int:
        """Index of the next step to execute."""
        return self.current_step


# ============================================================
# Results and history
# ============================================================

class WorkflowSummary(WorkflowModel):
    assets_generated: int = 0
    seo_score: int = 0
    performance_score: int = 0
    launch_score: int = 0
    ready_to_launch: bool = False


class WorkflowResult(WorkflowModel):
    """Outcome of a workflow run."""

    steps: List[WorkflowStep]
    overall_success: bool
    total_duration: int = Field(..., description="Milliseconds")
    launch_checklist: Optional[LaunchChecklist] = None
    deployment_url: Optional[str] = None
    summary: WorkflowSummary = Field(default_factory=WorkflowSummary)

    @classmethod
    def from_steps(cls, steps: Sequence[WorkflowStep], total_duration: int) -> "WorkflowResult":
        """
        Summarize finished steps.

        Payloads are matched by kind, so the summary does not depend on
        which optional steps ran.
        """
        steps = list(steps)
        summary = WorkflowSummary()
        checklist: Optional[LaunchChecklist] = None
        deployment_url: Optional[str] = None

        for step in steps:
            payload = step.result
            if isinstance(payload, AssetsResult):
                summary.assets_generated = payload.assets_generated
            elif isinstance(payload, SeoResult):
                summary.seo_score = payload.seo_score
            elif isinstance(payload, PerformanceResult):
                summary.performance_score = payload.performance_score
            elif isinstance(payload, ChecklistResult):
                checklist = payload.checklist
            elif isinstance(payload, DeploymentResult):
                deployment_url = payload.url

        if checklist is not None:
            summary.launch_score = checklist.overall_score
            summary.ready_to_launch = checklist.ready_to_launch

        return cls(
            steps=steps,
            overall_success=all(
                s.status in (StepStatus.COMPLETED, StepStatus.SKIPPED) for s in steps
            ),
            total_duration=total_duration,
            launch_checklist=checklist,
            deployment_url=deployment_url,
            summary=summary,
        )


class StepSummary(WorkflowModel):
    id: str
    name: str
    status: StepStatus
    duration: Optional[int] = None


class HistoryEntry(WorkflowModel):
    """Summary of a finished run kept in the history file."""

    timestamp: UtcDatetime
    duration: int
    success: bool
    summary: WorkflowSummary
    steps: List[StepSummary] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: WorkflowResult, timestamp: datetime) -> "HistoryEntry":
        return cls(
            timestamp=timestamp,
            duration=result.total_duration,
            success=result.overall_success,
            summary=result.summary.model_copy(),
            steps=[
                StepSummary(id=s.id, name=s.name, status=s.status, duration=s.duration)
                for s in result.steps
            ],
        )

"""
Ship Workflow

Runs the ship steps in order, persisting progress so an interrupted run
can be resumed, and keeps a short history of finished runs.
"""

from .models import (
    HistoryEntry,
    StepStatus,
    WorkflowConfig,
    WorkflowResult,
    WorkflowState,
    WorkflowStatus,
    WorkflowStep,
    WorkflowSummary,
)
from .orchestrator import WorkflowOrchestrator, quick_complete, run_complete_workflow
from .report import (
    display_history,
    display_progress,
    display_workflow_summary,
    export_workflow_report,
    format_duration,
)
from .runner import StepDefinition, WorkflowRunner
from .state import WorkflowStateStore
from .steps import build_default_steps

__all__ = [
    "HistoryEntry",
    "StepDefinition",
    "StepStatus",
    "WorkflowConfig",
    "WorkflowOrchestrator",
    "WorkflowResult",
    "WorkflowRunner",
    "WorkflowState",
    "WorkflowStateStore",
    "WorkflowStatus",
    "WorkflowStep",
    "WorkflowSummary",
    "build_default_steps",
    "display_history",
    "display_progress",
    "display_workflow_summary",
    "export_workflow_report",
    "format_duration",
    "quick_complete",
    "run_complete_workflow",
]

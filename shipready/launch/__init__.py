"""
Launch Checklist

Scores a project's launch readiness from independent checks.
"""

from .evaluator import (
    CheckProvider,
    ReadinessEvaluator,
    get_quick_status,
    run_launch_checklist,
)
from .models import ChecklistItem, ChecklistSection, CheckStatus, LaunchChecklist
from .reporter import (
    automated_fixes,
    display_launch_checklist,
    load_checklist,
    render_html,
    render_json,
    render_markdown,
    write_report,
)
from .scoring import STATUS_POINTS, build_section, calculate_section_score

__all__ = [
    "CheckProvider",
    "CheckStatus",
    "ChecklistItem",
    "ChecklistSection",
    "LaunchChecklist",
    "ReadinessEvaluator",
    "STATUS_POINTS",
    "build_section",
    "calculate_section_score",
    "automated_fixes",
    "display_launch_checklist",
    "get_quick_status",
    "load_checklist",
    "render_html",
    "render_json",
    "render_markdown",
    "run_launch_checklist",
    "write_report",
]

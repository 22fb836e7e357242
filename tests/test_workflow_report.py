"""Tests for workflow display and report export."""

import io
import json

import pytest
from rich.console import Console

from shipready.launch.evaluator import ReadinessEvaluator
from shipready.workflow.models import (
    ChecklistResult,
    HistoryEntry,
    SeoResult,
    StepStatus,
    WorkflowResult,
    WorkflowStep,
)
from shipready.workflow.report import (
    display_history,
    display_progress,
    display_workflow_summary,
    export_workflow_report,
    format_duration,
    progress_bar,
)
from shipready.workflow.state import WorkflowStateStore


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def result(fixed_now) -> WorkflowResult:
    seo = WorkflowStep(id="seo", name="SEO Optimization", description="Check meta tags")
    seo.result = SeoResult(seo_score=75, items_found=3)
    seo.mark_finished(StepStatus.COMPLETED, fixed_now)

    perf = WorkflowStep(id="performance", name="Performance Optimization")
    perf.mark_finished(StepStatus.FAILED, fixed_now, error="lighthouse crashed")

    checklist = ReadinessEvaluator(clock=lambda: fixed_now).evaluate([])
    launch = WorkflowStep(id="launch-checklist", name="Launch Checklist")
    launch.result = ChecklistResult(checklist=checklist)
    launch.mark_finished(StepStatus.COMPLETED, fixed_now)

    return WorkflowResult.from_steps([seo, perf, launch], 65_000)


class TestFormatDuration:
    @pytest.mark.parametrize(
        "ms, expected",
        [
            (0, "0s"),
            (3_000, "3s"),
            (3_999, "3s"),
            (123_000, "2m 3s"),
            (3_723_000, "1h 2m 3s"),
            (3_600_000, "1h 0m 0s"),
            (None, "0s"),
        ],
    )
    def test_format(self, ms, expected):
        assert format_duration(ms) == expected


class TestProgressBar:
    def test_half(self):
        bar = progress_bar(2, 4)
        assert len(bar) == 40
        assert bar.count("█") == 20

    def test_complete(self):
        assert progress_bar(3, 3) == "█" * 40


class TestSummary:
    def test_from_steps_matches_payloads_by_kind(self, result):
        assert result.summary.seo_score == 75
        assert result.summary.performance_score == 0
        assert result.summary.launch_score == 100
        assert result.summary.ready_to_launch is True
        assert result.overall_success is False
        assert result.launch_checklist is not None

    def test_display(self, result):
        console = _console()
        display_workflow_summary(result, console)
        output = console.file.getvalue()

        assert "Workflow Summary" in output
        assert "lighthouse crashed" in output
        assert "1m 5s" in output
        assert "SHIP IT" in output

    def test_display_progress(self, tmp_path, result):
        store = WorkflowStateStore(tmp_path)
        state = store.create(4)
        for step in result.steps:
            store.update(state, step)
        console = _console()

        display_progress(state, console)

        assert "75% (3/4)" in console.file.getvalue()


class TestHistoryDisplay:
    def test_empty(self):
        console = _console()
        display_history([], console)
        assert "No workflow history found" in console.file.getvalue()

    def test_entries(self, result, fixed_now):
        console = _console()
        display_history([HistoryEntry.from_result(result, fixed_now)], console)
        output = console.file.getvalue()

        assert "Workflow History" in output
        assert "2026-03-01 12:00" in output
        assert "100/100" in output


class TestExport:
    def test_json(self, tmp_path, result, fixed_now):
        path = export_workflow_report(tmp_path, result, "json", now=fixed_now)

        assert path.parent == tmp_path / ".ship-toolkit"
        assert path.name == f"workflow-report-{int(fixed_now.timestamp() * 1000)}.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["overallSuccess"] is False
        assert data["totalDuration"] == 65_000
        assert data["steps"][0]["result"]["kind"] == "seo"
        assert WorkflowResult.model_validate(data) == result

    def test_markdown(self, tmp_path, result, fixed_now):
        path = export_workflow_report(tmp_path, result, "md", now=fixed_now)
        md = path.read_text(encoding="utf-8")

        assert path.suffix == ".md"
        assert md.startswith("# Ship Workflow Report")
        assert "### ✅ SEO Optimization (0.0s)" in md
        assert "**Error:** lighthouse crashed" in md
        assert '"seoScore": 75' in md
        assert "## Launch Checklist" in md

    def test_unknown_format(self, tmp_path, result):
        with pytest.raises(ValueError):
            export_workflow_report(tmp_path, result, "html")

"""
Workflow Reporting

Console display of workflow results, progress and history, and export
of a finished run as a JSON or Markdown report.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config.defaults import TOOL_DIR
from .models import ChecklistResult, HistoryEntry, StepStatus, WorkflowResult, WorkflowState, WorkflowStep

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "md")

STEP_ICONS = {
    StepStatus.PENDING: "⏳",
    StepStatus.RUNNING: "🔄",
    StepStatus.COMPLETED: "✅",
    StepStatus.FAILED: "❌",
    StepStatus.SKIPPED: "ℹ️",
}

STEP_STYLES = {
    StepStatus.PENDING: "dim",
    StepStatus.RUNNING: "cyan",
    StepStatus.COMPLETED: "green",
    StepStatus.FAILED: "red",
    StepStatus.SKIPPED: "dim",
}

PROGRESS_WIDTH = 40


def step_icon(status: StepStatus) -> str:
    return STEP_ICONS[StepStatus(status)]


def format_duration(ms: Optional[int]) -> str:
    """
    Human readable duration.

    Examples: 3723000 -> "1h 2m 3s", 123000 -> "2m 3s", 3000 -> "3s".
    """
    seconds = int(ms or 0) // 1000
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def progress_bar(current: int, total: int, width: int = PROGRESS_WIDTH) -> str:
    if total <= 0:
        return "░" * width
    filled = min(width, round(current / total * width))
    return "█" * filled + "░" * (width - filled)


# ============================================================
# Console
# ============================================================

def display_step_header(index: int, total: int, name: str, console: Console) -> None:
    console.print()
    console.rule(f"[bold cyan]Step {index}/{total}: {escape(name)}[/bold cyan]", style="cyan")


def display_step_outcome(step: WorkflowStep, console: Console) -> None:
    """One line for a step that just finished."""
    style = STEP_STYLES[step.status]
    line = f"{step_icon(step.status)} [{style}]{escape(step.name)}[/{style}] {step.status.value}"
    if step.duration is not None:
        line += f" [dim]({format_duration(step.duration)})[/dim]"
    console.print(line)
    if step.error:
        console.print(f"   [red]{escape(step.error)}[/red]")
    if isinstance(step.result, ChecklistResult):
        for fix in step.result.fixes:
            console.print(f"   [yellow]Automated fix: {escape(fix)}[/yellow]")


def display_workflow_summary(result: WorkflowResult, console: Optional[Console] = None) -> None:
    """Print the per-step table and the ship verdict of a finished run."""
    console = console or Console()

    console.print()
    console.rule("[bold]Workflow Summary[/bold]", style="cyan")

    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 1))
    table.add_column("", width=3)
    table.add_column("Step")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    table.add_column("Details", style="dim")

    for step in result.steps:
        style = STEP_STYLES[step.status]
        table.add_row(
            step_icon(step.status),
            escape(step.name),
            f"[{style}]{step.status.value}[/{style}]",
            format_duration(step.duration) if step.duration is not None else "-",
            escape(step.error or ""),
        )

    console.print(table)
    console.print()

    summary = result.summary
    console.print(f"Total duration: {format_duration(result.total_duration)}")
    console.print(f"Assets: {summary.assets_generated}")
    console.print(f"SEO score: {summary.seo_score}/100")
    console.print(f"Performance score: {summary.performance_score}/100")
    console.print(f"Launch score: {summary.launch_score}/100")
    if result.deployment_url:
        console.print(f"Deployed to: {escape(result.deployment_url)}")
    console.print()

    if summary.ready_to_launch:
        console.print(Panel.fit(
            "[bold green]Ready to ship![/bold green]\n\n"
            f"Launch score: {summary.launch_score}/100",
            title="SHIP IT",
            border_style="green",
        ))
    else:
        failed = [s.name for s in result.steps if s.status == StepStatus.FAILED]
        lines = ["[bold yellow]Not ready to ship yet[/bold yellow]", ""]
        if failed:
            lines.append(f"Failed steps: {escape(', '.join(failed))}")
        lines.append("Run shipready launch for the full checklist.")
        console.print(Panel.fit("\n".join(lines), title="NOT READY", border_style="red"))


def display_progress(state: WorkflowState, console: Optional[Console] = None) -> None:
    """Progress bar and step list of a saved run."""
    console = console or Console()

    percent = round(state.current_step / state.total_steps * 100) if state.total_steps else 0
    console.print(
        f"[cyan]{progress_bar(state.current_step, state.total_steps)}[/cyan] "
        f"{percent}% ({state.current_step}/{state.total_steps})"
    )
    for step in state.steps:
        display_step_outcome(step, console)


def display_history(entries: Sequence[HistoryEntry], console: Optional[Console] = None) -> None:
    """Print previous runs, newest first."""
    console = console or Console()

    if not entries:
        console.print("[yellow]No workflow history found[/yellow]")
        return

    table = Table(title="Workflow History", title_justify="left", header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("", width=3)
    table.add_column("Date")
    table.add_column("Duration", justify="right")
    table.add_column("Launch", justify="right")
    table.add_column("Assets", justify="right")
    table.add_column("Performance", justify="right")

    for index, entry in enumerate(entries, start=1):
        table.add_row(
            str(index),
            "✅" if entry.success else "❌",
            entry.timestamp.strftime("%Y-%m-%d %H:%M"),
            format_duration(entry.duration),
            f"{entry.summary.launch_score}/100",
            str(entry.summary.assets_generated),
            f"{entry.summary.performance_score}/100",
        )

    console.print(table)


# ============================================================
# Export
# ============================================================

def render_workflow_markdown(result: WorkflowResult, generated_at: datetime) -> str:
    summary = result.summary
    lines: List[str] = [
        "# Ship Workflow Report",
        "",
        f"**Generated:** {generated_at.isoformat()}",
        f"**Duration:** {format_duration(result.total_duration)}",
        f"**Status:** {'Success' if result.overall_success else 'Failed'}",
        "",
        "## Summary",
        "",
        f"- **Assets:** {summary.assets_generated}",
        f"- **SEO Score:** {summary.seo_score}/100",
        f"- **Performance Score:** {summary.performance_score}/100",
        f"- **Launch Score:** {summary.launch_score}/100",
        f"- **Ready to Launch:** {'Yes' if summary.ready_to_launch else 'No'}",
        "",
        "## Steps",
        "",
    ]

    for step in result.steps:
        seconds = (step.duration or 0) / 1000
        lines.append(f"### {step_icon(step.status)} {step.name} ({seconds:.1f}s)")
        lines.append("")
        if step.description:
            lines.append(step.description)
            lines.append("")
        lines.append(f"**Status:** {step.status.value}")
        if step.error:
            lines.append(f"**Error:** {step.error}")
        if step.result is not None:
            lines.append("")
            lines.append("```json")
            lines.append(step.result.model_dump_json(by_alias=True, indent=2, exclude={"checklist"}))
            lines.append("```")
        lines.append("")

    checklist = result.launch_checklist
    if checklist is not None:
        lines.append("## Launch Checklist")
        lines.append("")
        lines.append(f"**Overall Score:** {checklist.overall_score}/100")
        lines.append(f"**Critical Issues:** {len(checklist.critical_issues)}")
        lines.append(f"**Warnings:** {len(checklist.warnings)}")
        lines.append("")
        for issue in checklist.critical_issues:
            lines.append(f"- ❌ {issue.name}: {issue.message or ''}")
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


def export_workflow_report(
    project_root: Union[str, Path],
    result: WorkflowResult,
    fmt: str = "json",
    now: Optional[datetime] = None,
) -> Path:
    """
    Write a finished run to .ship-toolkit/workflow-report-<timestamp>.<fmt>.

    Args:
        project_root: Project directory
        result: The run to export
        fmt: "json" or "md"
        now: Report time. Defaults to UTC now.

    Returns:
        Path of the written report

    Raises:
        ValueError: If fmt is not a supported format
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown workflow report format '{fmt}', expected one of {', '.join(EXPORT_FORMATS)}")

    now = now or datetime.now(timezone.utc)
    tool_dir = Path(project_root) / TOOL_DIR
    tool_dir.mkdir(parents=True, exist_ok=True)
    path = tool_dir / f"workflow-report-{int(now.timestamp() * 1000)}.{fmt}"

    if fmt == "json":
        content = json.dumps(
            {"generatedAt": now.isoformat(), **result.model_dump(mode="json", by_alias=True)},
            indent=2,
        )
    else:
        content = render_workflow_markdown(result, now)

    path.write_text(content, encoding="utf-8")
    logger.info("Workflow report written to %s", path)
    return path

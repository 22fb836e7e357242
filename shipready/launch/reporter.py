"""
Launch Reporter

Renders a LaunchChecklist for the terminal (rich), as a self-contained
HTML page (Jinja2), as JSON and as Markdown.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from jinja2 import Environment
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models import ChecklistSection, CheckStatus, LaunchChecklist

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("html", "json", "md")

STATUS_ICONS = {
    CheckStatus.PASS: "✅",
    CheckStatus.FAIL: "❌",
    CheckStatus.WARNING: "⚠️",
    CheckStatus.SKIP: "ℹ️",
}

STATUS_STYLES = {
    CheckStatus.PASS: "green",
    CheckStatus.FAIL: "red",
    CheckStatus.WARNING: "yellow",
    CheckStatus.SKIP: "dim",
}


def status_icon(status: CheckStatus) -> str:
    return STATUS_ICONS[CheckStatus(status)]


def score_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def format_timestamp(checklist: LaunchChecklist) -> str:
    return checklist.timestamp.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


# ============================================================
# Console
# ============================================================

def display_launch_checklist(checklist: LaunchChecklist, console: Optional[Console] = None) -> None:
    """Print the full checklist, verdict, issues and next steps."""
    console = console or Console()

    console.rule("[bold]Pre-Launch Checklist[/bold]", style="cyan")

    for section in checklist.sections:
        _display_section(section, console)

    console.print()
    console.rule(f"[bold]Overall Score: {checklist.overall_score}/100[/bold]", style="cyan")
    console.print()

    if checklist.ready_to_launch:
        console.print(Panel.fit(
            "[bold green]Ready to Launch![/bold green]\n\n"
            "Your project passes all critical checks.\n\n"
            f"Score: {checklist.overall_score}/100",
            title="READY TO LAUNCH",
            border_style="green",
        ))
    else:
        console.print(Panel.fit(
            "[bold yellow]Not Ready to Launch[/bold yellow]\n\n"
            "Please fix critical issues before launching.\n\n"
            f"Score: {checklist.overall_score}/100",
            title="NOT READY",
            border_style="red",
        ))

    if checklist.critical_issues:
        console.print()
        console.print("[bold red]Critical Issues[/bold red]")
        for issue in checklist.critical_issues:
            console.print(f"  [red]• {escape(issue.name)}: {escape(issue.message or '')}[/red]")
            if issue.fix:
                console.print(f"    [dim]Fix: {escape(issue.fix)}[/dim]")

    if checklist.warnings:
        console.print()
        console.print("[bold yellow]Warnings[/bold yellow]")
        for warning in checklist.warnings:
            console.print(f"  [yellow]• {escape(warning.name)}: {escape(warning.message or '')}[/yellow]")
            if warning.fix:
                console.print(f"    [dim]Suggestion: {escape(warning.fix)}[/dim]")

    console.print()
    console.print("[bold]Next Steps:[/bold]")
    for index, step in enumerate(next_steps(checklist), start=1):
        console.print(f"  {index}. {step}")
    console.print()


def _display_section(section: ChecklistSection, console: Console) -> None:
    style = score_style(section.score)
    passed = sum(1 for item in section.items if item.status == CheckStatus.PASS)

    table = Table(
        title=f"[{style}]{escape(section.name)}[/{style}] ({passed}/{len(section.items)} passed) - {section.score}%",
        title_justify="left",
        show_header=False,
        box=None,
        padding=(0, 1),
    )
    table.add_column("Icon", width=3)
    table.add_column("Check")
    table.add_column("Details", style="dim")

    for item in section.items:
        item_style = STATUS_STYLES[CheckStatus(item.status)]
        table.add_row(
            status_icon(item.status),
            f"[{item_style}]{escape(item.name)}[/{item_style}]",
            escape(item.message or ""),
        )

    console.print()
    console.print(table)


def automated_fixes(checklist: LaunchChecklist) -> List[str]:
    """Fix commands of automatable critical issues, without repeats."""
    fixes = []
    for issue in checklist.critical_issues:
        if issue.automated and issue.fix and issue.fix not in fixes:
            fixes.append(issue.fix)
    return fixes


def next_steps(checklist: LaunchChecklist) -> List[str]:
    """Suggested follow-ups for a checklist, in order."""
    steps = []

    if checklist.critical_issues:
        steps.append("Fix critical issues listed above")

        fixes = automated_fixes(checklist)
        if fixes:
            steps.append(f"Automated fixes available: {', '.join(fixes)}")

    if checklist.warnings:
        steps.append("Review and address warnings")

    if checklist.ready_to_launch:
        steps.append("Deploy to production")
        steps.append("Share your launch")
        steps.append("Monitor analytics and errors")
    else:
        steps.append("Run shipready launch again after fixes")

    return steps


# ============================================================
# HTML
# ============================================================

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Launch Checklist Report</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', sans-serif; background: #f5f5f5; padding: 2rem; line-height: 1.6; }
    .container { max-width: 1200px; margin: 0 auto; background: white; border-radius: 8px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); overflow: hidden; }
    .header { background: {{ '#10b981' if checklist.ready_to_launch else '#ef4444' }}; color: white; padding: 2rem; text-align: center; }
    .header h1 { font-size: 2rem; margin-bottom: 0.5rem; }
    .header .score { font-size: 3rem; font-weight: bold; margin: 1rem 0; }
    .header .status { font-size: 1.2rem; opacity: 0.9; }
    .content { padding: 2rem; }
    .summary { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 1rem; margin-bottom: 2rem; }
    .summary-card { background: #f9fafb; padding: 1rem; border-radius: 8px; border: 1px solid #e5e5e5; text-align: center; }
    .summary-card h3 { font-size: 0.9rem; color: #6b7280; margin-bottom: 0.5rem; }
    .summary-card .value { font-size: 2rem; font-weight: bold; color: #111827; }
    .section { margin-bottom: 2rem; border: 1px solid #e5e5e5; border-radius: 8px; overflow: hidden; }
    .section-header { background: #f9fafb; padding: 1rem; border-bottom: 1px solid #e5e5e5; display: flex; justify-content: space-between; align-items: center; }
    .section-header h2 { font-size: 1.2rem; color: #111827; }
    .section-score { font-weight: bold; color: #6b7280; }
    .item { padding: 1rem; border-bottom: 1px solid #f3f4f6; display: flex; align-items: center; gap: 1rem; }
    .item:last-child { border-bottom: none; }
    .item-icon { font-size: 1.2rem; flex-shrink: 0; }
    .item-content { flex: 1; }
    .item-name { font-weight: 500; color: #111827; margin-bottom: 0.25rem; }
    .item-message { font-size: 0.9rem; color: #6b7280; }
    .item-fix { font-size: 0.85rem; color: #3b82f6; margin-top: 0.25rem; }
    .status-pass { background: #f0fdf4; }
    .status-warning { background: #fffbeb; }
    .status-fail { background: #fef2f2; }
    .status-skip { background: #f9fafb; }
    .timestamp { text-align: center; color: #6b7280; font-size: 0.9rem; margin-top: 2rem; padding-top: 2rem; border-top: 1px solid #e5e5e5; }
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>Launch Checklist Report</h1>
      <div class="score">{{ checklist.overall_score }}/100</div>
      <div class="status">{{ '✅ Ready to Launch!' if checklist.ready_to_launch else '⚠️ Not Ready to Launch' }}</div>
    </div>
    <div class="content">
      <div class="summary">
        <div class="summary-card">
          <h3>Sections</h3>
          <div class="value">{{ checklist.sections | length }}</div>
        </div>
        <div class="summary-card">
          <h3>Critical Issues</h3>
          <div class="value" style="color: {{ '#ef4444' if checklist.critical_issues else '#10b981' }}">{{ checklist.critical_issues | length }}</div>
        </div>
        <div class="summary-card">
          <h3>Warnings</h3>
          <div class="value" style="color: {{ '#f59e0b' if checklist.warnings else '#10b981' }}">{{ checklist.warnings | length }}</div>
        </div>
      </div>
{% for section in checklist.sections %}
      <div class="section">
        <div class="section-header">
          <h2>{{ section.name }}</h2>
          <span class="section-score">{{ section.score }}%</span>
        </div>
        <div class="section-items">
{% for item in section.items %}
          <div class="item status-{{ item.status.value }}">
            <div class="item-icon">{{ icon(item.status) }}</div>
            <div class="item-content">
              <div class="item-name">{{ item.name }}</div>
{% if item.message %}              <div class="item-message">{{ item.message }}</div>
{% endif %}{% if item.fix %}              <div class="item-fix">💡 {{ item.fix }}</div>
{% endif %}            </div>
          </div>
{% endfor %}
        </div>
      </div>
{% endfor %}
      <div class="timestamp">Generated: {{ generated }}</div>
    </div>
  </div>
</body>
</html>
"""

_environment = Environment(autoescape=True, keep_trailing_newline=True)


def render_html(checklist: LaunchChecklist) -> str:
    """Render a standalone HTML report with inline styles and no external assets."""
    template = _environment.from_string(HTML_TEMPLATE)
    return template.render(
        checklist=checklist,
        icon=status_icon,
        generated=format_timestamp(checklist),
    )


# ============================================================
# JSON / Markdown
# ============================================================

def render_json(checklist: LaunchChecklist) -> str:
    """Serialize the checklist as the canonical JSON document."""
    return checklist.to_json(indent=2)


def load_checklist(data: str) -> LaunchChecklist:
    """Parse a JSON report back into a LaunchChecklist."""
    return LaunchChecklist.from_json(data)


def render_markdown(checklist: LaunchChecklist) -> str:
    """Render a Markdown summary of the checklist."""
    lines = [
        "# Launch Checklist Report\n",
        f"**Score:** {checklist.overall_score}/100\n",
        f"**Status:** {'✅ Ready to Launch' if checklist.ready_to_launch else '⚠️ Not Ready'}\n",
        f"**Generated:** {format_timestamp(checklist)}\n",
        "\n## Summary\n",
        f"- **Critical Issues:** {len(checklist.critical_issues)}",
        f"- **Warnings:** {len(checklist.warnings)}",
        f"- **Sections:** {len(checklist.sections)}\n",
    ]

    for section in checklist.sections:
        lines.append(f"\n### {section.name} ({section.score}%)\n")
        for item in section.items:
            message = f" - {item.message}" if item.message else ""
            lines.append(f"- {status_icon(item.status)} {item.name}{message}")
            if item.fix:
                lines.append(f"  - 💡 {item.fix}")

    if checklist.critical_issues:
        lines.append("\n## Critical Issues\n")
        for issue in checklist.critical_issues:
            lines.append(f"- ❌ **{issue.name}**: {issue.message or ''}")
            if issue.fix:
                lines.append(f"  - Fix: {issue.fix}")

    return "\n".join(lines) + "\n"


RENDERERS = {
    "html": render_html,
    "json": render_json,
    "md": render_markdown,
}


def write_report(
    checklist: LaunchChecklist,
    fmt: str,
    output_path: Union[str, Path],
) -> Path:
    """
    Write a report file.

    Args:
        checklist: Checklist to render
        fmt: One of html, json, md
        output_path: Destination file

    Returns:
        Path of the written report
    """
    if fmt not in RENDERERS:
        raise ValueError(f"Unknown report format '{fmt}', expected one of {', '.join(REPORT_FORMATS)}")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(RENDERERS[fmt](checklist), encoding="utf-8")
    logger.info("Report saved to %s", output_path)
    return output_path

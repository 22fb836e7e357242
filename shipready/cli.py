"""
Command-line interface for shipready.

Provides commands for checking launch readiness, running the complete
ship workflow, and managing the project configuration.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import ConfigError, ConfigLoader, ShipConfig
from .launch import display_launch_checklist, get_quick_status, run_launch_checklist, write_report
from .launch.reporter import REPORT_FORMATS
from .workflow import (
    WorkflowConfig,
    WorkflowOrchestrator,
    WorkflowStateStore,
    display_history,
    export_workflow_report,
)
from .workflow.report import EXPORT_FORMATS

console = Console()

CONFIG_ERROR_EXIT = 2

project_argument = click.argument(
    "project",
    type=click.Path(exists=True, file_okay=False),
    default=".",
)


def _load_config(project: str) -> ShipConfig:
    """Load the project config, exiting with status 2 if it is invalid."""
    try:
        return ConfigLoader(project).load()
    except ConfigError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(CONFIG_ERROR_EXIT)


# ============================================================
# Main CLI Group
# ============================================================

@click.group()
@click.version_option(version=__version__, prog_name="shipready")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, verbose: bool):
    """
    shipready - launch readiness for web projects

    Score a project against the pre-launch checklist and run the
    complete ship workflow.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


# ============================================================
# LAUNCH Command
# ============================================================

@cli.command()
@project_argument
@click.option(
    "--report",
    "-r",
    type=click.Choice(REPORT_FORMATS),
    default=None,
    help="Also write a report in this format",
)
@click.option("--output", "-o", type=click.Path(), default=None, help="Report file (default: launch-report.<format>)")
def launch(project: str, report: Optional[str], output: Optional[str]):
    """Run the pre-launch checklist."""
    _load_config(project)

    console.print(f"\n[bold blue]Running pre-launch checklist for {Path(project).resolve()}[/bold blue]\n")
    checklist = asyncio.run(run_launch_checklist(project))
    display_launch_checklist(checklist, console)

    if report:
        output_path = Path(output) if output else Path(project) / f"launch-report.{report}"
        write_report(checklist, report, output_path)
        console.print(f"[green]✓ Report saved to {output_path}[/green]")

    sys.exit(0 if checklist.ready_to_launch else 1)


# ============================================================
# STATUS Command
# ============================================================

@cli.command()
@project_argument
def status(project: str):
    """Quick readiness check."""
    _load_config(project)

    result = asyncio.run(get_quick_status(project))

    if result["ready"]:
        console.print(f"[green]✅ Ready to launch ({result['score']}/100)[/green]")
    else:
        console.print(f"[yellow]⚠️  Not ready ({result['score']}/100)[/yellow]")
        for name in result["missing"]:
            console.print(f"  [red]• {name}[/red]")

    sys.exit(0 if result["ready"] else 1)


# ============================================================
# COMPLETE Command
# ============================================================

@cli.command()
@project_argument
@click.option("--resume", is_flag=True, help="Resume an interrupted workflow")
@click.option("--history", "show_history", is_flag=True, help="Show workflow history and exit")
@click.option("--skip-assets", is_flag=True, help="Skip the asset step")
@click.option("--skip-seo", is_flag=True, help="Skip the SEO step")
@click.option("--skip-perf", is_flag=True, help="Skip the performance step")
@click.option("--deploy", is_flag=True, help="Deploy when the project is ready")
@click.option("--production", is_flag=True, help="Target production when deploying")
@click.option("--auto-fix/--no-auto-fix", default=True, help="Collect automated fix commands for critical issues")
@click.option(
    "--report",
    "-r",
    type=click.Choice(EXPORT_FORMATS),
    default=None,
    help="Export a workflow report",
)
def complete(
    project: str,
    resume: bool,
    show_history: bool,
    skip_assets: bool,
    skip_seo: bool,
    skip_perf: bool,
    deploy: bool,
    production: bool,
    auto_fix: bool,
    report: Optional[str],
):
    """Run the complete ship workflow."""
    store = WorkflowStateStore(project)

    if show_history:
        display_history(store.load_history(), console)
        return

    ship_config = _load_config(project)
    workflow_config = WorkflowConfig(
        skip_assets=skip_assets,
        skip_seo=skip_seo,
        skip_perf=skip_perf,
        skip_deploy=not deploy,
        production=production,
        auto_fix=auto_fix,
        target_score=ship_config.performance.target_score,
    )

    console.print(f"\n[bold blue]Shipping {Path(project).resolve()}[/bold blue]")
    orchestrator = WorkflowOrchestrator(project, config=workflow_config, console=console, store=store)
    result = asyncio.run(orchestrator.run(resume=resume))

    if report:
        path = export_workflow_report(project, result, report)
        console.print(f"[green]✓ Workflow report saved to {path}[/green]")

    sys.exit(0 if result.summary.ready_to_launch else 1)


# ============================================================
# HISTORY Command
# ============================================================

@cli.command()
@project_argument
def history(project: str):
    """Show previous workflow runs."""
    display_history(WorkflowStateStore(project).load_history(), console)


# ============================================================
# CONFIG Command Group
# ============================================================

@cli.group()
def config():
    """Manage .ship-toolkit/config.yaml."""
    pass


@config.command("init")
@project_argument
def config_init(project: str):
    """Write the default configuration."""
    path = ConfigLoader(project).init()
    if path is None:
        console.print("[yellow]A configuration already exists, leaving it unchanged[/yellow]")
        return
    console.print(f"[green]✓ Configuration written to {path}[/green]")


@config.command("show")
@project_argument
def config_show(project: str):
    """Show the effective configuration."""
    ship_config = _load_config(project)
    loader = ConfigLoader(project)

    table = Table(title="Configuration", title_justify="left")
    table.add_column("Section", style="cyan")
    table.add_column("Settings", style="white")

    for section, values in ship_config.model_dump(exclude_none=True).items():
        table.add_row(section, yaml.safe_dump(values, default_flow_style=False, sort_keys=False).strip())

    console.print(table)
    source = loader.config_path
    console.print(f"[dim]Source: {source if source else 'defaults'}[/dim]")


# ============================================================
# Entry Point
# ============================================================

if __name__ == "__main__":
    cli()

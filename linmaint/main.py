"""
linmaint — CLI entrypoint.

Usage:
    linmaint                 # pick a task from the menu
    linmaint --task "Update System"
    linmaint --dry-run --task full-optimization
    linmaint --list-tasks
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from linmaint import __version__
from linmaint.core.config.loader import Settings
from linmaint.core.observability.logging_config import setup_logging

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="linmaint")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to config.yml (default: ~/.config/linmaint/config.yml).",
)
@click.option("--task", "task_label", default=None, help="Run this task instead of showing the menu.")
@click.option("--dry-run", is_flag=True, help="Log the commands but don't execute them.")
@click.option("--list-tasks", is_flag=True, help="Print the task names and exit.")
def cli(
    verbose: bool,
    debug: bool,
    config_path: str | None,
    task_label: str | None,
    dry_run: bool,
    list_tasks: bool,
) -> None:
    """linmaint — pick a maintenance task and run it for this distro."""
    from linmaint.core.config.loader import ConfigError, load_settings
    from linmaint.core.services.catalog import task_labels

    if list_tasks:
        for label in task_labels():
            click.echo(label)
        return

    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = os.environ.get("LINMAINT_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("LINMAINT_LOG_FILE", settings.log_file),
    )

    sys.exit(run_interactive(settings, task_label=task_label, dry_run=dry_run))


def run_interactive(settings: Settings, task_label: str | None = None, dry_run: bool = False) -> int:
    """Probe, check, authenticate, pick, run. Returns the exit status."""
    from linmaint.adapters.mock import MockAdapter
    from linmaint.adapters.registry import AdapterRegistry
    from linmaint.adapters.shell.command import ShellCommandAdapter
    from linmaint.core.engine.runner import TaskRunner
    from linmaint.core.models.system import Credential
    from linmaint.core.models.task import TaskName
    from linmaint.core.services.catalog import task_labels
    from linmaint.core.services.dependencies import MissingDependency, check_dependencies
    from linmaint.core.services.probe import UnsupportedEnvironment, probe_system
    from linmaint.ui.menu import Menu
    from linmaint.ui.notify import Notifier

    notifier = Notifier(tool=settings.notify_tool, dry_run=dry_run)

    try:
        profile = probe_system()
        check_dependencies(profile.ecosystem, settings)
    except (UnsupportedEnvironment, MissingDependency) as e:
        notifier.error(str(e))
        return 1

    menu = Menu(tool=settings.menu_tool)

    if dry_run or os.geteuid() == 0:
        credential = Credential()
    else:
        credential = menu.ask_password()

    choice = task_label if task_label is not None else menu.choose(task_labels())
    task = TaskName.from_label(choice)
    if task is None:
        notifier.error(f"No valid task selected ({choice!r})" if choice else "No task selected")
        return 1

    registry = AdapterRegistry()
    registry.register(ShellCommandAdapter())
    if dry_run:
        registry.set_mock_mode(MockAdapter(adapter_name="shell"))

    runner = TaskRunner(
        registry=registry,
        notifier=notifier,
        profile=profile,
        settings=settings,
        credential=credential,
    )
    reports = runner.run(task)

    for report in reports:
        logger.info(
            "%s: %s (%d/%d steps ok)",
            report.task.value, report.status, report.succeeded, report.total,
        )

    if settings.report_failures and any(r.status != "ok" for r in reports):
        return 1
    return 0


if __name__ == "__main__":
    cli()

"""
Automaton CLI Main Entry Point.

Syncs automaton commands and skills into a project for one or more AI coding
agents.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from automaton import __version__
from automaton.core.config import AutomatonConfig, SyncOptions, load_config
from automaton.core.errors import AutomatonError, TargetNotFoundError
from automaton.core.logging import OperationLogger, get_logger, setup_logging
from automaton.core.models import FileResult, SyncMode, SyncOutcome
from automaton.core.updater import update_source_repo
from automaton.sync.agents import AGENTS, ALL_AGENTS, describe_agent
from automaton.sync.manager import SyncManager
from automaton.sync.resolver import resolve_plans
from automaton.sync.summary import RunSummary

# Warnings and errors only; stdout carries the run output or the JSON summary.
console = Console(stderr=True, highlight=False, soft_wrap=True)
logger = get_logger(__name__)

_OUTCOME_STYLE = {
    SyncOutcome.CREATED: ("green", "✓", "copied"),
    SyncOutcome.UP_TO_DATE: ("green", "✓", "up to date"),
    SyncOutcome.UPDATED: ("green", "✓", "updated"),
    SyncOutcome.OVERWRITTEN: ("yellow", "✓", "overwritten"),
    SyncOutcome.SKIPPED: ("red", "✗", "local modifications, skipped"),
    SyncOutcome.REMOVED: ("yellow", "-", "removed"),
}
_LINK_LABELS = {
    SyncOutcome.CREATED: "linked",
    SyncOutcome.UPDATED: "relinked",
}


def format_result(result: FileResult, mode: SyncMode) -> str:
    """Render one progress line for a processed file."""
    color, mark, label = _OUTCOME_STYLE[result.outcome]
    if mode is SyncMode.LINK:
        label = _LINK_LABELS.get(result.outcome, label)
    return f"  [{color}]{mark}[/{color}] {escape(str(result.destination))} ({label})"


def validate_target(target: Path) -> Path:
    """Resolve the target project directory, which must already exist."""
    target = target.expanduser()
    if not target.is_dir():
        raise TargetNotFoundError(target)
    return target.resolve()


def agent_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach one boolean flag per agent in the agent table."""
    for spec in reversed(list(AGENTS.values())):
        func = click.option(
            f"--{spec.agent_id}",
            spec.agent_id,
            is_flag=True,
            help=describe_agent(spec),
        )(func)
    return func


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="automaton-sync")
@click.argument("target", required=False, type=click.Path(path_type=Path))
@agent_options
@click.option("--all", "all_agents", is_flag=True, help="All of the above")
@click.option(
    "--mode",
    type=click.Choice([mode.value for mode in SyncMode]),
    default=SyncMode.LINK.value,
    show_default=True,
    help="link: symlink to the source; mirror: exact copy; copy: keep local edits",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite files even if they have local modifications (copy mode)",
)
@click.option("--no-pull", is_flag=True, help="Skip git pull (don't update automaton before syncing)")
@click.option("--skills-only", is_flag=True, help="Only sync skills (where applicable)")
@click.option("--commands-only", is_flag=True, help="Only sync commands")
@click.option(
    "--source",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Path to the automaton checkout",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option("--json", "json_output", is_flag=True, help="Output the run summary as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def cli(
    target: Path | None,
    all_agents: bool,
    mode: str,
    force: bool,
    no_pull: bool,
    skills_only: bool,
    commands_only: bool,
    source: Path | None,
    config: Path | None,
    json_output: bool,
    verbose: bool,
    **agent_flags: bool,
) -> None:
    """
    Sync automaton commands/skills to a project for your AI coding agents.

    TARGET is the project directory to sync into. At least one agent flag
    is required.
    """
    if target is None:
        raise click.UsageError("target project path is required.")

    agents = ALL_AGENTS if all_agents else tuple(a for a in ALL_AGENTS if agent_flags.get(a))
    if not agents:
        raise click.UsageError("at least one agent flag is required (--claude, --droid, etc.)")

    try:
        target_dir = validate_target(target)
    except TargetNotFoundError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        sys.exit(1)

    app_config = AutomatonConfig.load(config) if config else load_config()
    if source:
        app_config = app_config.model_copy(update={"source_root": source.resolve()})
    setup_logging(app_config.logging, verbose=verbose)

    sync_mode = SyncMode.from_string(mode)
    if force and sync_mode is not SyncMode.COPY:
        console.print(f"[yellow]⚠[/yellow] --force only applies to --mode copy; ignored for {mode}")
        force = False

    options = SyncOptions(
        mode=sync_mode,
        force=force,
        no_pull=no_pull,
        skills_only=skills_only,
        commands_only=commands_only,
        agents=agents,
        target_root=target_dir,
    )

    out = Console(highlight=False, soft_wrap=True, quiet=json_output)
    try:
        summary = run_sync(options, app_config, out)
    except AutomatonError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(summary.to_dict(), indent=2))
    else:
        out.print()
        if summary.failed:
            warning, hint = summary.warning_lines()
            out.print(f"[yellow]Warning:[/yellow] {warning}")
            out.print(hint)
        else:
            out.print("[green]Done![/green] 🚀")

    if summary.failed:
        sys.exit(summary.exit_code)


def run_sync(options: SyncOptions, app_config: AutomatonConfig, out: Console) -> RunSummary:
    """Refresh the source, resolve agent plans and sync them in order."""
    plans = resolve_plans(
        options.agents,
        target_root=options.target_root,
        commands_source=app_config.commands_source,
        skills_source=app_config.skills_source,
        skills_only=options.skills_only,
        commands_only=options.commands_only,
        home=app_config.home_directory,
    )

    if not options.no_pull:
        out.print("Updating automaton...")
        if update_source_repo(app_config.source_root):
            out.print("[green]✓[/green] automaton updated")
        else:
            out.print("[yellow]⚠[/yellow] Could not update automaton (offline or not a git repo)")
        out.print()

    out.print(f"Syncing automaton to: {escape(str(options.target_root))}")
    out.print()

    manager = SyncManager.from_options(
        options,
        on_result=lambda result: out.print(format_result(result, options.mode)),
    )
    summary = RunSummary()

    for plan in plans:
        name = plan.agent.display_name
        if plan.skipped:
            out.print(f"{name}: skipped ({plan.skip_reason})")
            continue
        out.print(f"{name} (global):" if plan.agent.is_global else f"{name}:")
        with OperationLogger("agent sync", logger=logger, agent=plan.agent.agent_id):
            manager.run(plan.tasks, summary)

    summary.finish()
    logger.info(
        "Sync finished",
        target=str(options.target_root),
        mode=options.mode.value,
        files=summary.total,
        skipped=len(summary.skipped_paths),
    )
    return summary


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    try:
        exit_code = cli.main(args=argv, prog_name="automaton-sync", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        sys.exit(1)
    except (KeyboardInterrupt, click.Abort):
        console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()

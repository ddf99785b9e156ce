"""Main CLI entry point for ghostcal.

This module provides the command-line interface that loads activity, builds
the calendar report and prints it.
"""

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from ghostcal import __version__
from ghostcal.cli.render import render_calendar
from ghostcal.core.config import ConfigManager, GhostcalConfig
from ghostcal.core.errors import EmptyInputError, GhostcalError
from ghostcal.core.report import build_report
from ghostcal.core.theme import THEME_DARK, Theme, get_theme, list_themes
from ghostcal.utils.activity_loader import (
    ActivitySource,
    CommandActivitySource,
    FileActivitySource,
)
from ghostcal.utils.log import enable_file_logging, get_logger

console = Console()
logger = get_logger()


def _resolve_theme(name: Optional[str], config: GhostcalConfig) -> Theme:
    try:
        return get_theme(name or config.theme)
    except KeyError as e:
        logger.warning("[cli] %s; using the dark theme", e.args[0])
        return THEME_DARK


def _make_source(input_path: Optional[str], config: GhostcalConfig) -> ActivitySource:
    if input_path:
        return FileActivitySource(input_path)
    return CommandActivitySource(config.loader_commands, timeout=config.loader_timeout)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option(
    "-i",
    "--input",
    "input_path",
    type=str,
    help="Read activity JSON from a file ('-' for stdin) instead of running the loader",
)
@click.option("--weeks", type=click.IntRange(min=1), help="Number of trailing weeks to show")
@click.option(
    "--now",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Treat this date as today",
)
@click.option("--theme", type=click.Choice(list_themes()), help="Color theme")
@click.option("--json", "as_json", is_flag=True, help="Print the calendar as JSON")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Also write debug logs to this directory",
)
@click.pass_context
def cli(
    ctx: click.Context,
    input_path: Optional[str],
    weeks: Optional[int],
    now: Optional[datetime],
    theme: Optional[str],
    as_json: bool,
    log_dir: Optional[Path],
) -> None:
    """ghostcal - you vs AI activity calendar"""
    if log_dir:
        enable_file_logging(log_dir)

    if ctx.invoked_subcommand is not None:
        return

    config = ConfigManager().get_config()
    window_weeks = weeks or config.window_weeks
    logger.info(
        "[cli] Starting calendar",
        extra={
            "input": input_path,
            "window_weeks": window_weeks,
            "now": now.date().isoformat() if now else None,
        },
    )

    source = _make_source(input_path, config)
    try:
        payload = source.fetch_activity()
        report = build_report(
            payload,
            now=now,
            window_weeks=window_weeks,
            thresholds=config.thresholds.to_thresholds(),
        )
    except EmptyInputError:
        console.print("No activity data found.")
        return
    except GhostcalError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        for attempt in getattr(e, "attempts", []):
            console.print(f"[dim]  {escape(attempt)}[/dim]")
        logger.warning(
            "[cli] Failed to build calendar: %s: %s",
            type(e).__name__,
            e,
        )
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    render_calendar(console, report, _resolve_theme(theme, config))


@cli.command(name="config")
@click.option("--init", "write_defaults", is_flag=True, help="Write a config file with defaults")
def config_cmd(write_defaults: bool) -> None:
    """Show current configuration"""
    manager = ConfigManager()
    if write_defaults:
        if manager.config_path.exists():
            raise click.ClickException(f"{manager.config_path} already exists")
        manager.save_config(GhostcalConfig())
        console.print(f"Wrote {escape(str(manager.config_path))}")

    config = manager.get_config()
    console.print("\n[bold]Configuration[/bold]\n")
    console.print(f"Path: {escape(str(manager.config_path))}")
    console.print(f"Window: {config.window_weeks} weeks")
    console.print(f"Theme: {config.theme}")
    thresholds = config.thresholds
    console.print(
        f"Thresholds: floor {thresholds.floor}h, moderate {thresholds.moderate}h, "
        f"heavy {thresholds.heavy}h"
    )
    console.print(f"Loader timeout: {config.loader_timeout}s")
    console.print("[bold]Loader commands:[/bold]")
    for command in config.loader_commands:
        console.print(f"  {escape(' '.join(command))}")
    console.print()


@cli.command(name="themes")
def themes_cmd() -> None:
    """List available color themes"""
    for name in list_themes():
        theme = get_theme(name)
        console.print(f"{name:<8} {theme.display_name:<12} {theme.description}")


@cli.command(name="version")
def version_cmd() -> None:
    """Show version information"""
    console.print(f"ghostcal version {__version__}")


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except SystemExit:
        raise
    except (RuntimeError, ValueError, TypeError, OSError, click.ClickException) as e:
        console.print(f"[red]Fatal error: {escape(str(e))}[/red]")
        logger.warning(
            "[cli] Fatal error in main CLI entrypoint: %s: %s",
            type(e).__name__,
            e,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()

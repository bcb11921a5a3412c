"""Shared helpers for CLI commands: app construction and rendering."""

import logging
import sqlite3
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from personadaily.config import Settings, load_config
from personadaily.core.progress import level_progress, stat_level
from personadaily.models import STAT_NAMES, Entry, Gains, PlayerStats

if TYPE_CHECKING:
    from personadaily.app import PersonaApp

logger = logging.getLogger(__name__)

console = Console()

STAT_COLORS = {
    "diligence": "magenta",
    "knowledge": "blue",
    "courage": "red",
    "understanding": "green",
    "expression": "yellow",
}


def get_settings(ctx: click.Context) -> Settings:
    """Load settings using the --config path from the group context."""
    obj = ctx.find_root().obj or {}
    return load_config(obj.get("config_path"))


def get_app(ctx: click.Context) -> "PersonaApp":
    """Build the application controller for a command.

    The gain estimator's HTTP client is closed when the command finishes.

    Args:
        ctx: Click context of the running command.

    Returns:
        PersonaApp instance.
    """
    from personadaily.ai.estimator import GainEstimator
    from personadaily.app import PersonaApp
    from personadaily.db.store import KeyValueStore

    settings = get_settings(ctx)
    obj = ctx.find_root().obj or {}
    db_path = obj.get("db_path") or settings.storage.db_path

    try:
        store = KeyValueStore(db_path)
    except (sqlite3.Error, OSError) as e:
        logger.error("Could not open database %s: %s", db_path, e)
        print_error("Storage unavailable", f"Could not open database {db_path}:\n\n{e}")
        raise SystemExit(1)

    estimator = GainEstimator(
        api_key=settings.resolved_api_key(),
        model=settings.gemini.model,
        max_retries=settings.estimator.max_retries,
        initial_delay_ms=settings.estimator.initial_delay_ms,
        timeout=settings.gemini.timeout,
    )
    ctx.call_on_close(estimator.close)

    return PersonaApp(store, estimator)


def print_error(title: str, message: str) -> None:
    """Print a red error panel."""
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def print_success(title: str, message: str) -> None:
    """Print a green success panel."""
    console.print(Panel(
        f"[green]{escape(message)}[/green]",
        title=f"[bold]{title}[/bold]",
        border_style="green",
    ))


def stats_table(stats: PlayerStats, title: str = "My Stats") -> Table:
    """Render totals as levels with progress bars toward the next level."""
    table = Table(title=title, show_header=True, header_style="bold cyan")

    table.add_column("Stat", style="bold")
    table.add_column("Lv.", justify="right")
    table.add_column("Progress", min_width=22)
    table.add_column("", justify="right", style="dim")
    table.add_column("Points", justify="right")

    for name, total in stats.items():
        progress = level_progress(total)
        color = STAT_COLORS[name]
        table.add_row(
            f"[{color}]{STAT_NAMES[name]}[/{color}]",
            str(stat_level(total)),
            ProgressBar(total=100, completed=progress, width=20, complete_style=color),
            f"{progress}%",
            str(total),
        )

    return table


def gains_text(gains: Gains) -> str:
    """Non-zero gains as a compact markup string, e.g. ``Knowledge +4``."""
    parts = [
        f"[{STAT_COLORS[name]}]{STAT_NAMES[name]} +{value}[/{STAT_COLORS[name]}]"
        for name, value in gains.items()
        if value > 0
    ]
    return "  ".join(parts) if parts else "[dim]No stat gains[/dim]"


def entry_panel(entry: Entry) -> Panel:
    """Render one entry with its activity, feeling and gains."""
    subtitle = entry.created_at.strftime("%H:%M") if entry.created_at else None
    return Panel(
        f"[bold]{escape(entry.activity)}[/bold]\n[dim]{escape(entry.feeling)}[/dim]\n\n"
        f"{gains_text(entry.gains)}",
        subtitle=subtitle,
        border_style="blue",
    )

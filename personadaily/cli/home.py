"""Home and stats views for Persona Daily CLI."""

from datetime import datetime

import click
from rich.panel import Panel
from rich.table import Table

from personadaily.cli.common import STAT_COLORS, console, get_app, stats_table
from personadaily.core.progress import greeting
from personadaily.models import STAT_NAMES


@click.command()
@click.pass_context
def home(ctx: click.Context) -> None:
    """Show a greeting and an overview of your five stats.

    \b
    Examples:
      personadaily home
    """
    app = get_app(ctx)
    stats = app.stats
    entries = app.entries

    console.print(f"\n[bold]{greeting(datetime.now().hour)}[/bold]")
    console.print("[dim]Any progress today?[/dim]\n")

    overview = Table.grid(padding=(0, 3))
    for name, _ in stats.items():
        overview.add_column(justify="center")
    overview.add_row(*[
        f"[{STAT_COLORS[name]}]{STAT_NAMES[name]}[/{STAT_COLORS[name]}]"
        for name, _ in stats.items()
    ])
    overview.add_row(*[f"[bold]{total}[/bold]" for _, total in stats.items()])

    console.print(Panel(overview, title="[bold]Current Stats[/bold]", border_style="blue"))

    if entries:
        latest = entries[-1]
        console.print(
            f"\n[dim]{len(entries)} entries logged, "
            f"latest on {latest.date.isoformat()}[/dim]"
        )
    console.print("[dim]Use 'personadaily add' to log today's activity[/dim]")


@click.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show the level and progress of each stat.

    Every 10 points raise a stat by one level.

    \b
    Examples:
      personadaily stats
    """
    app = get_app(ctx)
    console.print(stats_table(app.stats))

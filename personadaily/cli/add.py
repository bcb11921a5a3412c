"""Add-entry command for Persona Daily CLI."""

from typing import Optional

import click

from personadaily.cli.common import (
    console,
    entry_panel,
    get_app,
    print_error,
    stats_table,
)
from personadaily.errors import InputValidationError


@click.command()
@click.argument("activity", required=False)
@click.argument("feeling", required=False)
@click.pass_context
def add(ctx: click.Context, activity: Optional[str], feeling: Optional[str]) -> None:
    """Log an activity and how it felt.

    ACTIVITY is what you did today; FEELING is what you thought or felt
    about it. Missing values are prompted for. The AI rates the gain for
    each stat from 0 to 5; if it is unavailable the entry is still saved
    with no gains.

    \b
    Examples:
      personadaily add "watched a detective movie" "great plot, learned some logic"
      personadaily add
    """
    if activity is None:
        activity = click.prompt("What did you do today?", default="", show_default=False)
    if feeling is None:
        feeling = click.prompt("Any feelings or thoughts?", default="", show_default=False)

    app = get_app(ctx)

    try:
        with console.status("[bold blue]AI is calculating your stat gains...[/bold blue]"):
            entry = app.save_entry(activity, feeling)
    except InputValidationError as e:
        print_error("Error", str(e))
        raise SystemExit(1)

    console.print(entry_panel(entry))
    if entry.gains.total() == 0:
        console.print("[yellow]No stat gains were recorded for this entry.[/yellow]")
    console.print(stats_table(app.stats))

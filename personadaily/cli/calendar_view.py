"""Calendar command for Persona Daily CLI."""

from datetime import date, datetime
from typing import Optional

import click
from rich.table import Table

from personadaily.cli.common import console, entry_panel, get_app
from personadaily.core.calendar import CalendarDay, entries_on, month_grid, shift_month
from personadaily.models import Entry

WEEKDAYS = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]


def _cell_text(cell: Optional[CalendarDay], selected: date) -> str:
    if cell is None:
        return ""
    text = f"{cell.day.day:2d}" + ("•" if cell.has_entry else " ")
    if cell.day == selected:
        return f"[bold white on blue]{text}[/bold white on blue]"
    if cell.is_today:
        return f"[reverse]{text}[/reverse]"
    if cell.has_entry:
        return f"[cyan]{text}[/cyan]"
    return text


def month_table(
    year: int, month: int, entries: list[Entry], selected: date, today: date
) -> Table:
    """Render a Monday-first month grid with entry markers."""
    table = Table(
        title=date(year, month, 1).strftime("%B %Y"),
        show_header=True,
        header_style="bold dim",
        show_lines=False,
    )
    for name in WEEKDAYS:
        table.add_column(name, justify="center", width=4)

    cells = [_cell_text(cell, selected) for cell in month_grid(year, month, entries, today)]
    for start in range(0, len(cells), 7):
        row = cells[start:start + 7]
        row += [""] * (7 - len(row))
        table.add_row(*row)

    return table


@click.command()
@click.option(
    "--month", "month_value",
    type=click.DateTime(formats=["%Y-%m"]),
    default=None,
    help="Month to display as YYYY-MM (default: month of --date).",
)
@click.option(
    "--date", "date_value",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date whose entries are listed as YYYY-MM-DD (default: today).",
)
@click.option(
    "--offset",
    type=int,
    default=0,
    help="Months to move from the displayed month (e.g. -1 for the previous one).",
)
@click.pass_context
def calendar(
    ctx: click.Context,
    month_value: Optional[datetime],
    date_value: Optional[datetime],
    offset: int,
) -> None:
    """Browse entries by date.

    Days with at least one entry are marked with a dot; entries of the
    selected date are listed below the calendar, newest first.

    \b
    Examples:
      personadaily calendar
      personadaily calendar --offset -1
      personadaily calendar --date 2024-05-01
      personadaily calendar --month 2024-05
    """
    app = get_app(ctx)
    entries = app.entries

    today = date.today()
    selected = date_value.date() if date_value else today
    anchor = month_value.date() if month_value else selected
    year, month = shift_month(anchor.year, anchor.month, offset)

    console.print(month_table(year, month, entries, selected, today))

    day_entries = entries_on(selected, entries)
    console.print(f"\n[bold]Entries on {selected.isoformat()}[/bold]")

    if not day_entries:
        console.print("[dim]No entries on this day.[/dim]")
        return

    for entry in day_entries:
        console.print(entry_panel(entry))

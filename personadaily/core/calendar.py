"""Calendar indexing of journal entries."""

import calendar
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from personadaily.models import Entry


class CalendarDay(BaseModel):
    """One day cell of a month grid."""

    day: date = Field(..., description="Calendar date of the cell")
    is_today: bool = Field(default=False, description="Whether the cell is today")
    has_entry: bool = Field(default=False, description="Whether any entry falls on this day")

    model_config = {"frozen": True}


def entry_dates(year: int, month: int, entries: list[Entry]) -> set[date]:
    """Dates within a month that have at least one entry."""
    return {
        entry.date
        for entry in entries
        if entry.date.year == year and entry.date.month == month
    }


def _recency_key(entry: Entry) -> tuple[datetime, str]:
    # Entries from older exports have no timestamp; their ids are time-prefixed
    return (entry.created_at or datetime.min, entry.id)


def entries_on(day: date, entries: list[Entry]) -> list[Entry]:
    """Entries logged on an exact date, newest first.

    Args:
        day: Date to match.
        entries: Entries to search.

    Returns:
        Matching entries; empty if there are none.
    """
    matches = [entry for entry in entries if entry.date == day]
    return sorted(matches, key=_recency_key, reverse=True)


def month_grid(
    year: int,
    month: int,
    entries: list[Entry],
    today: Optional[date] = None,
) -> list[Optional[CalendarDay]]:
    """Build a Monday-first grid of day cells for a month.

    Leading ``None`` cells pad the grid up to the weekday of the 1st.

    Args:
        year: Year to display.
        month: Month to display (1-12).
        entries: Entries used for the "has entry" markers.
        today: Date flagged as today (defaults to the current date).

    Returns:
        Grid cells in reading order.
    """
    today = today or date.today()
    marked = entry_dates(year, month, entries)
    first_weekday, days_in_month = calendar.monthrange(year, month)

    cells: list[Optional[CalendarDay]] = [None] * first_weekday
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        cells.append(
            CalendarDay(day=day, is_today=day == today, has_entry=day in marked)
        )
    return cells


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move a (year, month) pair by a number of months."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1

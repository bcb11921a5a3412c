"""Entry and stat aggregation."""

from personadaily.models import ATTRIBUTES, Entry, PlayerStats


def apply_gains(stats: PlayerStats, entry: Entry) -> PlayerStats:
    """Fold an entry's gains into the running totals."""
    totals = {
        name: getattr(stats, name) + getattr(entry.gains, name)
        for name in ATTRIBUTES
    }
    return PlayerStats(**totals)


def add_entry(
    entries: list[Entry], stats: PlayerStats, new_entry: Entry
) -> tuple[list[Entry], PlayerStats]:
    """Append an entry and add its gains to the totals.

    Args:
        entries: Current entry list (left unmodified).
        stats: Current attribute totals.
        new_entry: Entry to add.

    Returns:
        Tuple of (new entry list, new totals).
    """
    return [*entries, new_entry], apply_gains(stats, new_entry)

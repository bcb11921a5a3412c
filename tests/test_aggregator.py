"""Property-based tests for entry aggregation and stat levels.

**Feature: persona-daily**
"""

from datetime import date, datetime

from hypothesis import given, settings
from hypothesis import strategies as st

from personadaily.core.aggregator import add_entry, apply_gains
from personadaily.core.progress import greeting, level_progress, stat_level
from personadaily.models import ATTRIBUTES, Entry, Gains, PlayerStats


gain_value = st.integers(min_value=0, max_value=5)


def gains_strategy():
    """Generate valid Gains objects."""
    return st.builds(
        Gains,
        diligence=gain_value,
        knowledge=gain_value,
        courage=gain_value,
        understanding=gain_value,
        expression=gain_value,
    )


def stats_strategy():
    """Generate valid PlayerStats objects."""
    total = st.integers(min_value=0, max_value=10000)
    return st.builds(
        PlayerStats,
        diligence=total,
        knowledge=total,
        courage=total,
        understanding=total,
        expression=total,
    )


def make_entry(gains: Gains, index: int = 0) -> Entry:
    created = datetime(2024, 5, 1, 9, 0, index % 60)
    return Entry(
        id=f"{created.isoformat()}-{index:04d}",
        date=created.date(),
        activity=f"activity {index}",
        feeling=f"feeling {index}",
        gains=gains,
        created_at=created,
    )


class TestGainAdditivity:
    """
    **Feature: persona-daily, Property 5: Gain Additivity**

    *For any* two gain deltas applied in sequence, each total equals the
    starting total plus both deltas.
    """

    @given(start=stats_strategy(), g1=gains_strategy(), g2=gains_strategy())
    @settings(max_examples=100)
    def test_sequential_gains_sum(self, start: PlayerStats, g1: Gains, g2: Gains):
        entries, stats = add_entry([], start, make_entry(g1, 1))
        entries, stats = add_entry(entries, stats, make_entry(g2, 2))

        for name in ATTRIBUTES:
            assert getattr(stats, name) == (
                getattr(start, name) + getattr(g1, name) + getattr(g2, name)
            )

    @given(start=stats_strategy(), gains=gains_strategy())
    @settings(max_examples=50)
    def test_totals_never_decrease(self, start: PlayerStats, gains: Gains):
        stats = apply_gains(start, make_entry(gains))

        for name in ATTRIBUTES:
            assert getattr(stats, name) >= getattr(start, name)


class TestAppendOnly:
    """
    **Feature: persona-daily, Property 6: Append-Only Entry List**

    *For any* existing entry list, adding an entry keeps all previous
    entries in order and places the new one last.
    """

    @given(gains_list=st.lists(gains_strategy(), min_size=0, max_size=20), new=gains_strategy())
    @settings(max_examples=50)
    def test_previous_entries_untouched(self, gains_list: list[Gains], new: Gains):
        existing = [make_entry(g, i) for i, g in enumerate(gains_list)]
        snapshot = list(existing)
        new_entry = make_entry(new, len(existing))

        entries, _ = add_entry(existing, PlayerStats(), new_entry)

        assert entries[:-1] == snapshot
        assert entries[-1] == new_entry
        assert existing == snapshot, "input list must not be modified"


class TestExampleEntry:
    """Saving "read a book" against zero stats."""

    def test_read_a_book(self):
        entry = Entry(
            id="2024-05-01T20:00:00-0001",
            date=date(2024, 5, 1),
            activity="read a book",
            feeling="learned a lot",
            gains=Gains(knowledge=4, diligence=1),
        )

        entries, stats = add_entry([], PlayerStats(), entry)

        assert len(entries) == 1
        assert stats == PlayerStats(knowledge=4, diligence=1)


class TestLevels:
    """
    **Feature: persona-daily, Property 7: Level Arithmetic**

    Every 10 points is one level; progress is the remainder as a percentage.
    """

    @given(total=st.integers(min_value=0, max_value=100000))
    def test_level_and_progress_recompose_total(self, total: int):
        assert stat_level(total) * 10 + level_progress(total) // 10 == total

    @given(total=st.integers(min_value=0, max_value=100000))
    def test_progress_bounds(self, total: int):
        assert 0 <= level_progress(total) < 100

    def test_examples(self):
        assert stat_level(0) == 0
        assert stat_level(9) == 0
        assert stat_level(10) == 1
        assert level_progress(23) == 30


class TestGreeting:
    def test_greeting_boundaries(self):
        assert greeting(0) == "Up late... still logging?"
        assert greeting(5) == "Up late... still logging?"
        assert greeting(6) == "Good morning!"
        assert greeting(12) == "Good afternoon."
        assert greeting(18) == "Good evening."
        assert greeting(23) == "Good evening."

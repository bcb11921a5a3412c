"""Stat levels and home-screen greeting."""

POINTS_PER_LEVEL = 10


def stat_level(total: int) -> int:
    """Level reached by a stat total (one level per 10 points)."""
    return total // POINTS_PER_LEVEL


def level_progress(total: int) -> int:
    """Percent progress toward the next level."""
    return (total % POINTS_PER_LEVEL) * 100 // POINTS_PER_LEVEL


def greeting(hour: int) -> str:
    """Greeting for an hour of the day (0-23)."""
    if hour < 6:
        return "Up late... still logging?"
    if hour < 12:
        return "Good morning!"
    if hour < 18:
        return "Good afternoon."
    return "Good evening."

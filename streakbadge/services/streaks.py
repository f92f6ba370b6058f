"""Streak calculation over a contribution index."""

from datetime import date
from datetime import timedelta

from streakbadge.services.contributions import ContributionIndex

ONE_DAY = timedelta(days=1)


def current_streak(index: ContributionIndex, today: date) -> int:
    """Count consecutive active days ending at and including `today`.

    Returns 0 when `today` itself has no contributions.
    """

    streak = 0
    day = today
    while index.lookup(day) > 0:
        streak += 1
        day -= ONE_DAY
    return streak


def longest_streak(index: ContributionIndex) -> int:
    """Return the longest run of consecutive active days ever recorded."""

    longest = 0
    streak = 0
    previous: date | None = None
    for day in index.active_days():
        if previous is not None and day == previous + ONE_DAY:
            streak += 1
        else:
            streak = 1
        longest = max(longest, streak)
        previous = day
    return longest

from collections.abc import Iterable
from datetime import date
from datetime import timedelta

from teamdash.analytics.models import ContributionDay
from teamdash.analytics.models import StreakResult
from teamdash.analytics.rounding import percentage

CONSISTENCY_WINDOW_DAYS = 30


def active_dates(days: Iterable[ContributionDay]) -> list[date]:
    """Distinct dates with at least one contribution, oldest first."""

    return sorted({day.date for day in days if day.count > 0})


def current_streak(active: list[date], today: date) -> int:
    if not active:
        return 0

    # "Yesterday still counts": today's work may simply not have happened yet.
    if (today - active[-1]).days not in (0, 1):
        return 0

    streak = 1
    for index in range(len(active) - 1, 0, -1):
        if (active[index] - active[index - 1]).days != 1:
            break
        streak += 1
    return streak


def longest_streak(active: list[date]) -> int:
    if not active:
        return 0

    longest = 1
    running = 1
    for previous, current in zip(active, active[1:]):
        if (current - previous).days == 1:
            running += 1
        else:
            longest = max(longest, running)
            running = 1
    return max(longest, running)


def consistency_score(active: list[date], today: date) -> int:
    """Share of the trailing 30 days (today included) with any activity."""

    window_start = today - timedelta(days=CONSISTENCY_WINDOW_DAYS - 1)
    recent = sum(1 for day in active if window_start <= day <= today)
    return min(100, percentage(recent, CONSISTENCY_WINDOW_DAYS))


def analyze_streaks(days: Iterable[ContributionDay], today: date) -> StreakResult:
    active = active_dates(days)
    if not active:
        return StreakResult()

    return StreakResult(
        current_streak=current_streak(active, today),
        longest_streak=longest_streak(active),
        total_active_days=len(active),
        consistency_score=consistency_score(active, today),
    )

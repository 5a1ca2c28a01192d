from collections.abc import Iterable
from collections.abc import Sequence
from datetime import date
from datetime import timedelta

from teamdash.analytics.models import ContributionDay
from teamdash.analytics.models import TrendDay
from teamdash.analytics.models import TrendDirection
from teamdash.analytics.models import TrendSummary
from teamdash.analytics.rounding import round_half_up

TREND_WINDOW_DAYS = 30
COMPARISON_WINDOW_DAYS = 7

# Locale-independent labels.
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def build_productivity_trend(
    days: Iterable[ContributionDay], today: date
) -> list[TrendDay]:
    """Return one entry per day for the 30 days ending today, zero-filled."""

    counts_by_date: dict[date, int] = {}
    for day in days:
        counts_by_date[day.date] = day.count

    trend: list[TrendDay] = []
    current_day = today - timedelta(days=TREND_WINDOW_DAYS - 1)
    while current_day <= today:
        trend.append(
            TrendDay(
                date=current_day.isoformat(),
                commits=counts_by_date.get(current_day, 0),
                day_of_week=WEEKDAY_LABELS[current_day.weekday()],
            )
        )
        current_day += timedelta(days=1)

    return trend


def _window_sums(trend: Sequence[TrendDay]) -> tuple[int, int]:
    recent = trend[-COMPARISON_WINDOW_DAYS:]
    previous = trend[-2 * COMPARISON_WINDOW_DAYS : -COMPARISON_WINDOW_DAYS]
    return sum(day.commits for day in recent), sum(day.commits for day in previous)


def trend_direction(trend: Sequence[TrendDay]) -> TrendDirection:
    """Compare the last seven days against the seven before them."""

    recent, previous = _window_sums(trend)
    if recent > previous:
        return TrendDirection.UP
    if recent < previous:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def summarize_trend(trend: Sequence[TrendDay]) -> TrendSummary:
    recent, previous = _window_sums(trend)
    total = sum(day.commits for day in trend)
    average = round_half_up(total / len(trend), 1) if trend else 0.0
    return TrendSummary(
        direction=trend_direction(trend),
        total_commits=total,
        average_per_day=average,
        recent_commits=recent,
        previous_commits=previous,
        max_commits=max([day.commits for day in trend] + [1]),
    )

from datetime import date
from datetime import timedelta

from teamdash.analytics.models import ContributionDay
from teamdash.analytics.models import TrendDay
from teamdash.analytics.models import TrendDirection
from teamdash.analytics.trends import build_productivity_trend
from teamdash.analytics.trends import summarize_trend
from teamdash.analytics.trends import trend_direction

TODAY = date(2026, 10, 19)


def trend_with_windows(previous: int, recent: int) -> list[TrendDay]:
    """A 30-day trend whose previous/recent 7-day sums are as given."""

    days = [
        ContributionDay(date=TODAY - timedelta(days=13), count=previous),
        ContributionDay(date=TODAY, count=recent),
    ]
    return build_productivity_trend(days, TODAY)


def test_empty_input_yields_thirty_zero_days() -> None:
    trend = build_productivity_trend([], TODAY)

    assert len(trend) == 30
    assert all(day.commits == 0 for day in trend)
    assert trend[0].date == (TODAY - timedelta(days=29)).isoformat()
    assert trend[-1].date == TODAY.isoformat()


def test_trend_dates_are_consecutive_and_labelled() -> None:
    trend = build_productivity_trend([], TODAY)

    dates = [date.fromisoformat(day.date) for day in trend]
    assert all((b - a).days == 1 for a, b in zip(dates, dates[1:]))
    assert trend[-1].day_of_week == "Mon"
    assert trend[-2].day_of_week == "Sun"


def test_trend_fills_matching_counts_and_ignores_outside_days() -> None:
    days = [
        ContributionDay(date=TODAY - timedelta(days=40), count=9),
        ContributionDay(date=TODAY - timedelta(days=1), count=4),
        ContributionDay(date=TODAY - timedelta(days=29), count=2),
    ]

    trend = build_productivity_trend(days, TODAY)

    assert len(trend) == 30
    assert trend[0].commits == 2
    assert trend[-2].commits == 4
    assert sum(day.commits for day in trend) == 6


def test_trend_does_not_mutate_input() -> None:
    days = [ContributionDay(date=TODAY, count=1)]

    build_productivity_trend(days, TODAY)

    assert days == [ContributionDay(date=TODAY, count=1)]


def test_trend_direction_compares_seven_day_windows() -> None:
    up = trend_with_windows(previous=0, recent=10)
    down = trend_with_windows(previous=10, recent=0)
    flat = trend_with_windows(previous=5, recent=5)

    assert trend_direction(up) is TrendDirection.UP
    assert trend_direction(down) is TrendDirection.DOWN
    assert trend_direction(flat) is TrendDirection.STABLE


def test_day_fourteen_back_is_outside_previous_window() -> None:
    days = [ContributionDay(date=TODAY - timedelta(days=14), count=10)]

    trend = build_productivity_trend(days, TODAY)

    assert trend_direction(trend) is TrendDirection.STABLE


def test_summarize_trend_reports_totals() -> None:
    summary = summarize_trend(trend_with_windows(previous=3, recent=7))

    assert summary.direction is TrendDirection.UP
    assert summary.total_commits == 10
    assert summary.recent_commits == 7
    assert summary.previous_commits == 3
    assert summary.average_per_day == 0.3
    assert summary.max_commits == 7


def test_summarize_idle_trend_scales_to_one() -> None:
    summary = summarize_trend(build_productivity_trend([], TODAY))

    assert summary.max_commits == 1
    assert summary.average_per_day == 0.0
    assert summary.direction is TrendDirection.STABLE

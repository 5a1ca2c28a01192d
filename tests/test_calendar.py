import math
from datetime import date

from factories import make_calendar

from teamdash.analytics.calendar import calendar_total
from teamdash.analytics.calendar import contribution_intensity
from teamdash.analytics.calendar import contributions_in_year
from teamdash.analytics.calendar import flatten_calendar
from teamdash.analytics.calendar import intensity_bucket
from teamdash.analytics.models import ContributionDay


def test_flatten_calendar_preserves_order_and_length() -> None:
    calendar = make_calendar(date(2026, 1, 1), [0, 3, 1, 0, 2, 5, 0, 7, 1])

    days = flatten_calendar(calendar)

    assert len(days) == 9
    assert [day.count for day in days] == [0, 3, 1, 0, 2, 5, 0, 7, 1]
    assert all(a.date < b.date for a, b in zip(days, days[1:]))
    assert days[0] == ContributionDay(date=date(2026, 1, 1), count=0)


def test_flatten_calendar_returns_empty_for_missing_input() -> None:
    assert flatten_calendar(None) == []
    assert flatten_calendar({}) == []
    assert flatten_calendar({"weeks": "nope"}) == []


def test_flatten_calendar_skips_malformed_entries() -> None:
    calendar = {
        "weeks": [
            "not-a-week",
            {"contributionDays": None},
            {
                "contributionDays": [
                    {"date": "2026-02-01", "contributionCount": 2},
                    {"date": "not-a-date", "contributionCount": 1},
                    {"date": "2026-02-03", "contributionCount": "4"},
                    {"date": "2026-02-04", "contributionCount": -1},
                    {"contributionCount": 3},
                    {"date": "2026-02-05", "contributionCount": 0},
                ]
            },
        ]
    }

    days = flatten_calendar(calendar)

    assert days == [
        ContributionDay(date=date(2026, 2, 1), count=2),
        ContributionDay(date=date(2026, 2, 5), count=0),
    ]


def test_calendar_total_trusts_reported_total() -> None:
    assert calendar_total({"totalContributions": 42, "weeks": []}) == 42
    assert calendar_total(None) == 0
    assert calendar_total({"totalContributions": "42"}) == 0


def test_intensity_bucket_boundaries() -> None:
    assert intensity_bucket(0) is None
    assert intensity_bucket(1) == "light"
    assert intensity_bucket(2) == "light"
    assert intensity_bucket(3) == "moderate"
    assert intensity_bucket(5) == "moderate"
    assert intensity_bucket(6) == "heavy"
    assert intensity_bucket(10) == "heavy"
    assert intensity_bucket(11) == "intense"


def test_contribution_intensity_counts_buckets_and_average() -> None:
    days = flatten_calendar(make_calendar(date(2026, 3, 1), [0, 1, 4, 8, 12, 0]))

    intensity = contribution_intensity(days)

    assert intensity.light == 1
    assert intensity.moderate == 1
    assert intensity.heavy == 1
    assert intensity.intense == 1
    assert math.isclose(intensity.average, 25 / 6)


def test_contribution_intensity_without_days_has_no_average() -> None:
    intensity = contribution_intensity([])

    assert intensity.average is None
    assert intensity.light == intensity.intense == 0


def test_contributions_in_year_ignores_other_years() -> None:
    days = flatten_calendar(make_calendar(date(2025, 12, 30), [2, 3, 4, 5]))

    assert contributions_in_year(days, 2025) == 5
    assert contributions_in_year(days, 2026) == 9

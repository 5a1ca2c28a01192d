from collections.abc import Iterable
from collections.abc import Mapping
from datetime import date
from typing import Any

from teamdash.analytics.models import ContributionDay
from teamdash.analytics.models import IntensityBreakdown


def _parse_day(item: Any) -> ContributionDay | None:
    if not isinstance(item, Mapping):
        return None

    raw_date = item.get("date")
    raw_count = item.get("contributionCount")
    if not isinstance(raw_date, str):
        return None
    # bool is an int subclass; a flag is not a count.
    if not isinstance(raw_count, int) or isinstance(raw_count, bool) or raw_count < 0:
        return None

    try:
        parsed_day = date.fromisoformat(raw_date)
    except ValueError:
        return None

    return ContributionDay(date=parsed_day, count=raw_count)


def flatten_calendar(calendar: Mapping[str, Any] | None) -> list[ContributionDay]:
    """Flatten GraphQL `weeks[].contributionDays[]` into one ordered list.

    Absent calendars and malformed weeks or days produce no entries instead
    of an error, so a failed fetch reads the same as an idle year.
    """

    if not isinstance(calendar, Mapping):
        return []

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        return []

    days: list[ContributionDay] = []
    for week in weeks:
        if not isinstance(week, Mapping):
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            continue
        for item in contribution_days:
            day = _parse_day(item)
            if day is not None:
                days.append(day)

    return days


def calendar_total(calendar: Mapping[str, Any] | None) -> int:
    """Return the calendar's own `totalContributions`, trusted as-is."""

    if not isinstance(calendar, Mapping):
        return 0
    total = calendar.get("totalContributions")
    if not isinstance(total, int) or isinstance(total, bool):
        return 0
    return total


def contributions_in_year(days: Iterable[ContributionDay], year: int) -> int:
    return sum(day.count for day in days if day.date.year == year)


def intensity_bucket(count: int) -> str | None:
    """Map a daily count to its intensity bucket, None for idle days."""

    if count <= 0:
        return None
    if count <= 2:
        return "light"
    if count <= 5:
        return "moderate"
    if count <= 10:
        return "heavy"
    return "intense"


def contribution_intensity(days: Iterable[ContributionDay]) -> IntensityBreakdown:
    """Count days per intensity bucket and average contributions per day.

    The average divides by every calendar day present, idle ones included.
    An empty calendar has no average (None) rather than a division error.
    """

    buckets = {"light": 0, "moderate": 0, "heavy": 0, "intense": 0}
    total = 0
    day_count = 0
    for day in days:
        day_count += 1
        total += day.count
        bucket = intensity_bucket(day.count)
        if bucket is not None:
            buckets[bucket] += 1

    average = total / day_count if day_count else None
    return IntensityBreakdown(**buckets, average=average)

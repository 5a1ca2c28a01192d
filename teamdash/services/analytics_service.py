from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from datetime import tzinfo
from enum import Enum
from typing import TypeVar
from zoneinfo import ZoneInfo

import httpx

from teamdash.analytics.calendar import calendar_total
from teamdash.analytics.calendar import contribution_intensity
from teamdash.analytics.calendar import flatten_calendar
from teamdash.analytics.events import aggregate_events
from teamdash.analytics.models import EventInsights
from teamdash.analytics.models import IntensityBreakdown
from teamdash.analytics.models import StreakResult
from teamdash.analytics.models import TrendDay
from teamdash.analytics.models import TrendSummary
from teamdash.analytics.streaks import analyze_streaks
from teamdash.analytics.trends import build_productivity_trend
from teamdash.analytics.trends import summarize_trend
from teamdash.clients.github_client import ContributionCollection
from teamdash.clients.github_client import fetch_contribution_calendar
from teamdash.clients.github_client import fetch_user_events
from teamdash.core.logging import get_logger
from teamdash.settings import Settings

logger = get_logger(__name__)

T = TypeVar("T")


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the configured token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


class ContributionSource(str, Enum):
    PERSONAL = "personal"
    CORPORATE = "corporate"


@dataclass(frozen=True)
class ContributionAnalytics:
    username: str
    source: ContributionSource
    from_day: date
    to_day: date
    total_contributions: int
    private_contributions: int
    streaks: StreakResult
    trend: list[TrendDay]
    trend_summary: TrendSummary
    intensity: IntensityBreakdown


def one_year_before(day: date) -> date:
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        # Feb 29 has no counterpart in the previous year.
        return day.replace(year=day.year - 1, day=28)


def resolve_timezone(name: str) -> tzinfo | None:
    """Return the configured zone, or None for the host's local zone."""

    return ZoneInfo(name) if name else None


def call_github(func: Callable[..., T], *args, **kwargs) -> T:
    """Invoke a GitHub client call, translating failures to service errors."""

    try:
        return func(*args, **kwargs)
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError from exc
        raise GitHubAPIError from exc
    except Exception as exc:
        raise GitHubAPIError(str(exc)) from exc


def fetch_collection(
    username: str,
    source: ContributionSource,
    settings: Settings,
    from_day: date,
    to_day: date,
) -> ContributionCollection:
    """Fetch a calendar from github.com (personal) or the enterprise host."""

    if source is ContributionSource.PERSONAL:
        token = settings.personal_github_token
        graphql_url = settings.github_graphql_url
    else:
        token = settings.corporate_github_token
        graphql_url = settings.corporate_graphql_url

    return call_github(
        fetch_contribution_calendar,
        username=username,
        token=token,
        graphql_url=graphql_url,
        from_day=from_day,
        to_day=to_day,
    )


def get_contribution_analytics(
    username: str,
    source: ContributionSource,
    settings: Settings,
    today: date | None = None,
) -> ContributionAnalytics:
    """Fetch the last year of contributions and derive streak/trend data."""

    today = today or date.today()
    from_day = one_year_before(today)
    collection = fetch_collection(username, source, settings, from_day, today)

    days = flatten_calendar(collection.calendar)
    trend = build_productivity_trend(days, today)
    logger.info(
        "contribution_analytics_built",
        username=username,
        source=source.value,
        days=len(days),
    )

    return ContributionAnalytics(
        username=username,
        source=source,
        from_day=from_day,
        to_day=today,
        total_contributions=calendar_total(collection.calendar),
        private_contributions=collection.restricted_count,
        streaks=analyze_streaks(days, today),
        trend=trend,
        trend_summary=summarize_trend(trend),
        intensity=contribution_intensity(days),
    )


def get_activity_insights(username: str, settings: Settings) -> EventInsights:
    """Fetch a user's recent events and fold them into activity insights."""

    events = call_github(
        fetch_user_events,
        username=username,
        token=settings.personal_github_token,
        api_base_url=settings.github_api_base_url,
    )
    logger.info("activity_events_fetched", username=username, events=len(events))
    return aggregate_events(events, tz=resolve_timezone(settings.timezone))

from datetime import date
from datetime import datetime

from pydantic import field_validator

from teamdash.analytics.models import TrendDirection
from teamdash.api.schemas.base import CountItem
from teamdash.api.schemas.base import Schema
from teamdash.api.schemas.base import count_items
from teamdash.api.schemas.base import sorted_names
from teamdash.services.analytics_service import ContributionSource


class StreakSchema(Schema):
    current_streak: int
    longest_streak: int
    total_active_days: int
    consistency_score: int


class TrendDaySchema(Schema):
    date: date
    commits: int
    day_of_week: str


class TrendSummarySchema(Schema):
    direction: TrendDirection
    total_commits: int
    average_per_day: float
    recent_commits: int
    previous_commits: int
    max_commits: int


class IntensitySchema(Schema):
    light: int
    moderate: int
    heavy: int
    intense: int
    average: float | None


class ContributionAnalyticsResponse(Schema):
    """Streak, trend and intensity analytics for one account."""

    username: str
    source: ContributionSource
    from_day: date
    to_day: date
    total_contributions: int
    private_contributions: int
    streaks: StreakSchema
    trend: list[TrendDaySchema]
    trend_summary: TrendSummarySchema
    intensity: IntensitySchema


class RepoStatSchema(Schema):
    name: str
    commits: int
    last_activity: datetime | None
    languages: list[str]

    @field_validator("languages", mode="before")
    @classmethod
    def sort_languages(cls, value: object) -> object:
        return sorted_names(value)


class CommitMessageSchema(Schema):
    total_commits: int
    commit_types: dict[str, int]
    conventional_percentage: int
    average_message_length: int
    top_types: list[CountItem]

    @field_validator("top_types", mode="before")
    @classmethod
    def pair_items(cls, value: object) -> object:
        return count_items(value)


class HourCount(Schema):
    hour: int
    count: int


class BranchStatSchema(Schema):
    name: str
    commits: int
    repositories: list[str]

    @field_validator("repositories", mode="before")
    @classmethod
    def sort_repositories(cls, value: object) -> object:
        return sorted_names(value)


class BranchInsightsSchema(Schema):
    total_branches: int
    main_branch_commits: int
    feature_branches: int
    fix_branches: int
    dev_branches: int
    top_branches: list[BranchStatSchema]


class ActivityInsightsResponse(Schema):
    """Insights folded from a user's recent GitHub events."""

    username: str
    total_events: int
    event_types: list[CountItem]
    repositories: list[RepoStatSchema]
    languages: list[CountItem]
    commit_messages: CommitMessageSchema
    peak_hours: list[HourCount]
    file_types: list[CountItem]
    branches: BranchInsightsSchema

    @field_validator("event_types", "languages", "file_types", mode="before")
    @classmethod
    def pair_items(cls, value: object) -> object:
        return count_items(value)

    @field_validator("peak_hours", mode="before")
    @classmethod
    def hour_pairs(cls, value: object) -> object:
        if isinstance(value, list):
            return [
                {"hour": item[0], "count": item[1]} if isinstance(item, tuple) else item
                for item in value
            ]
        return value

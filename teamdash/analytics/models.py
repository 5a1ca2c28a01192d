from dataclasses import dataclass
from dataclasses import field
from datetime import date
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class ContributionDay:
    date: date
    count: int


@dataclass(frozen=True)
class StreakResult:
    current_streak: int = 0
    longest_streak: int = 0
    total_active_days: int = 0
    consistency_score: int = 0


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class TrendDay:
    date: str
    commits: int
    day_of_week: str


@dataclass(frozen=True)
class TrendSummary:
    direction: TrendDirection
    total_commits: int
    average_per_day: float
    recent_commits: int
    previous_commits: int
    max_commits: int


@dataclass(frozen=True)
class IntensityBreakdown:
    light: int = 0
    moderate: int = 0
    heavy: int = 0
    intense: int = 0
    # None means the calendar had no days at all.
    average: float | None = None


@dataclass
class RepoStat:
    name: str
    commits: int = 0
    last_activity: datetime | None = None
    languages: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class CommitMessageStats:
    total_commits: int
    commit_types: dict[str, int]
    conventional_percentage: int
    average_message_length: int
    top_types: list[tuple[str, int]]


@dataclass
class BranchStat:
    name: str
    commits: int = 0
    repositories: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class BranchInsights:
    total_branches: int
    main_branch_commits: int
    feature_branches: int
    fix_branches: int
    dev_branches: int
    top_branches: list[BranchStat]


@dataclass(frozen=True)
class EventInsights:
    total_events: int
    event_types: list[tuple[str, int]]
    repositories: list[RepoStat]
    languages: list[tuple[str, int]]
    commit_messages: CommitMessageStats
    peak_hours: list[tuple[int, int]]
    file_types: list[tuple[str, int]]
    branches: BranchInsights

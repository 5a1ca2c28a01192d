from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from teamdash.analytics.rounding import round_half_up


class RankingMode(str, Enum):
    PERSONAL = "personal"
    CORPORATE = "corporate"
    COMBINED = "combined"


@dataclass(frozen=True)
class ContributionTotals:
    total: int = 0
    private: int = 0

    @property
    def public(self) -> int:
        return self.total - self.private

    @classmethod
    def from_counts(cls, total: int, restricted: int) -> "ContributionTotals":
        """Build totals from a calendar total and its restricted count."""

        total = max(0, total)
        return cls(total=total, private=min(max(0, restricted), total))


@dataclass(frozen=True)
class RankingEntry:
    username: str
    corporate_username: str | None = None
    personal: ContributionTotals = field(default_factory=ContributionTotals)
    corporate: ContributionTotals = field(default_factory=ContributionTotals)
    fetch_succeeded: bool = True
    error_message: str | None = None


@dataclass(frozen=True)
class RankingSummary:
    total_contributions: int
    average_per_user: int
    top_performer: str | None
    top_value: int
    loaded_users: int
    total_users: int


# Which contribution buckets feed the ranking value in each mode.
MODE_BUCKETS: dict[RankingMode, tuple[str, ...]] = {
    RankingMode.PERSONAL: ("personal",),
    RankingMode.CORPORATE: ("corporate",),
    RankingMode.COMBINED: ("personal", "corporate"),
}

# Which ContributionTotals field is read for each visibility choice.
VISIBILITY_FIELDS: dict[bool, str] = {True: "total", False: "public"}


def ranking_value(
    entry: RankingEntry, mode: RankingMode, include_private: bool
) -> int:
    field_name = VISIBILITY_FIELDS[include_private]
    return sum(
        getattr(getattr(entry, bucket), field_name) for bucket in MODE_BUCKETS[mode]
    )


def rank_entries(
    entries: Iterable[RankingEntry], mode: RankingMode, include_private: bool
) -> list[RankingEntry]:
    """Return a new list ordered by ranking value, highest first.

    Equal values keep their input order, so toggling mode or visibility
    reorders deterministically without refetching anything.
    """

    return sorted(
        entries, key=lambda entry: -ranking_value(entry, mode, include_private)
    )


def failed_entry(
    username: str, corporate_username: str | None, error_message: str
) -> RankingEntry:
    return RankingEntry(
        username=username,
        corporate_username=corporate_username,
        fetch_succeeded=False,
        error_message=error_message,
    )


def summarize_ranking(
    ranked: Sequence[RankingEntry], mode: RankingMode, include_private: bool
) -> RankingSummary:
    """Headline numbers for an already ranked list."""

    values = [ranking_value(entry, mode, include_private) for entry in ranked]
    total = sum(values)
    return RankingSummary(
        total_contributions=total,
        average_per_user=int(round_half_up(total / len(values))) if values else 0,
        top_performer=ranked[0].username if ranked else None,
        top_value=values[0] if values else 0,
        loaded_users=sum(1 for entry in ranked if entry.fetch_succeeded),
        total_users=len(ranked),
    )

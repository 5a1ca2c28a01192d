from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date

from teamdash.analytics.calendar import calendar_total
from teamdash.analytics.ranking import ContributionTotals
from teamdash.analytics.ranking import RankingEntry
from teamdash.analytics.ranking import RankingMode
from teamdash.analytics.ranking import RankingSummary
from teamdash.analytics.ranking import failed_entry
from teamdash.analytics.ranking import rank_entries
from teamdash.analytics.ranking import summarize_ranking
from teamdash.core.logging import get_logger
from teamdash.services.analytics_service import ContributionSource
from teamdash.services.analytics_service import GitHubAPIError
from teamdash.services.analytics_service import InvalidGitHubTokenError
from teamdash.services.analytics_service import fetch_collection
from teamdash.settings import Settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class RankingResult:
    year: int
    mode: RankingMode
    include_private: bool
    entries: list[RankingEntry]
    summary: RankingSummary


def describe_failure(exc: Exception) -> str:
    if isinstance(exc, InvalidGitHubTokenError):
        return "GitHub token is invalid"
    return str(exc) or "GitHub API request failed"


def fetch_year_totals(
    username: str, source: ContributionSource, year: int, settings: Settings
) -> ContributionTotals:
    collection = fetch_collection(
        username, source, settings, date(year, 1, 1), date(year, 12, 31)
    )
    return ContributionTotals.from_counts(
        calendar_total(collection.calendar), collection.restricted_count
    )


def fetch_ranking_entry(
    username: str, corporate_username: str | None, year: int, settings: Settings
) -> RankingEntry:
    """Fetch both accounts for one roster user without ever raising.

    A personal failure marks the whole entry failed; a corporate failure
    only zeroes the corporate totals.
    """

    try:
        personal = fetch_year_totals(
            username, ContributionSource.PERSONAL, year, settings
        )
    except (GitHubAPIError, InvalidGitHubTokenError) as exc:
        logger.warning(
            "ranking_personal_fetch_failed", username=username, error=repr(exc)
        )
        return failed_entry(username, corporate_username, describe_failure(exc))

    corporate = ContributionTotals()
    if corporate_username:
        try:
            corporate = fetch_year_totals(
                corporate_username, ContributionSource.CORPORATE, year, settings
            )
        except (GitHubAPIError, InvalidGitHubTokenError) as exc:
            logger.warning(
                "ranking_corporate_fetch_failed",
                username=username,
                corporate_username=corporate_username,
                error=repr(exc),
            )

    return RankingEntry(
        username=username,
        corporate_username=corporate_username,
        personal=personal,
        corporate=corporate,
    )


def fetch_rankings(
    roster: list[tuple[str, str | None]],
    year: int,
    mode: RankingMode,
    include_private: bool,
    settings: Settings,
) -> RankingResult:
    """Fetch every roster user concurrently, then rank the results."""

    entries: list[RankingEntry] = []
    if roster:
        workers = max(1, min(settings.ranking_max_workers, len(roster)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            entries = list(
                executor.map(
                    lambda member: fetch_ranking_entry(
                        member[0], member[1], year, settings
                    ),
                    roster,
                )
            )

    logger.info(
        "ranking_fetched",
        year=year,
        users=len(entries),
        failed=sum(1 for entry in entries if not entry.fetch_succeeded),
    )
    return rerank(entries, year, mode, include_private)


def rerank(
    entries: list[RankingEntry],
    year: int,
    mode: RankingMode,
    include_private: bool,
) -> RankingResult:
    ranked = rank_entries(entries, mode, include_private)
    return RankingResult(
        year=year,
        mode=mode,
        include_private=include_private,
        entries=ranked,
        summary=summarize_ranking(ranked, mode, include_private),
    )

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date

from teamdash.analytics.calendar import contributions_in_year
from teamdash.analytics.calendar import flatten_calendar
from teamdash.core.logging import get_logger
from teamdash.services.analytics_service import ContributionSource
from teamdash.services.analytics_service import GitHubAPIError
from teamdash.services.analytics_service import InvalidGitHubTokenError
from teamdash.services.analytics_service import fetch_collection
from teamdash.services.notes_service import Note
from teamdash.services.notes_service import NoteReadError
from teamdash.services.notes_service import NoteStore
from teamdash.services.notes_service import NoteValidationError
from teamdash.services.ranking_service import describe_failure
from teamdash.settings import Settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class TeamMemberReport:
    username: str
    corporate_username: str | None
    personal_contributions: int
    corporate_contributions: int
    latest_note: Note | None
    fetch_succeeded: bool = True
    error_message: str | None = None


def year_window(year: int, today: date) -> tuple[date, date] | None:
    """Jan 1 through Dec 31 of `year`, cut off at today; None for future years."""

    start = date(year, 1, 1)
    end = min(date(year, 12, 31), today)
    if start > end:
        return None
    return start, end


def find_latest_note(store: NoteStore, username: str) -> Note | None:
    try:
        return store.latest_note(username)
    except (NoteReadError, NoteValidationError) as exc:
        logger.warning("team_report_note_failed", username=username, error=repr(exc))
        return None


def fetch_year_contributions(
    username: str,
    source: ContributionSource,
    settings: Settings,
    window: tuple[date, date],
) -> int:
    collection = fetch_collection(username, source, settings, *window)
    return contributions_in_year(
        flatten_calendar(collection.calendar), window[0].year
    )


def build_member_report(
    username: str,
    corporate_username: str | None,
    year: int,
    settings: Settings,
    store: NoteStore,
    today: date,
) -> TeamMemberReport:
    """Year totals for both accounts plus the latest meeting note."""

    latest_note = find_latest_note(store, username)
    window = year_window(year, today)
    personal_total = 0
    corporate_total = 0
    try:
        if window is not None:
            personal_total = fetch_year_contributions(
                username, ContributionSource.PERSONAL, settings, window
            )
            if corporate_username:
                corporate_total = fetch_year_contributions(
                    corporate_username, ContributionSource.CORPORATE, settings, window
                )
    except (GitHubAPIError, InvalidGitHubTokenError) as exc:
        logger.warning("team_report_fetch_failed", username=username, error=repr(exc))
        return TeamMemberReport(
            username=username,
            corporate_username=corporate_username,
            personal_contributions=0,
            corporate_contributions=0,
            latest_note=latest_note,
            fetch_succeeded=False,
            error_message=describe_failure(exc),
        )

    return TeamMemberReport(
        username=username,
        corporate_username=corporate_username,
        personal_contributions=personal_total,
        corporate_contributions=corporate_total,
        latest_note=latest_note,
    )


def build_team_report(
    roster: list[tuple[str, str | None]],
    year: int,
    settings: Settings,
    store: NoteStore,
    today: date | None = None,
) -> list[TeamMemberReport]:
    """Build one report per roster user, in roster order."""

    today = today or date.today()
    if not roster:
        return []

    workers = max(1, min(settings.ranking_max_workers, len(roster)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(
            executor.map(
                lambda member: build_member_report(
                    member[0], member[1], year, settings, store, today
                ),
                roster,
            )
        )

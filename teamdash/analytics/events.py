"""Fold raw GitHub Events API records into activity insights.

Each fold below is independent and pure. Records missing the fields a fold
needs are skipped by that fold only; nothing here raises for bad data.
"""

import re
from collections import Counter
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from datetime import datetime
from datetime import tzinfo
from typing import Any

from teamdash.analytics.models import BranchInsights
from teamdash.analytics.models import BranchStat
from teamdash.analytics.models import CommitMessageStats
from teamdash.analytics.models import EventInsights
from teamdash.analytics.models import RepoStat
from teamdash.analytics.rounding import percentage
from teamdash.analytics.rounding import round_half_up

PUSH_EVENT = "PushEvent"
CREATE_EVENT = "CreateEvent"
BRANCH_REF_PREFIX = "refs/heads/"
MAIN_BRANCHES = frozenset({"main", "master"})

# Order matters: the first rule whose substring occurs in the name wins.
LANGUAGE_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("JavaScript", ("react", "next", "js")),
    ("Python", ("python", "py", "django")),
    ("Go", ("go", "golang")),
    ("Rust", ("rust", "rs")),
    ("C++", ("cpp", "c++")),
    ("Swift", ("swift", "ios")),
    ("Kotlin", ("kotlin", "android")),
    ("PHP", ("php",)),
    ("Ruby", ("ruby", "rails")),
)
FALLBACK_LANGUAGE = "Other"

COMMIT_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "test",
    "chore",
    "perf",
    "ci",
    "build",
)
OTHER_COMMIT_TYPE = "other"
CONVENTIONAL_COMMIT_RE = re.compile(
    r"^(?P<type>" + "|".join(COMMIT_TYPES) + r")(\([^)]*\))?!?:",
    re.IGNORECASE,
)
FILE_EXTENSION_RE = re.compile(r"\.([a-z0-9]+)", re.IGNORECASE)

BRANCH_CATEGORIES: dict[str, tuple[str, ...]] = {
    "feature": ("feature", "feat"),
    "fix": ("fix", "bug"),
    "dev": ("dev", "develop"),
}


def parse_github_datetime(raw_value: Any) -> datetime | None:
    if not isinstance(raw_value, str):
        return None
    try:
        return datetime.fromisoformat(raw_value.replace("Z", "+00:00"))
    except ValueError:
        return None


def infer_language(repo_name: str) -> str:
    """Guess a repository's language from substrings of its name."""

    lowered = repo_name.lower()
    for language, needles in LANGUAGE_RULES:
        if any(needle in lowered for needle in needles):
            return language
    return FALLBACK_LANGUAGE


def _repo_name(event: Mapping[str, Any]) -> str | None:
    repo = event.get("repo")
    if not isinstance(repo, Mapping):
        return None
    name = repo.get("name")
    return name if isinstance(name, str) and name else None


def _payload(event: Mapping[str, Any]) -> Mapping[str, Any] | None:
    payload = event.get("payload")
    return payload if isinstance(payload, Mapping) else None


def _push_events(
    events: Iterable[Any],
) -> Iterator[tuple[Mapping[str, Any], Mapping[str, Any], list[Any]]]:
    """Yield (event, payload, commits) for push events with any commits."""

    for event in events:
        if not isinstance(event, Mapping) or event.get("type") != PUSH_EVENT:
            continue
        payload = _payload(event)
        if payload is None:
            continue
        commits = payload.get("commits")
        if not isinstance(commits, list) or not commits:
            continue
        yield event, payload, commits


def _commit_messages(events: Iterable[Any]) -> Iterator[str]:
    for _, _, commits in _push_events(events):
        for commit in commits:
            if not isinstance(commit, Mapping):
                continue
            message = commit.get("message")
            if isinstance(message, str):
                yield message


def _collect_repositories(events: Iterable[Any]) -> dict[str, RepoStat]:
    repositories: dict[str, RepoStat] = {}
    for event, _, commits in _push_events(events):
        name = _repo_name(event)
        if name is None:
            continue

        stat = repositories.setdefault(name, RepoStat(name=name))
        stat.commits += len(commits)
        stat.languages.add(infer_language(name))

        created_at = parse_github_datetime(event.get("created_at"))
        if created_at is not None and (
            stat.last_activity is None or created_at > stat.last_activity
        ):
            stat.last_activity = created_at

    return repositories


def repository_stats(events: Iterable[Any], limit: int = 5) -> list[RepoStat]:
    """Most-committed repositories, ties kept in first-seen order."""

    repositories = _collect_repositories(events)
    return sorted(repositories.values(), key=lambda stat: -stat.commits)[:limit]


def language_histogram(events: Iterable[Any]) -> list[tuple[str, int]]:
    totals: Counter[str] = Counter()
    for stat in _collect_repositories(events).values():
        for language in stat.languages:
            totals[language] += stat.commits
    return totals.most_common()


def classify_commit_message(message: str) -> str:
    match = CONVENTIONAL_COMMIT_RE.match(message)
    if match is None:
        return OTHER_COMMIT_TYPE
    return match.group("type").lower()


def analyze_commit_messages(events: Iterable[Any]) -> CommitMessageStats:
    commit_types: Counter[str] = Counter()
    total_length = 0
    total_commits = 0
    for message in _commit_messages(events):
        commit_types[classify_commit_message(message)] += 1
        total_length += len(message)
        total_commits += 1

    conventional = total_commits - commit_types[OTHER_COMMIT_TYPE]
    average_length = (
        int(round_half_up(total_length / total_commits)) if total_commits else 0
    )
    return CommitMessageStats(
        total_commits=total_commits,
        commit_types=dict(commit_types),
        conventional_percentage=percentage(conventional, total_commits),
        average_message_length=average_length,
        top_types=commit_types.most_common(3),
    )


def peak_hours(
    events: Iterable[Any], tz: tzinfo | None = None, limit: int = 3
) -> list[tuple[int, int]]:
    """Busiest hours of the day; `tz=None` means the host's local zone."""

    hours: Counter[int] = Counter()
    for event in events:
        if not isinstance(event, Mapping):
            continue
        created_at = parse_github_datetime(event.get("created_at"))
        if created_at is None:
            continue
        hours[created_at.astimezone(tz).hour] += 1
    return hours.most_common(limit)


def file_type_heuristics(
    events: Iterable[Any], limit: int = 10
) -> list[tuple[str, int]]:
    """Tally `.ext`-looking tokens mentioned in commit messages."""

    extensions: Counter[str] = Counter()
    for message in _commit_messages(events):
        for token in FILE_EXTENSION_RE.findall(message):
            extensions[token.lower()] += 1
    return extensions.most_common(limit)


def branch_insights(events: Iterable[Any], limit: int = 5) -> BranchInsights:
    branches: dict[str, BranchStat] = {}

    for event in events:
        if not isinstance(event, Mapping):
            continue
        payload = _payload(event)
        if payload is None:
            continue

        event_type = event.get("type")
        if event_type == PUSH_EVENT:
            ref = payload.get("ref")
            commits = payload.get("commits")
            if not isinstance(ref, str) or not ref:
                continue
            name = ref.removeprefix(BRANCH_REF_PREFIX)
            stat = branches.setdefault(name, BranchStat(name=name))
            if isinstance(commits, list):
                stat.commits += len(commits)
            repo_name = _repo_name(event)
            if repo_name is not None:
                stat.repositories.add(repo_name)
        elif event_type == CREATE_EVENT and payload.get("ref_type") == "branch":
            ref = payload.get("ref")
            if not isinstance(ref, str) or not ref:
                continue
            stat = branches.setdefault(ref, BranchStat(name=ref))
            repo_name = _repo_name(event)
            if repo_name is not None:
                stat.repositories.add(repo_name)

    def category_count(category: str) -> int:
        needles = BRANCH_CATEGORIES[category]
        return sum(
            1
            for name in branches
            if any(needle in name.lower() for needle in needles)
        )

    return BranchInsights(
        total_branches=len(branches),
        main_branch_commits=sum(
            stat.commits for name, stat in branches.items() if name in MAIN_BRANCHES
        ),
        feature_branches=category_count("feature"),
        fix_branches=category_count("fix"),
        dev_branches=category_count("dev"),
        top_branches=sorted(branches.values(), key=lambda stat: -stat.commits)[
            :limit
        ],
    )


def event_type_counts(events: Iterable[Any]) -> list[tuple[str, int]]:
    types: Counter[str] = Counter()
    for event in events:
        if isinstance(event, Mapping) and isinstance(event.get("type"), str):
            types[event["type"]] += 1
    return types.most_common()


def aggregate_events(
    events: Iterable[Any] | None, tz: tzinfo | None = None
) -> EventInsights:
    """Run every event fold over one materialized copy of the input."""

    records = list(events or [])
    return EventInsights(
        total_events=len(records),
        event_types=event_type_counts(records),
        repositories=repository_stats(records),
        languages=language_histogram(records),
        commit_messages=analyze_commit_messages(records),
        peak_hours=peak_hours(records, tz=tz),
        file_types=file_type_heuristics(records),
        branches=branch_insights(records),
    )

from datetime import date
from datetime import timedelta


def make_calendar(start: date, counts: list[int]) -> dict[str, object]:
    """Build a GraphQL-shaped contribution calendar starting at `start`."""

    days = [
        {
            "date": (start + timedelta(days=offset)).isoformat(),
            "contributionCount": count,
        }
        for offset, count in enumerate(counts)
    ]
    weeks = [
        {"contributionDays": days[index : index + 7]}
        for index in range(0, len(days), 7)
    ]
    return {"totalContributions": sum(counts), "weeks": weeks}


def push_event(
    repo: str,
    messages: list[str],
    created_at: str = "2026-10-19T10:00:00Z",
    ref: str = "refs/heads/main",
) -> dict[str, object]:
    return {
        "type": "PushEvent",
        "created_at": created_at,
        "repo": {"name": repo},
        "actor": {"login": "octocat", "avatar_url": "https://example.test/a.png"},
        "payload": {
            "ref": ref,
            "commits": [
                {"sha": f"{index:040d}", "message": message}
                for index, message in enumerate(messages)
            ],
        },
    }

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

import httpx

USER_AGENT = "teamdash"

CONTRIBUTIONS_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      restrictedContributionsCount
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


@dataclass(frozen=True)
class ContributionCollection:
    """Raw contribution calendar plus the count GitHub keeps private."""

    calendar: dict[str, Any]
    restricted_count: int


def _headers(token: str | None) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def fetch_user_events(
    username: str, token: str | None, api_base_url: str
) -> list[dict[str, Any]]:
    """Fetch the public activity feed for a user, most recent first."""

    response = httpx.get(
        f"{api_base_url.rstrip('/')}/users/{username}/events",
        headers=_headers(token),
        params={"per_page": 100},
        timeout=15.0,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, list):
        raise ValueError("GitHub events response is invalid")

    return [item for item in payload if isinstance(item, Mapping)]


def fetch_contribution_calendar(
    username: str,
    token: str | None,
    graphql_url: str,
    from_day: date,
    to_day: date,
) -> ContributionCollection:
    """Fetch a user's contribution calendar between two days (inclusive)."""

    if not token:
        raise ValueError("a GitHub token is required for GraphQL requests")

    variables = {
        "login": username,
        "from": f"{from_day.isoformat()}T00:00:00Z",
        "to": f"{to_day.isoformat()}T23:59:59Z",
    }
    headers = _headers(token)
    headers["Content-Type"] = "application/json"

    response = httpx.post(
        graphql_url,
        json={"query": CONTRIBUTIONS_QUERY, "variables": variables},
        headers=headers,
        timeout=20.0,
    )
    response.raise_for_status()

    payload = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    if payload.get("errors"):
        raise ValueError("GitHub GraphQL returned errors")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise ValueError("GitHub user not found")

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    restricted = collection.get("restrictedContributionsCount")
    if not isinstance(restricted, int):
        restricted = 0

    return ContributionCollection(calendar=dict(calendar), restricted_count=restricted)

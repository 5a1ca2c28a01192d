from datetime import date

import httpx
import pytest

from factories import make_calendar

from teamdash.clients.github_client import fetch_contribution_calendar
from teamdash.clients.github_client import fetch_user_events


def fake_response(
    method: str, url: str, status_code: int, payload: object
) -> httpx.Response:
    return httpx.Response(status_code, json=payload, request=httpx.Request(method, url))


def test_fetch_contribution_calendar_parses_collection(monkeypatch) -> None:
    calendar = make_calendar(date(2026, 1, 1), [1, 2, 3])
    calls: list[dict[str, object]] = []

    def fake_post(url, json, headers, timeout):
        calls.append({"url": url, "json": json, "headers": headers})
        return fake_response(
            "POST",
            url,
            200,
            {
                "data": {
                    "user": {
                        "contributionsCollection": {
                            "restrictedContributionsCount": 2,
                            "contributionCalendar": calendar,
                        }
                    }
                }
            },
        )

    monkeypatch.setattr("teamdash.clients.github_client.httpx.post", fake_post)

    collection = fetch_contribution_calendar(
        username="octocat",
        token="secret",
        graphql_url="https://ghe.example.test/api/graphql",
        from_day=date(2026, 1, 1),
        to_day=date(2026, 12, 31),
    )

    assert collection.restricted_count == 2
    assert collection.calendar["totalContributions"] == 6
    assert calls[0]["url"] == "https://ghe.example.test/api/graphql"
    assert calls[0]["json"]["variables"] == {
        "login": "octocat",
        "from": "2026-01-01T00:00:00Z",
        "to": "2026-12-31T23:59:59Z",
    }
    assert calls[0]["headers"]["Authorization"] == "Bearer secret"


def test_fetch_contribution_calendar_requires_token() -> None:
    with pytest.raises(ValueError):
        fetch_contribution_calendar(
            username="octocat",
            token=None,
            graphql_url="https://api.github.com/graphql",
            from_day=date(2026, 1, 1),
            to_day=date(2026, 12, 31),
        )


def test_fetch_contribution_calendar_rejects_graphql_errors(monkeypatch) -> None:
    def fake_post(url, json, headers, timeout):
        return fake_response("POST", url, 200, {"errors": [{"message": "nope"}]})

    monkeypatch.setattr("teamdash.clients.github_client.httpx.post", fake_post)

    with pytest.raises(ValueError, match="GraphQL returned errors"):
        fetch_contribution_calendar(
            username="octocat",
            token="secret",
            graphql_url="https://api.github.com/graphql",
            from_day=date(2026, 1, 1),
            to_day=date(2026, 12, 31),
        )


def test_fetch_user_events_returns_mappings_only(monkeypatch) -> None:
    def fake_get(url, headers, params, timeout):
        assert url == "https://api.github.com/users/octocat/events"
        assert "Authorization" not in headers
        return fake_response("GET", url, 200, [{"type": "PushEvent"}, "junk"])

    monkeypatch.setattr("teamdash.clients.github_client.httpx.get", fake_get)

    events = fetch_user_events(
        username="octocat", token=None, api_base_url="https://api.github.com/"
    )

    assert events == [{"type": "PushEvent"}]


def test_fetch_user_events_raises_for_http_errors(monkeypatch) -> None:
    def fake_get(url, headers, params, timeout):
        return fake_response("GET", url, 404, {"message": "Not Found"})

    monkeypatch.setattr("teamdash.clients.github_client.httpx.get", fake_get)

    with pytest.raises(httpx.HTTPStatusError):
        fetch_user_events(
            username="ghost", token=None, api_base_url="https://api.github.com"
        )

from datetime import date

import httpx
import pytest

from streakbadge.services.errors import GitHubAPIError
from streakbadge.services.errors import InvalidGitHubTokenError
from streakbadge.services.errors import MissingGitHubTokenError
from streakbadge.services.sources import EventFeedSource
from streakbadge.services.sources import GraphQLCalendarSource
from streakbadge.services.sources import _GitHubSource
from streakbadge.services.sources import source_from_settings
from streakbadge.settings import Settings

API = "https://api.github.com"


def status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", f"{API}/users/octocat")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError("boom", request=request, response=response)


@pytest.fixture
def fake_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_fetch_user_profile(username: str, token: str | None, api_base_url: str):
        assert username == "octocat"
        return {"public_repos": 9, "followers": 31, "following": 4}

    def fake_fetch_total_stars(username: str, token: str | None, api_base_url: str):
        return 77

    monkeypatch.setattr(
        "streakbadge.services.sources.fetch_user_profile", fake_fetch_user_profile
    )
    monkeypatch.setattr(
        "streakbadge.services.sources.fetch_total_stars", fake_fetch_total_stars
    )


def test_graphql_source_requires_token() -> None:
    with pytest.raises(MissingGitHubTokenError):
        GraphQLCalendarSource(
            username="octocat",
            token=None,
            api_base_url=API,
            graphql_url=f"{API}/graphql",
        )


def test_graphql_source_uses_calendar_days_and_total(
    monkeypatch: pytest.MonkeyPatch, fake_profile: None
) -> None:
    calls: list[str] = []

    def fake_fetch_contribution_calendar(username: str, token: str, graphql_url: str):
        calls.append(username)
        return {
            "total": 1234,
            "days": [
                {"date": "2024-07-01", "count": 3},
                {"date": "2024-07-02", "count": 0},
            ],
        }

    monkeypatch.setattr(
        "streakbadge.services.sources.fetch_contribution_calendar",
        fake_fetch_contribution_calendar,
    )
    source = GraphQLCalendarSource(
        username="octocat", token="t0k", api_base_url=API, graphql_url=f"{API}/graphql"
    )

    days = source.fetch_daily_counts()
    profile = source.fetch_profile_summary()

    assert [(day.day, day.count) for day in days] == [
        (date(2024, 7, 1), 3),
        (date(2024, 7, 2), 0),
    ]
    assert profile.total_contributions == 1234
    assert profile.repo_count == 9
    assert profile.star_count == 77
    assert profile.follower_count == 31
    assert profile.following_count == 4
    assert calls == ["octocat"]


def test_event_feed_source_counts_push_events_per_utc_day(
    monkeypatch: pytest.MonkeyPatch, fake_profile: None
) -> None:
    def fake_fetch_user_events(username: str, token: str | None, api_base_url: str):
        return [
            {"id": "1", "type": "PushEvent", "created_at": "2026-02-20T10:00:00Z"},
            {"id": "2", "type": "IssuesEvent", "created_at": "2026-02-20T11:00:00Z"},
            {"id": "3", "type": "PushEvent", "created_at": "2026-02-20T23:59:59Z"},
            {"id": "4", "type": "PushEvent", "created_at": "2026-02-19T00:00:00Z"},
        ]

    monkeypatch.setattr(
        "streakbadge.services.sources.fetch_user_events", fake_fetch_user_events
    )
    source = EventFeedSource(username="octocat", token=None, api_base_url=API)

    days = source.fetch_daily_counts()
    profile = source.fetch_profile_summary()

    assert [(day.day, day.count) for day in days] == [
        (date(2026, 2, 19), 1),
        (date(2026, 2, 20), 2),
    ]
    assert profile.total_contributions == 3


def test_event_feed_without_pushes_is_empty(
    monkeypatch: pytest.MonkeyPatch, fake_profile: None
) -> None:
    monkeypatch.setattr(
        "streakbadge.services.sources.fetch_user_events",
        lambda username, token, api_base_url: [],
    )
    source = EventFeedSource(username="octocat", token=None, api_base_url=API)

    assert source.fetch_daily_counts() == []
    assert source.fetch_profile_summary().total_contributions == 0


@pytest.mark.parametrize("status_code", [401, 403])
def test_auth_failures_become_invalid_token_errors(
    monkeypatch: pytest.MonkeyPatch, status_code: int
) -> None:
    def fake_fetch_user_profile(username: str, token: str | None, api_base_url: str):
        raise status_error(status_code)

    monkeypatch.setattr(
        "streakbadge.services.sources.fetch_user_profile", fake_fetch_user_profile
    )
    source = EventFeedSource(username="octocat", token="bad", api_base_url=API)

    with pytest.raises(InvalidGitHubTokenError):
        source.fetch_profile_summary()


def test_server_errors_become_github_api_errors(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fake_fetch_user_events(username: str, token: str | None, api_base_url: str):
        raise status_error(502)

    monkeypatch.setattr(
        "streakbadge.services.sources.fetch_user_events", fake_fetch_user_events
    )
    source = EventFeedSource(username="octocat", token=None, api_base_url=API)

    with pytest.raises(GitHubAPIError):
        source.fetch_daily_counts()


def test_malformed_payloads_become_github_api_errors(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fake_fetch_contribution_calendar(username: str, token: str, graphql_url: str):
        raise ValueError("GitHub user not found")

    monkeypatch.setattr(
        "streakbadge.services.sources.fetch_contribution_calendar",
        fake_fetch_contribution_calendar,
    )
    source = GraphQLCalendarSource(
        username="ghost", token="t0k", api_base_url=API, graphql_url=f"{API}/graphql"
    )

    with pytest.raises(GitHubAPIError, match="GitHub user not found"):
        source.fetch_daily_counts()


def test_source_from_settings_picks_configured_strategy() -> None:
    graphql = source_from_settings(
        Settings(contribution_source="graphql", gh_token="abc"), username="octocat"
    )
    events = source_from_settings(
        Settings(contribution_source="events", gh_token=None, github_token=None),
        username="octocat",
    )

    assert isinstance(graphql, GraphQLCalendarSource)
    assert graphql.token == "abc"
    assert isinstance(events, EventFeedSource)


def test_explicit_token_overrides_settings_token() -> None:
    source = source_from_settings(
        Settings(contribution_source="graphql", gh_token="from-env"),
        username="octocat",
        token="from-request",
    )

    assert source.token == "from-request"


def test_github_source_base_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        _GitHubSource(username="octocat", token=None, api_base_url=API)


def test_github_sources_implement_every_abstract_method() -> None:
    assert not GraphQLCalendarSource.__abstractmethods__
    assert not EventFeedSource.__abstractmethods__

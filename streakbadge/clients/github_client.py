from collections.abc import Mapping
from typing import Any

import httpx

USER_AGENT = "streak-badge"
REPOS_PAGE_SIZE = 100
EVENTS_PAGE_SIZE = 100
# GitHub serves at most 300 public events per user.
EVENTS_MAX_PAGES = 3

CALENDAR_QUERY = """
query($login: String!) {
  user(login: $login) {
    contributionsCollection {
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


def _headers(token: str | None) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _get_json(
    url: str, token: str | None, params: dict[str, int] | None = None
) -> Any:
    response = httpx.get(url, headers=_headers(token), params=params, timeout=15.0)
    response.raise_for_status()
    return response.json()


def _non_negative_int(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"GitHub response field {key!r} is invalid")
    return value


def fetch_authenticated_user(
    token: str, api_base_url: str = "https://api.github.com"
) -> dict[str, str | int]:
    """Fetch basic profile data for the token owner from GitHub REST API."""

    payload = _get_json(f"{api_base_url}/user", token)
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub user response is invalid")

    raw_id = payload.get("id")
    raw_login = payload.get("login")
    if not isinstance(raw_id, int) or not isinstance(raw_login, str) or not raw_login:
        raise ValueError("GitHub user response is missing required fields")

    return {"id": raw_id, "login": raw_login}


def fetch_user_profile(
    username: str, token: str | None, api_base_url: str
) -> dict[str, int]:
    """Fetch repository, follower and following counts for a user."""

    payload = _get_json(f"{api_base_url}/users/{username}", token)
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub profile response is invalid")

    return {
        "public_repos": _non_negative_int(payload, "public_repos"),
        "followers": _non_negative_int(payload, "followers"),
        "following": _non_negative_int(payload, "following"),
    }


def fetch_total_stars(username: str, token: str | None, api_base_url: str) -> int:
    """Sum stargazer counts across every public repository owned by a user."""

    total = 0
    page = 1
    while True:
        repos = _get_json(
            f"{api_base_url}/users/{username}/repos",
            token,
            params={"per_page": REPOS_PAGE_SIZE, "page": page},
        )
        if not isinstance(repos, list):
            raise ValueError("GitHub repositories response is invalid")

        for repo in repos:
            if not isinstance(repo, Mapping):
                raise ValueError("GitHub repository item is invalid")
            total += _non_negative_int(repo, "stargazers_count")

        if len(repos) < REPOS_PAGE_SIZE:
            return total
        page += 1


def fetch_contribution_calendar(
    username: str,
    token: str,
    graphql_url: str,
) -> dict[str, Any]:
    """Fetch the contribution calendar for a user from GitHub GraphQL API.

    Returns a mapping with `total` (server-reported contribution total) and
    `days`, a list of `{"date": "YYYY-MM-DD", "count": int}` items.
    """

    if not token:
        raise ValueError("GH_TOKEN or GITHUB_TOKEN is required for GraphQL requests")

    response = httpx.post(
        graphql_url,
        json={"query": CALENDAR_QUERY, "variables": {"login": username}},
        headers={**_headers(token), "Content-Type": "application/json"},
        timeout=20.0,
    )
    response.raise_for_status()

    payload = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        messages = [
            str(error.get("message", "unknown error"))
            for error in errors
            if isinstance(error, Mapping)
        ]
        raise ValueError(
            "GitHub GraphQL response error: " + ("; ".join(messages) or "unknown")
        )

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

    total = _non_negative_int(calendar, "totalContributions")

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    return {"total": total, "days": _calendar_days(weeks)}


def _calendar_days(weeks: list[Any]) -> list[dict[str, str | int]]:
    """Flatten calendar weeks, rejecting any week or day of the wrong shape.

    A skipped day would read as zero activity and cut a streak short, so
    nothing is dropped silently.
    """

    days: list[dict[str, str | int]] = []
    for week in weeks:
        if not isinstance(week, Mapping):
            raise ValueError("GitHub contribution week is invalid")
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            raise ValueError("GitHub contributionDays are missing")
        for item in contribution_days:
            if not isinstance(item, Mapping):
                raise ValueError("GitHub contribution day is invalid")
            raw_date = item.get("date")
            if not isinstance(raw_date, str):
                raise ValueError("GitHub contribution day has no date")
            count = _non_negative_int(item, "contributionCount")
            days.append({"date": raw_date, "count": count})
    return days


def fetch_user_events(
    username: str, token: str | None, api_base_url: str
) -> list[dict[str, Any]]:
    """Fetch the public event feed of a user, newest first."""

    events: list[dict[str, Any]] = []
    for page in range(1, EVENTS_MAX_PAGES + 1):
        batch = _get_json(
            f"{api_base_url}/users/{username}/events/public",
            token,
            params={"per_page": EVENTS_PAGE_SIZE, "page": page},
        )
        if not isinstance(batch, list):
            raise ValueError("GitHub events response is invalid")

        events.extend(item for item in batch if isinstance(item, dict))
        if len(batch) < EVENTS_PAGE_SIZE:
            break

    return events

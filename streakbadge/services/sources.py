"""Interchangeable strategies for acquiring daily contribution counts."""

from abc import ABC
from abc import abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any
from typing import Protocol

import httpx

from streakbadge.clients.github_client import fetch_contribution_calendar
from streakbadge.clients.github_client import fetch_total_stars
from streakbadge.clients.github_client import fetch_user_events
from streakbadge.clients.github_client import fetch_user_profile
from streakbadge.core.logger import get_logger
from streakbadge.models import ProfileSummary
from streakbadge.services.contributions import DayCount
from streakbadge.services.contributions import to_day_counts
from streakbadge.services.errors import GitHubAPIError
from streakbadge.services.errors import InvalidGitHubTokenError
from streakbadge.services.errors import MissingGitHubTokenError
from streakbadge.settings import Settings

logger = get_logger(__name__)

PUSH_EVENT = "PushEvent"


class ContributionSource(Protocol):
    """Anything that can supply daily counts and the profile summary."""

    def fetch_daily_counts(self) -> list[DayCount]: ...

    def fetch_profile_summary(self) -> ProfileSummary: ...


@contextmanager
def github_errors(operation: str) -> Iterator[None]:
    """Translate transport and payload failures into service errors."""

    try:
        yield
    except httpx.HTTPStatusError as exc:
        logger.warning(
            "github.request.failed",
            operation=operation,
            status_code=exc.response.status_code,
        )
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError from exc
        raise GitHubAPIError(f"{operation} failed") from exc
    except (InvalidGitHubTokenError, GitHubAPIError):
        raise
    except Exception as exc:
        logger.warning("github.request.failed", operation=operation, error=str(exc))
        raise GitHubAPIError(f"{operation} failed: {exc}") from exc


class _GitHubSource(ABC):
    """Shared REST profile and star lookups for the GitHub-backed sources."""

    def __init__(self, username: str, token: str | None, api_base_url: str) -> None:
        self.username = username
        self.token = token
        self.api_base_url = api_base_url

    def _profile_counts(self) -> tuple[dict[str, int], int]:
        with github_errors("profile"):
            profile = fetch_user_profile(self.username, self.token, self.api_base_url)
        with github_errors("stars"):
            stars = fetch_total_stars(self.username, self.token, self.api_base_url)
        return profile, stars

    @abstractmethod
    def fetch_daily_counts(self) -> list[DayCount]: ...

    @abstractmethod
    def _total_contributions(self) -> int: ...

    def fetch_profile_summary(self) -> ProfileSummary:
        profile, stars = self._profile_counts()
        return ProfileSummary(
            repo_count=profile["public_repos"],
            star_count=stars,
            follower_count=profile["followers"],
            following_count=profile["following"],
            total_contributions=self._total_contributions(),
        )


class GraphQLCalendarSource(_GitHubSource):
    """Daily counts and the authoritative total from the GraphQL calendar."""

    def __init__(
        self,
        username: str,
        token: str | None,
        api_base_url: str,
        graphql_url: str,
    ) -> None:
        if not token:
            raise MissingGitHubTokenError(
                "GH_TOKEN or GITHUB_TOKEN is required for GitHub GraphQL API"
            )
        super().__init__(username, token, api_base_url)
        self.graphql_url = graphql_url
        self._calendar: dict[str, Any] | None = None

    def _load_calendar(self) -> dict[str, Any]:
        if self._calendar is None:
            with github_errors("contribution calendar"):
                self._calendar = fetch_contribution_calendar(
                    username=self.username,
                    token=self.token,
                    graphql_url=self.graphql_url,
                )
        return self._calendar

    def fetch_daily_counts(self) -> list[DayCount]:
        return to_day_counts(self._load_calendar()["days"])

    def _total_contributions(self) -> int:
        return self._load_calendar()["total"]


class EventFeedSource(_GitHubSource):
    """Daily counts rebuilt from push events in the public event feed.

    The feed only reaches back a few hundred events, so the derived history is
    shorter than the calendar's and `total_contributions` is the number of
    push events observed rather than a server-reported total.
    """

    def __init__(self, username: str, token: str | None, api_base_url: str) -> None:
        super().__init__(username, token, api_base_url)
        self._push_days: list[str] | None = None

    def _load_push_days(self) -> list[str]:
        if self._push_days is None:
            with github_errors("event feed"):
                events = fetch_user_events(
                    self.username, self.token, self.api_base_url
                )
                self._push_days = [
                    parse_github_datetime(event["created_at"]).date().isoformat()
                    for event in events
                    if event.get("type") == PUSH_EVENT
                ]
        return self._push_days

    def fetch_daily_counts(self) -> list[DayCount]:
        aggregated_counts: dict[str, int] = {}
        for day in self._load_push_days():
            aggregated_counts[day] = aggregated_counts.get(day, 0) + 1
        return to_day_counts(
            {"date": day, "count": count}
            for day, count in sorted(aggregated_counts.items())
        )

    def _total_contributions(self) -> int:
        return len(self._load_push_days())


def parse_github_datetime(raw_value: str) -> datetime:
    return datetime.fromisoformat(raw_value.replace("Z", "+00:00"))


def source_from_settings(
    settings: Settings,
    username: str,
    token: str | None = None,
) -> ContributionSource:
    """Pick the acquisition strategy configured for this deployment."""

    token = token or settings.resolved_github_token
    if settings.contribution_source == "events":
        return EventFeedSource(
            username=username,
            token=token,
            api_base_url=settings.github_api_base_url,
        )
    return GraphQLCalendarSource(
        username=username,
        token=token,
        api_base_url=settings.github_api_base_url,
        graphql_url=settings.github_graphql_url,
    )

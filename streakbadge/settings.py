from typing import Literal

from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    gh_token: str | None = None
    github_token: str | None = None
    github_username: str | None = None
    github_api_base_url: str = "https://api.github.com"
    github_graphql_url: str = "https://api.github.com/graphql"
    contribution_source: Literal["graphql", "events"] = "graphql"
    badge_output_path: str = "streak.svg"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def resolved_github_token(self) -> str | None:
        """Return the first non-blank token from GH_TOKEN, then GITHUB_TOKEN."""

        for candidate in (self.gh_token, self.github_token):
            if candidate and candidate.strip():
                return candidate.strip()
        return None

from datetime import date

from pydantic import BaseModel


class BadgeMetrics(BaseModel):
    """Streak and trailing-window metrics included in the badge."""

    current_streak: int
    longest_streak: int
    window_active_days: int
    window_total: int
    bar_heights: list[int]


class BadgeProfile(BaseModel):
    """Profile numbers rendered in the badge footer."""

    repo_count: int
    star_count: int
    follower_count: int
    following_count: int
    total_contributions: int


class BadgeMetricsResponse(BaseModel):
    """Authenticated user badge metrics payload."""

    username: str
    today: date
    metrics: BadgeMetrics
    profile: BadgeProfile

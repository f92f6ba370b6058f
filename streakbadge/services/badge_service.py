from collections.abc import Iterable
from datetime import UTC
from datetime import date
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict

from streakbadge.core.logger import get_logger
from streakbadge.models import Metrics
from streakbadge.models import ProfileSummary
from streakbadge.rendering.badge import render_badge
from streakbadge.services.contributions import ContributionIndex
from streakbadge.services.contributions import DayCount
from streakbadge.services.sources import ContributionSource
from streakbadge.services.streaks import current_streak
from streakbadge.services.streaks import longest_streak
from streakbadge.services.window import aggregate_window

logger = get_logger(__name__)


class BadgeResult(BaseModel):
    """Everything produced by one badge run."""

    model_config = ConfigDict(frozen=True)

    today: date
    metrics: Metrics
    profile: ProfileSummary
    svg: str


def today_utc() -> date:
    return datetime.now(UTC).date()


def compute_metrics(
    entries: Iterable[DayCount | tuple[str | date, int]], today: date
) -> Metrics:
    """Build the contribution index once and derive every badge metric from it."""

    index = ContributionIndex.build(entries)
    window = aggregate_window(index, today)
    metrics = Metrics(
        current_streak=current_streak(index, today),
        longest_streak=longest_streak(index),
        window_active_days=window.active_days,
        window_total=window.total,
        bar_heights=window.bar_heights,
    )
    logger.debug(
        "badge.metrics.computed",
        today=today.isoformat(),
        days=len(index),
        current_streak=metrics.current_streak,
        longest_streak=metrics.longest_streak,
        window_active_days=metrics.window_active_days,
        window_total=metrics.window_total,
    )
    return metrics


def build_badge(source: ContributionSource, today: date) -> BadgeResult:
    """Fetch inputs from `source`, compute metrics and render the badge.

    Acquisition errors propagate unchanged; nothing is rendered from partial
    data.
    """

    entries = source.fetch_daily_counts()
    profile = source.fetch_profile_summary()

    metrics = compute_metrics(entries, today)
    svg = render_badge(metrics, profile)
    logger.info(
        "badge.rendered",
        today=today.isoformat(),
        current_streak=metrics.current_streak,
        longest_streak=metrics.longest_streak,
        size=len(svg),
    )
    return BadgeResult(today=today, metrics=metrics, profile=profile, svg=svg)

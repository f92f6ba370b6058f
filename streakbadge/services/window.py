from datetime import date
from datetime import timedelta

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from streakbadge.services.contributions import ContributionIndex

WINDOW_DAYS = 30
# Bar geometry: counts above BAR_CLAMP render at the same height.
BAR_CLAMP = 5
BAR_SCALE = 6
BAR_BASE = 4


class WindowMetrics(BaseModel):
    """Activity summary for the trailing window ending today."""

    model_config = ConfigDict(frozen=True)

    active_days: int = Field(ge=0, le=WINDOW_DAYS)
    total: int = Field(ge=0)
    bar_heights: tuple[int, ...]


def bar_height(count: int) -> int:
    return min(count, BAR_CLAMP) * BAR_SCALE + BAR_BASE


def window_days(today: date, size: int = WINDOW_DAYS) -> list[date]:
    """Return the `size` dates ending at `today`, oldest first."""

    return [today - timedelta(days=offset) for offset in range(size - 1, -1, -1)]


def aggregate_window(index: ContributionIndex, today: date) -> WindowMetrics:
    """Summarize the trailing 30-day window ending at and including `today`."""

    active_days = 0
    total = 0
    heights: list[int] = []
    for day in window_days(today):
        count = index.lookup(day)
        if count > 0:
            active_days += 1
            total += count
        heights.append(bar_height(count))

    return WindowMetrics(
        active_days=active_days, total=total, bar_heights=tuple(heights)
    )

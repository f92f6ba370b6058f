import re
from collections.abc import Iterable
from collections.abc import Mapping
from datetime import date
from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from streakbadge.services.errors import MalformedDateError

ISO_DAY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class DayCount(BaseModel):
    """Contribution count recorded for one calendar date."""

    model_config = ConfigDict(frozen=True)

    day: date
    count: int = Field(ge=0)


def parse_day(raw_day: str | date) -> date:
    """Parse an ISO calendar date, rejecting anything with a time component."""

    if isinstance(raw_day, datetime):
        raise MalformedDateError(f"contribution date has a time part: {raw_day!r}")
    if isinstance(raw_day, date):
        return raw_day
    if not isinstance(raw_day, str) or not ISO_DAY_PATTERN.fullmatch(raw_day):
        raise MalformedDateError(f"invalid contribution date: {raw_day!r}")
    try:
        return date.fromisoformat(raw_day)
    except ValueError as exc:
        raise MalformedDateError(f"invalid contribution date: {raw_day!r}") from exc


def to_day_counts(
    contribution_days: Iterable[Mapping[str, str | int]],
) -> list[DayCount]:
    """Convert `{"date": ..., "count": ...}` items from the client into DayCounts."""

    return [
        DayCount(day=parse_day(item["date"]), count=item["count"])
        for item in contribution_days
    ]


class ContributionIndex:
    """Read-only lookup of contribution counts keyed by calendar date.

    Dates missing from the index count as zero activity. When the same date
    appears more than once, the later entry wins.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Mapping[date, int]) -> None:
        self._counts = dict(counts)

    @classmethod
    def build(
        cls, entries: Iterable[DayCount | tuple[str | date, int]]
    ) -> "ContributionIndex":
        counts: dict[date, int] = {}
        for entry in entries:
            if isinstance(entry, DayCount):
                counts[entry.day] = entry.count
            else:
                raw_day, count = entry
                counts[parse_day(raw_day)] = count
        return cls(counts)

    def lookup(self, day: date) -> int:
        return self._counts.get(day, 0)

    def active_days(self) -> list[date]:
        """Return dates with a positive count in ascending order."""

        return sorted(day for day, count in self._counts.items() if count > 0)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, day: object) -> bool:
        return day in self._counts

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class Metrics(BaseModel):
    """Streak and trailing-window metrics computed for one run."""

    model_config = ConfigDict(frozen=True)

    current_streak: int = Field(ge=0)
    longest_streak: int = Field(ge=0)
    window_active_days: int = Field(ge=0)
    window_total: int = Field(ge=0)
    bar_heights: tuple[int, ...]


class ProfileSummary(BaseModel):
    """Profile numbers shown in the badge footer."""

    model_config = ConfigDict(frozen=True)

    repo_count: int = Field(ge=0)
    star_count: int = Field(ge=0)
    follower_count: int = Field(ge=0)
    following_count: int = Field(ge=0)
    total_contributions: int = Field(ge=0)

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi.responses import Response

from streakbadge.api.schemas.badge import BadgeMetricsResponse
from streakbadge.clients.github_client import fetch_authenticated_user
from streakbadge.core.security import require_github_token
from streakbadge.services.badge_service import BadgeResult
from streakbadge.services.badge_service import build_badge
from streakbadge.services.badge_service import today_utc
from streakbadge.services.errors import GitHubAPIError
from streakbadge.services.errors import InvalidGitHubTokenError
from streakbadge.services.errors import MalformedDateError
from streakbadge.services.sources import github_errors
from streakbadge.services.sources import source_from_settings
from streakbadge.settings import Settings


router = APIRouter()
settings = Settings()

SVG_MEDIA_TYPE = "image/svg+xml"


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Hello World"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


def _badge_for_token(token: str) -> tuple[str, BadgeResult]:
    try:
        with github_errors("authenticated user"):
            github_user = fetch_authenticated_user(
                token, api_base_url=settings.github_api_base_url
            )
        username = str(github_user["login"]).lower()
        source = source_from_settings(settings, username=username, token=token)
        return username, build_badge(source, today=today_utc())
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except (GitHubAPIError, MalformedDateError) as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc


@router.get("/badge/me", response_model=BadgeMetricsResponse)
def get_authenticated_user_badge_metrics(
    token: str = Depends(require_github_token),
) -> BadgeMetricsResponse:
    """Return streak and window metrics for the authenticated GitHub user."""

    username, result = _badge_for_token(token)
    return BadgeMetricsResponse(
        username=username,
        today=result.today,
        metrics=result.metrics.model_dump(),
        profile=result.profile.model_dump(),
    )


@router.get("/badge/me.svg")
def get_authenticated_user_badge_svg(
    token: str = Depends(require_github_token),
) -> Response:
    """Return the rendered streak badge for the authenticated GitHub user."""

    _, result = _badge_for_token(token)
    return Response(
        content=result.svg,
        media_type=SVG_MEDIA_TYPE,
        headers={"Cache-Control": "no-cache"},
    )

from fastapi import FastAPI

from streakbadge.api.routes.badge import router
from streakbadge.core.logger import configure_logging
from streakbadge.core.middleware import BadgeRateLimitMiddleware
from streakbadge.core.observability import init_sentry
from streakbadge.settings import Settings


def create_app() -> FastAPI:
    """Build the badge API application from current settings."""

    settings = Settings()
    configure_logging(settings.log_level, json_format=settings.log_format == "json")
    init_sentry(settings)

    application = FastAPI(title="streak-badge")
    application.add_middleware(
        BadgeRateLimitMiddleware,
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    application.include_router(router)
    return application


app = create_app()

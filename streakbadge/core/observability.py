import sentry_sdk

from streakbadge.core.logger import get_logger
from streakbadge.settings import Settings

logger = get_logger(__name__)


def init_sentry(app_settings: Settings) -> bool:
    """Initialize Sentry SDK when DSN is configured.

    Returns True when the SDK was initialized. Events are tagged with the
    contribution source so GraphQL and event-feed failures can be told apart.
    """

    if not app_settings.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=app_settings.sentry_dsn,
        environment=app_settings.environment,
        release=app_settings.release,
        traces_sample_rate=app_settings.sentry_traces_sample_rate,
        send_default_pii=False,
    )
    sentry_sdk.set_tag("contribution_source", app_settings.contribution_source)
    logger.info("sentry.initialized", environment=app_settings.environment)
    return True

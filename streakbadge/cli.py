"""Command line entry point that renders the streak badge to a file.

Usage:
    streak-badge --username octocat --output streak.svg

The token is read from GH_TOKEN or GITHUB_TOKEN; the remaining defaults come
from the environment (see `streakbadge.settings.Settings`).
"""

import argparse
import sys
from datetime import date
from pathlib import Path

from streakbadge.core.logger import configure_logging
from streakbadge.core.logger import get_logger
from streakbadge.core.observability import init_sentry
from streakbadge.services.badge_service import build_badge
from streakbadge.services.badge_service import today_utc
from streakbadge.services.errors import GitHubAPIError
from streakbadge.services.errors import InvalidGitHubTokenError
from streakbadge.services.errors import MissingGitHubTokenError
from streakbadge.services.sources import source_from_settings
from streakbadge.settings import Settings

logger = get_logger(__name__)


def _iso_date(raw_value: str) -> date:
    try:
        return date.fromisoformat(raw_value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"expected YYYY-MM-DD, got {raw_value!r}"
        ) from exc


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streak-badge",
        description="Render a GitHub contribution streak badge as SVG.",
    )
    parser.add_argument(
        "--username",
        default=settings.github_username,
        help="GitHub login (default: GITHUB_USERNAME)",
    )
    parser.add_argument(
        "--output",
        default=settings.badge_output_path,
        help="Where to write the SVG (default: %(default)s)",
    )
    parser.add_argument(
        "--source",
        choices=["graphql", "events"],
        default=settings.contribution_source,
        help="How daily counts are acquired (default: %(default)s)",
    )
    parser.add_argument(
        "--today",
        type=_iso_date,
        default=None,
        help="Reference date for streaks, YYYY-MM-DD (default: today in UTC)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    configure_logging(settings.log_level, json_format=settings.log_format == "json")
    init_sentry(settings)

    args = build_parser(settings).parse_args(argv)
    if not args.username:
        logger.error("cli.username.missing", hint="pass --username or GITHUB_USERNAME")
        return 1

    settings = settings.model_copy(update={"contribution_source": args.source})
    today = args.today or today_utc()

    try:
        source = source_from_settings(settings, username=args.username)
        result = build_badge(source, today=today)
    except (
        MissingGitHubTokenError,
        InvalidGitHubTokenError,
        GitHubAPIError,
        ValueError,
    ) as exc:
        logger.error(
            "cli.badge.failed",
            username=args.username,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return 1

    output = Path(args.output)
    output.write_text(result.svg, encoding="utf-8")
    logger.info(
        "cli.badge.written",
        path=str(output),
        current_streak=result.metrics.current_streak,
        longest_streak=result.metrics.longest_streak,
        window_active_days=result.metrics.window_active_days,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

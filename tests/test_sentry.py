import pytest

from streakbadge.core.observability import init_sentry
from streakbadge.settings import Settings


@pytest.fixture
def sentry_calls(monkeypatch: pytest.MonkeyPatch) -> dict[str, list]:
    calls: dict[str, list] = {"init": [], "tags": []}

    def fake_init(**kwargs):
        calls["init"].append(kwargs)

    def fake_set_tag(key: str, value: str) -> None:
        calls["tags"].append((key, value))

    monkeypatch.setattr("streakbadge.core.observability.sentry_sdk.init", fake_init)
    monkeypatch.setattr(
        "streakbadge.core.observability.sentry_sdk.set_tag", fake_set_tag
    )
    return calls


def test_init_sentry_skips_when_dsn_missing(sentry_calls: dict[str, list]) -> None:
    """Sentry initialization is skipped when DSN is absent."""

    initialized = init_sentry(Settings(sentry_dsn=None))

    assert initialized is False
    assert sentry_calls == {"init": [], "tags": []}


def test_init_sentry_initializes_sdk_with_settings(
    sentry_calls: dict[str, list],
) -> None:
    """Sentry SDK is initialized with configured runtime settings."""

    settings = Settings(
        sentry_dsn="https://examplePublicKey@o0.ingest.sentry.io/0",
        environment="production",
        release="abc123",
        sentry_traces_sample_rate=0.2,
        contribution_source="events",
    )

    assert init_sentry(settings) is True
    assert sentry_calls["init"] == [
        {
            "dsn": "https://examplePublicKey@o0.ingest.sentry.io/0",
            "environment": "production",
            "release": "abc123",
            "traces_sample_rate": 0.2,
            "send_default_pii": False,
        }
    ]
    assert sentry_calls["tags"] == [("contribution_source", "events")]

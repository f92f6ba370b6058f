from fastapi.testclient import TestClient

from streakbadge.core.middleware import SlidingWindowLimiter
from streakbadge.main import create_app


def test_badge_endpoint_rate_limited_after_threshold(monkeypatch) -> None:
    """Rate limiter blocks repeated requests to /badge/me."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "60")
    app = create_app()
    client = TestClient(app)

    headers = {"X-Forwarded-For": "203.0.113.10"}

    first = client.get("/badge/me", headers=headers)
    second = client.get("/badge/me", headers=headers)

    assert first.status_code == 401
    assert second.status_code == 429
    assert second.headers["Retry-After"]


def test_svg_and_json_badges_share_one_bucket(monkeypatch) -> None:
    """Both badge paths count against the same client budget."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    app = create_app()
    client = TestClient(app)

    headers = {"X-Forwarded-For": "203.0.113.11"}

    assert client.get("/badge/me", headers=headers).status_code == 401
    assert client.get("/badge/me.svg", headers=headers).status_code == 429


def test_clients_are_limited_independently(monkeypatch) -> None:
    """Each forwarded client IP has its own bucket."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    app = create_app()
    client = TestClient(app)

    first = client.get("/badge/me", headers={"X-Forwarded-For": "198.51.100.1"})
    other = client.get("/badge/me", headers={"X-Forwarded-For": "198.51.100.2"})

    assert first.status_code == 401
    assert other.status_code == 401


def test_non_badge_routes_not_rate_limited(monkeypatch) -> None:
    """Rate limiter does not affect routes other than the badge endpoints."""

    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "1")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "60")
    app = create_app()
    client = TestClient(app)

    first = client.get("/")
    second = client.get("/")

    assert first.status_code == 200
    assert second.status_code == 200


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_limiter_reports_retry_after_and_recovers() -> None:
    """A blocked key is allowed again once its oldest request leaves the window."""

    clock = FakeClock()
    limiter = SlidingWindowLimiter(max_requests=2, window_seconds=60, clock=clock)

    assert limiter.acquire("203.0.113.20") is None
    clock.now += 10
    assert limiter.acquire("203.0.113.20") is None
    clock.now += 5
    assert limiter.acquire("203.0.113.20") == 45

    clock.now += 46
    assert limiter.acquire("203.0.113.20") is None


def test_limiter_drops_buckets_of_quiet_clients() -> None:
    """Clients with no requests left in the window stop being tracked."""

    clock = FakeClock()
    limiter = SlidingWindowLimiter(max_requests=5, window_seconds=60, clock=clock)

    for index in range(50):
        limiter.acquire(f"198.51.100.{index}")
    assert len(limiter.tracked_keys()) == 50

    clock.now += 61
    limiter.acquire("192.0.2.1")

    assert limiter.tracked_keys() == {"192.0.2.1"}


def test_limiter_keeps_clients_still_inside_window() -> None:
    """The sweep only removes buckets that emptied out."""

    clock = FakeClock()
    limiter = SlidingWindowLimiter(max_requests=5, window_seconds=60, clock=clock)

    limiter.acquire("198.51.100.1")
    clock.now += 30
    limiter.acquire("198.51.100.2")
    clock.now += 31
    limiter.acquire("192.0.2.1")

    assert limiter.tracked_keys() == {"198.51.100.2", "192.0.2.1"}

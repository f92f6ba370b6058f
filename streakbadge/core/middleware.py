from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from threading import Lock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

RATE_LIMITED_PATHS = frozenset({"/badge/me", "/badge/me.svg"})


class SlidingWindowLimiter:
    """Per-key request budget over a sliding time window.

    A key's bucket only exists while it holds timestamps inside the window.
    Buckets of clients that went quiet are swept at most once per window, so
    memory tracks recent clients rather than every client ever seen.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self.max_requests = max(1, max_requests)
        self.window_seconds = max(1, window_seconds)
        self._clock = clock
        self._buckets: dict[str, deque[float]] = {}
        self._last_sweep = clock()
        self._lock = Lock()

    def acquire(self, key: str) -> int | None:
        """Record a request for `key`.

        Returns None when the request is allowed, otherwise the number of
        seconds until the oldest request in the window expires.
        """

        now = self._clock()
        cutoff = now - self.window_seconds
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now

            bucket = self._buckets.get(key)
            if bucket is not None:
                _evict(bucket, cutoff)

            if bucket and len(bucket) >= self.max_requests:
                return max(1, int(self.window_seconds - (now - bucket[0])))

            self._buckets.setdefault(key, deque()).append(now)
            return None

    def tracked_keys(self) -> set[str]:
        with self._lock:
            return set(self._buckets)

    def _sweep(self, cutoff: float) -> None:
        for key in list(self._buckets):
            bucket = self._buckets[key]
            _evict(bucket, cutoff)
            if not bucket:
                del self._buckets[key]


def _evict(bucket: deque[float], cutoff: float) -> None:
    while bucket and bucket[0] <= cutoff:
        bucket.popleft()


class BadgeRateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limit the badge endpoints per client IP.

    Every badge request fans out into several GitHub API calls. The JSON and
    SVG paths share one budget per client.
    """

    def __init__(
        self,
        app,
        requests_per_window: int = 30,
        window_seconds: int = 60,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        super().__init__(app)
        self.limiter = SlidingWindowLimiter(requests_per_window, window_seconds, clock)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or request.url.path not in RATE_LIMITED_PATHS:
            return await call_next(request)

        retry_after = self.limiter.acquire(client_ip(request))
        if retry_after is not None:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too Many Requests"},
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)


def client_ip(request: Request) -> str:
    # Reverse proxies set X-Forwarded-For; the first hop is the client.
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip() or "unknown"

    if request.client and request.client.host:
        return request.client.host

    return "unknown"

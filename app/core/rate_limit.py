"""In-memory sliding-window rate limiter for signup and login."""

import logging
import threading
import time
from collections import deque

from fastapi import Request

from app.core.config import get_settings
from app.core.errors import RateLimitedError

logger = logging.getLogger(__name__)


class SlidingWindowLimiter:
    """Allow at most max_requests per key within the last window_seconds."""

    def __init__(self, max_requests: int, window_seconds: float) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: dict[str, deque[float]] = {}
        self._next_sweep: float | None = None
        self._lock = threading.Lock()

    def __len__(self) -> int:
        """Number of keys currently tracked."""
        with self._lock:
            return len(self._hits)

    def allow(self, key: str, now: float | None = None) -> bool:
        now = time.monotonic() if now is None else now
        cutoff = now - self.window_seconds
        with self._lock:
            if self._next_sweep is None or now >= self._next_sweep:
                self._sweep(cutoff)
                self._next_sweep = now + self.window_seconds
            hits = self._hits.setdefault(key, deque())
            _drop_expired(hits, cutoff)
            if len(hits) >= self.max_requests:
                return False
            hits.append(now)
            return True

    def _sweep(self, cutoff: float) -> None:
        # Caller holds the lock. Runs at most once per window.
        for key in list(self._hits):
            hits = self._hits[key]
            _drop_expired(hits, cutoff)
            if not hits:
                del self._hits[key]

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._next_sweep = None


def _drop_expired(hits: deque[float], cutoff: float) -> None:
    while hits and hits[0] <= cutoff:
        hits.popleft()


def client_ip(request: Request) -> str:
    """Key for the limiter: the peer address, or the first X-Forwarded-For hop behind a trusted proxy."""
    if get_settings().TRUST_FORWARDED_FOR:
        # First entry is the originating client
        forwarded = request.headers.get("x-forwarded-for", "").split(",")[0].strip()
        if forwarded:
            return forwarded
    client = request.client
    return client.host if client else "unknown"


_settings = get_settings()
auth_limiter = SlidingWindowLimiter(
    max_requests=_settings.RATE_LIMIT_MAX_REQUESTS,
    window_seconds=_settings.RATE_LIMIT_WINDOW_SEC,
)


def limit_auth_attempts(request: Request) -> None:
    """Dependency: reject the request with 429 once the client IP exceeds its budget."""
    if not get_settings().RATE_LIMIT_ENABLED:
        return
    ip = client_ip(request)
    if not auth_limiter.allow(ip):
        logger.info("Rate limit exceeded", extra={"client_ip": ip, "path": request.url.path})
        raise RateLimitedError()

"""Admission control: one token bucket shared by every inbound request."""

import logging
import math
import threading
import time
from collections.abc import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from snippetbox.core.config import Settings

logger = logging.getLogger(__name__)


class AdmissionController:
    """Process-wide token bucket.

    Holds at most ``capacity`` tokens and refills ``rate`` tokens per second.
    Each admitted request consumes one token. The budget is shared by all
    callers and endpoints; it is not partitioned per client or identity.

    ``allow()`` is safe to call from any thread or task: the refill and the
    decrement happen under one lock, so concurrent callers can never be
    admitted beyond the tokens available.
    """

    def __init__(
        self,
        rate: float = 1.0,
        capacity: int = 5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rate <= 0:
            raise ValueError("rate must be positive")
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.rate = float(rate)
        self.capacity = capacity
        self._clock = clock
        self._tokens = float(capacity)
        self._last_update = clock()
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, config: Settings) -> "AdmissionController":
        return cls(rate=config.rate_limit_per_second, capacity=config.rate_limit_burst)

    def _refill(self, now: float) -> None:
        elapsed = max(0.0, now - self._last_update)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._last_update = now

    def allow(self) -> bool:
        """Admit one request if a token is available."""
        with self._lock:
            self._refill(self._clock())
            if self._tokens < 1.0:
                return False
            self._tokens -= 1.0
            return True

    def retry_after(self) -> int:
        """Whole seconds until the next token becomes available."""
        with self._lock:
            self._refill(self._clock())
            missing = 1.0 - self._tokens
        if missing <= 0:
            return 0
        return max(1, math.ceil(missing / self.rate))

    def get_stats(self) -> dict[str, float]:
        """Get current bucket state."""
        with self._lock:
            self._refill(self._clock())
            return {
                "capacity": self.capacity,
                "rate": self.rate,
                "tokens": round(self._tokens, 2),
            }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests with 429 once the shared admission budget is spent.

    Runs before authentication, so open and protected endpoints draw from
    the same budget.
    """

    def __init__(
        self,
        app: ASGIApp,
        controller: AdmissionController,
        exclude_paths: list[str] | None = None,
        enabled: bool = True,
    ) -> None:
        super().__init__(app)
        self.controller = controller
        self.exclude_paths = exclude_paths or []
        self.enabled = enabled

    def _is_excluded(self, path: str) -> bool:
        return any(path == p or path.startswith(p + "/") for p in self.exclude_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process request with admission control."""
        if not self.enabled or self._is_excluded(request.url.path):
            return await call_next(request)

        if not self.controller.allow():
            retry_after = self.controller.retry_after()
            client = request.client.host if request.client else "unknown"
            logger.warning(
                f"Admission rejected: {request.method} {request.url.path} from {client}",
                extra={"method": request.method, "path": request.url.path, "client": client},
            )
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "detail": "Too many requests. Please try again later.",
                    "retry_after": retry_after,
                },
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

"""
Rate Limiting

In-memory sliding-window limits per client IP, used as FastAPI dependencies.
State lives in the process; a multi-worker deployment limits per worker.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, List

from fastapi import Request, status

from config import ApplicationConfig
from underneath.api.error import ClientError
from underneath.result import Error

logger = logging.getLogger(__name__)

_limiters: List["RateLimiter"] = []


class RateLimiter:
    """
    Allow at most max_requests per client IP within window_seconds.

    Raises:
        ClientError: 429 RATE_LIMITED once the window is full
    """

    def __init__(
        self,
        name: str,
        max_requests: int,
        window_seconds: int,
        message: str,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self.clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        _limiters.append(self)

    async def __call__(self, request: Request) -> None:
        if not ApplicationConfig.RATE_LIMIT_ENABLED:
            return

        ip = request.client.host if request.client else "unknown"
        now = self.clock()

        hits = self._hits[ip]
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()

        if len(hits) >= self.max_requests:
            logger.warning(
                f"Rate limit '{self.name}' exceeded for IP {ip} "
                f"({self.max_requests}/{self.window_seconds}s)"
            )
            raise ClientError(
                Error("RATE_LIMITED", self.message),
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            )

        hits.append(now)

    def reset(self) -> None:
        self._hits.clear()


def reset_rate_limits() -> None:
    """Forget every recorded request"""
    for limiter in _limiters:
        limiter.reset()


api_limiter = RateLimiter(
    "api", 100, 15 * 60, "Too many requests, please try again later"
)
create_invitation_limiter = RateLimiter(
    "create_invitation", 5, 60 * 60, "Too many invitations, please try again later"
)
validate_code_limiter = RateLimiter(
    "validate_code", 10, 15 * 60, "Too many validation attempts, please wait a moment"
)
profile_limiter = RateLimiter(
    "profile", 50, 15 * 60, "Too many profile requests, please try again later"
)

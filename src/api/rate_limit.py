"""Per-IP fixed-window request throttling."""

import logging

from fastapi import HTTPException, Request, status
from limits import RateLimitItemPerMinute
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

from api.interceptors import RequestContext

logger = logging.getLogger(__name__)


class RateLimit:
    """Interceptor allowing ``limit`` requests per client IP every ``window_minutes``.

    Every request is counted, whatever its outcome. Counters live in process
    memory and are only touched from the event loop.
    """

    def __init__(self, name: str, limit: int, window_minutes: int, message: str):
        self.name = name
        self.item = RateLimitItemPerMinute(limit, window_minutes)
        self.message = message
        self._storage = MemoryStorage()
        self._limiter = FixedWindowRateLimiter(self._storage)

    async def __call__(self, request: Request, ctx: RequestContext) -> None:
        if not self._limiter.hit(self.item, self.name, ctx.client_ip):
            logger.warning("Rate limit exceeded", extra={"limiter": self.name, "clientIp": ctx.client_ip})
            raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=self.message)

    def reset(self) -> None:
        self._storage.reset()


auth_limiter = RateLimit(
    name="auth",
    limit=10,
    window_minutes=15,
    message="Too many requests, please try again after 15 minutes",
)

upload_limiter = RateLimit(
    name="upload",
    limit=5,
    window_minutes=15,
    message="Too many upload requests, please try again after 15 minutes",
)

from collections import deque
from datetime import datetime, timezone
from typing import Deque

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chatlens import __version__
from chatlens.core.config import get_settings
from chatlens.core.logging import configure_logging
from chatlens.routers import chats


class RateLimiter:
    """Sliding one-minute window per client key.

    Keys whose window has emptied are dropped, and idle keys are swept once per
    window, so memory tracks recently active clients only.
    """

    WINDOW_SECONDS = 60.0

    def __init__(self, limit_per_minute: int) -> None:
        self.limit_per_minute = limit_per_minute
        self._hits: dict[str, Deque[float]] = {}
        self._next_sweep = float("-inf")

    def _sweep(self, window_start: float) -> None:
        stale = [key for key, bucket in self._hits.items() if not bucket or bucket[-1] < window_start]
        for key in stale:
            del self._hits[key]
        self._next_sweep = window_start + self.WINDOW_SECONDS

    def hit(self, key: str, now: float | None = None) -> bool:
        if now is None:
            now = datetime.now(timezone.utc).timestamp()
        window_start = now - self.WINDOW_SECONDS
        if window_start >= self._next_sweep:
            self._sweep(window_start)
        bucket = self._hits.get(key)
        if bucket is None:
            bucket = deque()
        while bucket and bucket[0] < window_start:
            bucket.popleft()
        if len(bucket) >= self.limit_per_minute:
            self._hits[key] = bucket
            return False
        bucket.append(now)
        self._hits[key] = bucket
        return True

    def tracked_keys(self) -> int:
        return len(self._hits)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()
    app = FastAPI(title=settings.app_name, version=__version__, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    limiter = RateLimiter(settings.rate_limit_per_minute)

    @app.middleware("http")
    async def rate_limit_middleware(request: Request, call_next):
        key = request.client.host if request.client else "unknown"
        if not limiter.hit(key):
            return JSONResponse(status_code=status.HTTP_429_TOO_MANY_REQUESTS, content={"detail": "Rate limit exceeded"})
        return await call_next(request)

    app.include_router(chats.router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()

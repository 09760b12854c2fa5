import logging
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, Sequence

import redis.asyncio as redis
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration. Bodies are never logged."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response


class MemoryRateLimitBackend:
    """Sliding window per key in process memory, for a single worker"""

    def __init__(self):
        self._hits: Dict[str, Deque[float]] = {}
        self._last_sweep = 0.0

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, cutoff: float) -> None:
        # Drop clients whose newest hit left the window
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]

    async def hit(self, key: str, max_requests: int, window_seconds: int) -> bool:
        now = time.time()
        cutoff = now - window_seconds
        if now - self._last_sweep >= window_seconds:
            self._sweep(cutoff)
            self._last_sweep = now

        hits = self._hits.setdefault(key, deque())
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if len(hits) >= max_requests:
            return False
        hits.append(now)
        return True


class RedisRateLimitBackend:
    """Sliding window per key in a redis sorted set, shared by all workers"""

    def __init__(self, redis_url: str):
        self.redis = redis.Redis.from_url(redis_url)

    async def hit(self, key: str, max_requests: int, window_seconds: int) -> bool:
        now = time.time()
        window_start = now - window_seconds
        pipe = self.redis.pipeline()
        pipe.zremrangebyscore(key, 0, window_start)
        pipe.zcard(key)
        pipe.zadd(key, {str(now): now})
        pipe.expire(key, window_seconds)
        _, count, _, _ = await pipe.execute()
        return count < max_requests


def build_rate_limit_backend(config):
    backend = str(config.RATE_LIMIT_BACKEND).lower()
    if backend == "redis":
        return RedisRateLimitBackend(config.REDIS_URL)
    if backend == "memory":
        return MemoryRateLimitBackend()
    raise ValueError(f"Unknown RATE_LIMIT_BACKEND: {config.RATE_LIMIT_BACKEND}")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-IP request limit, one budget shared by every path under the given prefixes"""

    def __init__(
        self,
        app,
        backend,
        path_prefixes: Sequence[str],
        max_requests: int,
        window_seconds: int,
        key_prefix: Optional[str] = "rl",
    ) -> None:
        super().__init__(app)
        self.backend = backend
        self.path_prefixes = tuple(path_prefixes)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.key_prefix = key_prefix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if self.max_requests <= 0 or not path.startswith(self.path_prefixes):
            return await call_next(request)

        ip = request.client.host if request.client else "unknown"
        allowed = await self.backend.hit(
            f"{self.key_prefix}:{ip}", self.max_requests, self.window_seconds
        )
        if not allowed:
            logger.warning("Rate limit exceeded: ip=%s path=%s method=%s", ip, path, request.method)
            return JSONResponse(
                status_code=429,
                content={
                    "error": {
                        "code": "RATE_LIMITED",
                        "message": "Too many requests, please try again later",
                    }
                },
                headers={"Retry-After": str(self.window_seconds)},
            )
        return await call_next(request)

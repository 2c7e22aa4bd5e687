"""Per-client sliding-window rate limiting backed by Redis."""

import logging
import math
import time
import uuid
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from activity_forecast.config import (
    REDIS_URL,
    RATE_LIMIT_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
    RATE_LIMIT_REDIS_KEY_PREFIX
)

logger = logging.getLogger(__name__)


class RateLimiter:
    """Rate limiter using one Redis sorted set per client.

    Each request is recorded with its timestamp as score; entries older than
    the window are trimmed before counting. Allows requests if Redis is
    unavailable.
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        max_requests: int = RATE_LIMIT_REQUESTS,
        window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
        key_prefix: str = RATE_LIMIT_REDIS_KEY_PREFIX
    ):
        """Initialize rate limiter.

        Args:
            redis_client: Optional Redis client. If None, creates new client.
            max_requests: Requests allowed per client within the window
            window_seconds: Length of the sliding window
            key_prefix: Prefix for the per-client Redis keys
        """
        self.redis_client = redis_client or redis.from_url(REDIS_URL)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.key_prefix = key_prefix

    def _key(self, client_id: str) -> str:
        return f"{self.key_prefix}:{client_id}"

    async def is_allowed(self, client_id: str = "global") -> tuple[bool, int]:
        """Check if a request from a client is allowed under the rate limit.

        Args:
            client_id: Identifier of the caller, usually the client host

        Returns:
            Tuple of (is_allowed, retry_after_seconds)
            - is_allowed: True if request should be allowed
            - retry_after_seconds: Seconds to wait before retrying (0 if allowed)
        """
        key = self._key(client_id)
        now = time.time()
        window_start = now - self.window_seconds

        try:
            pipe = self.redis_client.pipeline()
            pipe.zremrangebyscore(key, 0, window_start)
            # Unique member so simultaneous requests are all counted
            pipe.zadd(key, {f"{now}:{uuid.uuid4().hex}": now})
            pipe.zcard(key)
            pipe.expire(key, max(1, math.ceil(self.window_seconds * 2)))

            _, _, request_count, _ = await pipe.execute()

        except RedisError as e:
            logger.error(f"Rate limiter error: {e}")
            return True, 0

        if request_count > self.max_requests:
            retry_after = max(1, math.ceil(self.window_seconds))
            logger.debug(f"Rate limited {client_id}: count={request_count}, max={self.max_requests}")
            return False, retry_after

        logger.debug(f"Not rate limited {client_id}: count={request_count}, max={self.max_requests}")
        return True, 0

    async def close(self):
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()

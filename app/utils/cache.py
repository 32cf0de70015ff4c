"""
Cache backends for weather lookups.

Two interchangeable backends implement the same small interface:
an in-process TTL cache that keeps the stored objects, and a Redis
cache that stores the JSON form of the response envelope.
"""

import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Dict, Optional, Protocol, Type

import redis.asyncio as redis
from pydantic import BaseModel, ValidationError
from redis.exceptions import RedisError

from app.config import Settings
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

MEMORY_KEY_PREFIX = "weather_"
REDIS_KEY_PREFIX = "weather_redis_"


class CacheBackend(Protocol):
    """Storage used by the cache-aside weather service."""

    key_prefix: str
    ttl: timedelta

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value or None on a miss."""
        ...

    async def set(self, key: str, value: Any, ttl: timedelta) -> None:
        """Store a value with an absolute expiration ``ttl`` from now."""
        ...


@dataclass
class CacheEntry:
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class MemoryCacheBackend:
    """
    In-process cache.

    Values are stored and returned as the same object references.
    Expired entries are dropped when they are read.
    """

    key_prefix = MEMORY_KEY_PREFIX

    def __init__(self, ttl: timedelta, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            logger.debug(f"Cache MISS: {key}")
            return None
        if entry.is_expired(self._clock()):
            logger.debug(f"Cache EXPIRED: {key}")
            self._store.pop(key, None)
            return None
        logger.debug(f"Cache HIT: {key}")
        return entry.value

    async def set(self, key: str, value: Any, ttl: timedelta) -> None:
        self._store[key] = CacheEntry(value=value, expires_at=self._clock() + ttl.total_seconds())
        logger.debug(f"Cache SET: {key} (TTL: {int(ttl.total_seconds())}s)")

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


class RedisCacheBackend:
    """
    Redis cache.

    Values are pydantic models serialized to JSON; reads deserialize into
    ``model``. Redis errors are logged and treated as a miss (on read) or
    ignored (on write) so that lookups fall through to the source.
    """

    key_prefix = REDIS_KEY_PREFIX

    def __init__(self, client: redis.Redis, model: Type[BaseModel], ttl: timedelta):
        self.client = client
        self.model = model
        self.ttl = ttl

    async def get(self, key: str) -> Optional[BaseModel]:
        try:
            raw = await self.client.get(key)
        except RedisError as e:
            logger.error(f"Cache GET error for key '{key}': {e}")
            return None

        if not raw:
            logger.debug(f"Cache MISS: {key}")
            return None

        try:
            value = self.model.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Cache DECODE error for key '{key}': {e}")
            return None
        logger.debug(f"Cache HIT: {key}")
        return value

    async def set(self, key: str, value: BaseModel, ttl: timedelta) -> None:
        payload = value.model_dump_json(by_alias=True)
        try:
            await self.client.setex(key, int(ttl.total_seconds()), payload)
            logger.debug(f"Cache SET: {key} (TTL: {int(ttl.total_seconds())}s)")
        except RedisError as e:
            logger.error(f"Cache SET error for key '{key}': {e}")


def create_redis_client(settings: Settings) -> redis.Redis:
    """Create the async Redis client for the configured server."""
    return redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )


def build_cache_backend(
    settings: Settings,
    model: Type[BaseModel],
    redis_client: Optional[redis.Redis] = None,
) -> CacheBackend:
    """
    Select the cache backend named by ``CACHE_PROVIDER``.

    Args:
        settings: Application settings
        model: Type of the cached values (needed to decode Redis payloads)
        redis_client: Client to use for the Redis backend; created when omitted

    Returns:
        The configured backend, carrying its own TTL
    """
    if settings.CACHE_PROVIDER == "redis":
        client = redis_client or create_redis_client(settings)
        logger.info(f"Weather cache: redis {settings.REDIS_HOST}:{settings.REDIS_PORT}")
        return RedisCacheBackend(
            client, model, timedelta(minutes=settings.REDIS_CACHE_TTL_MINUTES)
        )

    logger.info("Weather cache: in-process memory")
    return MemoryCacheBackend(timedelta(minutes=settings.WEATHER_CACHE_TTL_MINUTES))

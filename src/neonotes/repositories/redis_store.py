"""
Redis Store

Key-value store backed by Redis via the asyncio client. Records are plain
string values; an optional prefix namespaces keys on a shared instance.
"""

import logging

import redis.asyncio as redis

from neonotes.repositories.base import KeyValueStore

logger = logging.getLogger(__name__)


class RedisStore(KeyValueStore):
    """
    Key-value store on a Redis server.

    Args:
        url: Redis connection URL (ignored when ``client`` is given).
        prefix: Prepended to every key, e.g. ``"tenant-a:"``.
        client: Pre-built client, mainly for tests.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        prefix: str = "",
        client: redis.Redis | None = None,
    ) -> None:
        self._prefix = prefix
        self._client = client or redis.from_url(url, decode_responses=True)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> str | None:
        value = await self._client.get(self._key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self._client.set(self._key(key), value)

    async def delete(self, key: str) -> None:
        await self._client.delete(self._key(key))

    async def ping(self) -> bool:
        """Verify Redis connectivity without raising."""
        try:
            await self._client.ping()
            return True
        except redis.RedisError as e:
            logger.error("Redis connection error: %s", e)
            return False

    async def close(self) -> None:
        await self._client.aclose()

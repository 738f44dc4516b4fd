"""Repositories package - Persisted Store backends."""

from neonotes.core.config import Settings
from neonotes.repositories.base import KeyValueStore
from neonotes.repositories.memory import MemoryStore
from neonotes.repositories.redis_store import RedisStore
from neonotes.repositories.sql import SqlStore


def create_store(settings: Settings) -> KeyValueStore:
    """Build the store backend named by ``settings.STORE_BACKEND``."""
    backend = settings.STORE_BACKEND.lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "redis":
        return RedisStore(settings.REDIS_URL, prefix=settings.STORE_KEY_PREFIX)
    if backend == "sql":
        from neonotes.core.database import get_engine

        engine = get_engine(settings.DATABASE_URL)
        return SqlStore(engine, prefix=settings.STORE_KEY_PREFIX)
    raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND!r}")


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "RedisStore",
    "SqlStore",
    "create_store",
]

"""
Base Repository

Abstract key-value store behind the storage gateway. Every backend keeps
serialized text records under string keys with last-write-wins semantics;
no backend offers transactions across keys.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """
    Async key-value store of serialized records.

    Backends must treat ``delete`` of an absent key as a no-op and make
    ``close`` safe to call more than once.

    Usage:
        class MyStore(KeyValueStore):
            async def get(self, key): ...
    """

    async def open(self) -> None:
        """Prepare the backend (connections, tables). No-op by default."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the raw record stored under ``key``, or None if absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Overwrite the record stored under ``key``."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the record stored under ``key`` if present."""

    async def ping(self) -> bool:
        """Check backend reachability."""
        return True

    async def close(self) -> None:
        """Release backend resources. No-op by default."""

"""
In-Memory Store

Dict-backed store private to one process. Used in tests and when no
durable backend is configured.
"""

from neonotes.repositories.base import KeyValueStore


class MemoryStore(KeyValueStore):
    """Key-value store held in a plain dict."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._records: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._records.get(key)

    async def set(self, key: str, value: str) -> None:
        self._records[key] = value

    async def delete(self, key: str) -> None:
        self._records.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._records)

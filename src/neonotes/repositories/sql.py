"""
SQL Store

Key-value store on PostgreSQL through async SQLAlchemy and asyncpg.
Each record is one row of ``kv_records``; ``set`` is a single
``INSERT ... ON CONFLICT DO UPDATE`` so concurrent first writes of a key
cannot collide.
"""

import logging

from sqlalchemy import delete, text
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlalchemy.sql import func

from neonotes.models import Base, KeyValueRecord
from neonotes.repositories.base import KeyValueStore

logger = logging.getLogger(__name__)


class SqlStore(KeyValueStore):
    """
    Key-value store on the ``kv_records`` table.

    Each operation opens its own session and commits before returning,
    so every write is durable on return.
    """

    def __init__(self, engine: AsyncEngine, prefix: str = "") -> None:
        self._engine = engine
        self._prefix = prefix
        self._sessions = async_sessionmaker(engine, expire_on_commit=False)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def open(self) -> None:
        """Create the record table if it does not exist yet."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("kv_records table ready")

    async def get(self, key: str) -> str | None:
        async with self._sessions() as session:
            record = await session.get(KeyValueRecord, self._key(key))
            return record.value if record is not None else None

    async def set(self, key: str, value: str) -> None:
        stmt = insert(KeyValueRecord).values(key=self._key(key), value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=[KeyValueRecord.key],
            set_={"value": stmt.excluded.value, "updated_at": func.now()},
        )
        async with self._sessions() as session:
            await session.execute(stmt)
            await session.commit()

    async def delete(self, key: str) -> None:
        async with self._sessions() as session:
            await session.execute(
                delete(KeyValueRecord).where(KeyValueRecord.key == self._key(key))
            )
            await session.commit()

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database connection error: %s", e)
            return False

    async def close(self) -> None:
        await self._engine.dispose()

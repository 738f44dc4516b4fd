"""
Database Configuration

Async SQLAlchemy 2.0 engine for the ``sql`` store backend. Uses asyncpg
as the PostgreSQL driver for non-blocking I/O.

The engine is created on first use, not at import, so the memory and
redis backends never touch a database. Sessions and disposal belong to
the SqlStore that receives the engine.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from neonotes.core.config import settings

logger = logging.getLogger(__name__)

# Module-level singleton (lazy)
_engine: AsyncEngine | None = None


def get_engine(url: str | None = None) -> AsyncEngine:
    """Get or create the async SQLAlchemy engine (singleton)."""
    global _engine  # noqa: PLW0603
    if _engine is None:
        _engine = create_async_engine(url or settings.DATABASE_URL, echo=False)
        logger.info("Database engine created: %s", _engine.url.render_as_string())
    return _engine

"""
SQLAlchemy Declarative Base

Metadata for the tables of the ``sql`` store backend. ``SqlStore.open``
creates them with ``Base.metadata.create_all``; there are no migrations.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Deterministic constraint names, so a table created by create_all matches
# one created by hand from the same definitions.
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "ix": "ix_%(table_name)s_%(column_0_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for the store's tables."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

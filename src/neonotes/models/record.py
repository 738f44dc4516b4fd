"""
Key-Value Record Model

One row per persisted record (note collection, current user, liked ids).
The value column holds the serialized JSON text exactly as the other
store backends keep it; decoding happens in the storage gateway.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from neonotes.models.base import Base


class KeyValueRecord(Base):
    """
    Persisted key-value record.

    Attributes:
        key: Record key, e.g. ``neonotes_data``.
        value: Serialized record body.
        updated_at: Time of the last write. The upsert in SqlStore sets it
            explicitly, since ON CONFLICT updates skip ``onupdate``.
    """

    __tablename__ = "kv_records"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<KeyValueRecord(key='{self.key}', size={len(self.value)})>"

"""Models package - re-exports all models for convenient imports."""

from neonotes.models.base import Base
from neonotes.models.record import KeyValueRecord

__all__ = [
    "Base",
    "KeyValueRecord",
]

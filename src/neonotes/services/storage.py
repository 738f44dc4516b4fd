"""
Storage Gateway

Sole mediator between the application and the Persisted Store. Exposes
read/replace operations for the three records (note collection, current
user, liked ids) plus the compound read-transform-write operations.

Design:
    - The store handle is injected; there is no ambient global store.
    - Undecodable or missing records resolve to documented defaults
      (sample notes, no user, no likes) and are never raised.
    - Compound operations read one snapshot, compute the new values and
      persist them before returning; callers never see intermediate state.
"""

from __future__ import annotations

import json
import logging
from typing import Final, NamedTuple

from pydantic import TypeAdapter, ValidationError

from neonotes.core.exceptions import InvalidCredentials
from neonotes.repositories.base import KeyValueStore
from neonotes.schemas.notes import Note, User
from neonotes.services.seed import CREDENTIALS, sample_notes

logger = logging.getLogger(__name__)

NOTES_KEY: Final = "neonotes_data"
USER_KEY: Final = "neonotes_user"
LIKED_KEY: Final = "neonotes_liked_ids"

_notes_adapter = TypeAdapter(list[Note])
_liked_adapter = TypeAdapter(list[str])


class LikeToggle(NamedTuple):
    """Both records rewritten by ``toggle_like``."""

    notes: list[Note]
    liked_ids: list[str]


class StorageGateway:
    """
    Read/transform/write operations over a KeyValueStore.

    Usage::

        gateway = StorageGateway(MemoryStore())
        await gateway.initialize()
        notes, liked = await gateway.toggle_like("n1")
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Seed missing records. Idempotent.

        Writes the sample collection if no note collection exists and an
        empty liked-id list if none exists. The current-user record is
        never created here, so a fresh store starts signed out.
        """
        await self._store.open()
        if await self._store.get(NOTES_KEY) is None:
            await self._write_notes(sample_notes())
            logger.info("Seeded note collection with sample notes")
        if await self._store.get(LIKED_KEY) is None:
            await self._write_liked([])

    async def close(self) -> None:
        await self._store.close()

    # ------------------------------------------------------------------
    # Note collection
    # ------------------------------------------------------------------

    async def get_notes(self) -> list[Note]:
        """
        Return the stored collection, or the sample set if absent/unparsable.

        Notes are decoded one by one: an invalid entry is logged and left
        out while the rest of the collection is kept.
        """
        raw = await self._store.get(NOTES_KEY)
        if raw is None:
            return sample_notes()
        try:
            items = json.loads(raw)
        except ValueError:
            logger.warning("Stored note collection is not JSON, using samples")
            return sample_notes()
        if not isinstance(items, list):
            logger.warning("Stored note collection is not a list, using samples")
            return sample_notes()

        notes = []
        for item in items:
            try:
                notes.append(Note.model_validate(item))
            except ValidationError as e:
                note_id = item.get("id") if isinstance(item, dict) else None
                logger.warning(
                    "Skipping unreadable stored note %r (%d errors)",
                    note_id,
                    e.error_count(),
                )
        return notes

    async def replace_notes(self, notes: list[Note]) -> None:
        """Overwrite the stored collection. Contents are not validated."""
        await self._write_notes(notes)

    async def add_note(self, note: Note) -> list[Note]:
        """Prepend ``note`` and return the updated collection."""
        notes = [note, *await self.get_notes()]
        await self._write_notes(notes)
        logger.info("Added note %s (%s)", note.id, note.title)
        return notes

    async def update_note(self, note: Note) -> list[Note]:
        """
        Replace the stored note with the same id.

        An id with no stored match leaves the collection unchanged.
        """
        current = await self.get_notes()
        notes = [note if n.id == note.id else n for n in current]
        if not any(n.id == note.id for n in current):
            logger.debug("update_note: no stored note with id %s", note.id)
        await self._write_notes(notes)
        return notes

    async def increment_download(self, note_id: str) -> list[Note]:
        """Add one to the matching note's download counter."""
        notes = [
            n.model_copy(update={"downloads": n.downloads + 1})
            if n.id == note_id
            else n
            for n in await self.get_notes()
        ]
        await self._write_notes(notes)
        return notes

    # ------------------------------------------------------------------
    # Current user
    # ------------------------------------------------------------------

    async def get_current_user(self) -> User | None:
        raw = await self._store.get(USER_KEY)
        if raw is None:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError:
            logger.warning("Stored current user is unreadable, treating as signed out")
            return None

    async def authenticate(self, email: str, password: str) -> User:
        """
        Sign in with one of the two built-in demo identities.

        Raises:
            InvalidCredentials: No pair matches; nothing is written.
        """
        expected = CREDENTIALS.get(email)
        if expected is None or expected[0] != password:
            logger.info("Rejected sign-in for %s", email)
            raise InvalidCredentials()

        user = expected[1]
        await self._store.set(USER_KEY, user.model_dump_json(by_alias=True))
        logger.info("Signed in %s (%s)", user.email, user.role)
        return user

    async def sign_out(self) -> None:
        """Remove the current-user record. Idempotent."""
        await self._store.delete(USER_KEY)

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    async def get_liked_ids(self) -> list[str]:
        """Return liked note ids (set semantics), empty if absent/unreadable."""
        raw = await self._store.get(LIKED_KEY)
        if raw is None:
            return []
        try:
            ids = _liked_adapter.validate_json(raw)
        except ValidationError:
            logger.warning("Stored liked ids are unreadable, treating as empty")
            return []
        return list(dict.fromkeys(ids))

    async def toggle_like(self, note_id: str) -> LikeToggle:
        """
        Flip the like state of ``note_id`` and move its counter in step.

        Liking adds one; unliking subtracts one, floored at zero. An id with
        no stored note still flips in the liked-id set while the collection
        stays unchanged.
        """
        liked_ids = await self.get_liked_ids()
        current = await self.get_notes()
        was_liked = note_id in liked_ids

        if was_liked:
            new_liked = [i for i in liked_ids if i != note_id]
        else:
            new_liked = [*liked_ids, note_id]

        delta = -1 if was_liked else 1
        notes = [
            n.model_copy(update={"likes": max(0, n.likes + delta)})
            if n.id == note_id
            else n
            for n in current
        ]
        if not any(n.id == note_id for n in current):
            logger.warning(
                "toggle_like: note %s not in collection, likes unchanged", note_id
            )

        await self._write_liked(new_liked)
        await self._write_notes(notes)
        logger.debug("%s note %s", "Unliked" if was_liked else "Liked", note_id)
        return LikeToggle(notes=notes, liked_ids=new_liked)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    async def _write_notes(self, notes: list[Note]) -> None:
        payload = _notes_adapter.dump_json(notes, by_alias=True, exclude_none=True)
        await self._store.set(NOTES_KEY, payload.decode("utf-8"))

    async def _write_liked(self, liked_ids: list[str]) -> None:
        payload = _liked_adapter.dump_json(liked_ids)
        await self._store.set(LIKED_KEY, payload.decode("utf-8"))

"""
Application State

In-memory copies of the three persisted records, kept in step with the
storage gateway. Every mutation goes through the gateway first and the
cache is then replaced with the gateway's returned value; the cache is
never edited on its own.
"""

from __future__ import annotations

import logging

from neonotes.core.exceptions import NoteNotFound, NotSignedIn
from neonotes.schemas.notes import Attachment, Note, NoteDownload, NoteDraft, User
from neonotes.services.notes import (
    build_comment,
    build_note,
    download_payload,
    with_comment,
)
from neonotes.services.storage import LikeToggle, StorageGateway

logger = logging.getLogger(__name__)


class AppState:
    """
    Cache-and-refresh holder over a StorageGateway.

    Usage::

        state = AppState(StorageGateway(store))
        await state.start()
        await state.login("alex@example.com", "student")
        await state.toggle_like("n1")
        state.is_liked("n1")  # True
    """

    def __init__(self, gateway: StorageGateway) -> None:
        self.gateway = gateway
        self.notes: list[Note] = []
        self.current_user: User | None = None
        self.liked_ids: list[str] = []

    async def start(self) -> None:
        """Seed missing records, then load all three into memory."""
        await self.gateway.initialize()
        await self.refresh()
        logger.info(
            "State loaded: %d notes, %d liked, user=%s",
            len(self.notes),
            len(self.liked_ids),
            self.current_user.email if self.current_user else None,
        )

    async def refresh(self) -> None:
        self.notes = await self.gateway.get_notes()
        self.current_user = await self.gateway.get_current_user()
        self.liked_ids = await self.gateway.get_liked_ids()

    async def stop(self) -> None:
        await self.gateway.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_note(self, note_id: str) -> Note:
        """Raises NoteNotFound when no cached note has ``note_id``."""
        for note in self.notes:
            if note.id == note_id:
                return note
        raise NoteNotFound(note_id)

    def is_liked(self, note_id: str) -> bool:
        return note_id in self.liked_ids

    def require_user(self) -> User:
        if self.current_user is None:
            raise NotSignedIn()
        return self.current_user

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_note(self, note: Note) -> Note:
        self.notes = await self.gateway.add_note(note)
        return note

    async def upload(
        self, draft: NoteDraft, attachment: Attachment | None = None
    ) -> Note:
        """Create a note authored by the current user and store it."""
        note = build_note(draft, self.require_user(), attachment)
        return await self.add_note(note)

    async def update_note(self, note: Note) -> list[Note]:
        self.notes = await self.gateway.update_note(note)
        return self.notes

    async def toggle_like(self, note_id: str) -> LikeToggle:
        result = await self.gateway.toggle_like(note_id)
        self.notes = result.notes
        self.liked_ids = result.liked_ids
        return result

    async def download(self, note_id: str) -> NoteDownload:
        """
        Return the file of ``note_id`` and count the download.

        The payload is fully built before the counter moves, so a note that
        cannot be served is never counted.
        """
        payload = download_payload(self.get_note(note_id))
        self.notes = await self.gateway.increment_download(note_id)
        return payload

    async def post_comment(self, note_id: str, text: str) -> Note:
        """
        Prepend a comment by the current user to ``note_id``.

        Raises:
            NotSignedIn: No current user.
            NoteNotFound: Unknown note.
            ValueError: Blank comment text. Non-blank text is stored as
                given, surrounding whitespace included.
        """
        user = self.require_user()
        if not text.strip():
            raise ValueError("Comment text is empty")
        note = with_comment(self.get_note(note_id), build_comment(user, text))
        await self.update_note(note)
        return note

    async def login(self, email: str, password: str) -> User:
        """Raises InvalidCredentials; the cached user is left unchanged then."""
        self.current_user = await self.gateway.authenticate(email, password)
        return self.current_user

    async def logout(self) -> None:
        await self.gateway.sign_out()
        self.current_user = None

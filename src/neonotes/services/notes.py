"""
Note Builders

Construct new notes and comments from user input, and turn a stored note
into a downloadable file. Pure functions: nothing here touches the store.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from datetime import UTC, datetime
from typing import Final
from urllib.parse import quote

from neonotes.schemas.notes import (
    Attachment,
    Comment,
    Note,
    NoteDownload,
    NoteDraft,
    User,
)

logger = logging.getLogger(__name__)

ATTACHMENT_ONLY_CONTENT: Final = (
    "This note contains a file attachment. The text content was not extracted."
)
THUMBNAIL_URL: Final = "https://picsum.photos/seed/{note_id}/400/250"

_HEADER_UNSAFE = re.compile(r'[^\x20-\x7e]|["\\]')
_MEDIA_TYPE = re.compile(r"[\w.+-]+/[\w.+-]+", re.ASCII)


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(UTC)


def _millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def build_note(
    draft: NoteDraft,
    author: User,
    attachment: Attachment | None = None,
    now: datetime | None = None,
) -> Note:
    """
    Create a new note authored by ``author``.

    The id is derived from the creation time (``n<epoch millis>``), counters
    start at zero and the comment list is empty. A blank ``content`` is
    replaced by a placeholder so the AI tutor still has context.
    """
    moment = _now(now)
    note_id = f"n{_millis(moment)}"
    return Note(
        id=note_id,
        title=draft.title,
        description=draft.description,
        content=draft.content.strip() or ATTACHMENT_ONLY_CONTENT,
        course=draft.course,
        year=draft.year,
        subject=draft.subject,
        tags=list(draft.tags),
        thumbnail=THUMBNAIL_URL.format(note_id=note_id),
        author=author.model_copy(),
        downloads=0,
        likes=0,
        is_premium=draft.is_premium,
        price=draft.price if draft.is_premium else None,
        created_at=moment.date().isoformat(),
        comments=[],
        file_data=attachment.file_data if attachment else None,
        file_name=attachment.file_name if attachment else None,
        mime_type=attachment.mime_type if attachment else None,
    )


def build_comment(user: User, text: str, now: datetime | None = None) -> Comment:
    """Comment carrying a snapshot of ``user``'s id, name and avatar."""
    moment = _now(now)
    return Comment(
        id=f"c{_millis(moment)}",
        user_id=user.id,
        user_name=user.name,
        user_avatar=user.avatar,
        content=text,
        created_at=moment.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )


def with_comment(note: Note, comment: Comment) -> Note:
    """Copy of ``note`` with ``comment`` first in its comment list."""
    return note.model_copy(update={"comments": [comment, *note.comments]})


def merge_tags(existing: list[str], suggested: list[str]) -> list[str]:
    """Union of both tag lists, first occurrence wins."""
    return list(dict.fromkeys([*existing, *suggested]))


def encode_attachment(raw: bytes, file_name: str, mime_type: str | None) -> Attachment:
    """Encode uploaded bytes as a base64 data URI."""
    media_type = mime_type or "application/octet-stream"
    encoded = base64.b64encode(raw).decode("ascii")
    return Attachment(
        file_data=f"data:{media_type};base64,{encoded}",
        file_name=file_name,
        mime_type=media_type,
    )


def _slug(title: str) -> str:
    return "_".join(title.split())


def content_disposition(file_name: str) -> str:
    """
    ``Content-Disposition`` value for ``file_name`` (RFC 6266).

    Header values must be Latin-1, so the plain ``filename`` carries an
    ASCII stand-in and ``filename*`` the UTF-8 original.
    """
    fallback = _HEADER_UNSAFE.sub("_", file_name) or "download"
    encoded = quote(file_name, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


def _download(file_name: str, mime_type: str, data: bytes) -> NoteDownload:
    if not _MEDIA_TYPE.fullmatch(mime_type):
        mime_type = "application/octet-stream"
    return NoteDownload(
        file_name=file_name,
        mime_type=mime_type,
        content_disposition=content_disposition(file_name),
        data=data,
    )


def download_payload(note: Note) -> NoteDownload:
    """
    File delivered when ``note`` is downloaded.

    Notes with an attachment yield the decoded file; notes without one
    (or with an undecodable one) yield their text content as a .txt file.
    The result is ready to send: its headers are already ASCII-safe.
    """
    if note.file_data:
        try:
            header, _, encoded = note.file_data.partition(",")
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Attachment of note %s is not valid base64", note.id)
        else:
            return _download(
                note.file_name or f"{_slug(note.title)}.pdf",
                note.mime_type or _data_uri_media_type(header),
                data,
            )

    return _download(
        f"{_slug(note.title)}.txt",
        "text/plain",
        note.content.encode("utf-8"),
    )


def _data_uri_media_type(header: str) -> str:
    # "data:application/pdf;base64"
    media_type = header.removeprefix("data:").split(";", 1)[0]
    return media_type or "application/octet-stream"

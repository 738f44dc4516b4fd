"""
Notes API Router

Browse, upload, like, download and comment endpoints. Every mutation is
routed through the application state holder, which in turn writes through
the storage gateway before its cache changes.
"""

import logging

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Response,
    UploadFile,
    status,
)
from pydantic import ValidationError

from neonotes.api.deps import get_current_user, get_state
from neonotes.core.exceptions import NoteNotFound
from neonotes.schemas.notes import CommentCreate, LikeResponse, Note, NoteDraft, User
from neonotes.services import catalog
from neonotes.services.notes import encode_attachment
from neonotes.services.state import AppState

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(e: NoteNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/", response_model=list[Note])
async def list_notes(
    q: str = "",
    subject: str | None = None,
    author: str | None = None,
    state: AppState = Depends(get_state),
):
    """Browse notes, optionally filtered by search term, subject and author id."""
    return catalog.search_notes(state.notes, term=q, subject=subject, author_id=author)


@router.get("/recent", response_model=list[Note])
async def recent(limit: int = 4, state: AppState = Depends(get_state)):
    return catalog.recent_notes(state.notes, limit)


@router.get("/popular", response_model=list[Note])
async def popular(limit: int = 4, state: AppState = Depends(get_state)):
    return catalog.popular_notes(state.notes, limit)


@router.get("/subjects", response_model=list[str])
async def subjects(state: AppState = Depends(get_state)):
    return catalog.list_subjects(state.notes)


@router.get("/liked", response_model=list[str])
async def liked_ids(state: AppState = Depends(get_state)):
    """Ids of the notes the local user has liked."""
    return state.liked_ids


@router.get("/{note_id}", response_model=Note)
async def read_note(note_id: str, state: AppState = Depends(get_state)):
    try:
        return state.get_note(note_id)
    except NoteNotFound as e:
        raise _not_found(e) from e


@router.post("/", response_model=Note, status_code=status.HTTP_201_CREATED)
async def upload_note(
    title: str = Form(...),
    description: str = Form(""),
    content: str = Form(""),
    course: str = Form(""),
    year: str = Form(""),
    subject: str = Form(""),
    tags: list[str] = Form([]),
    is_premium: bool = Form(False),
    price: float | None = Form(None),
    file: UploadFile | None = File(None),
    _: User = Depends(get_current_user),
    state: AppState = Depends(get_state),
):
    """
    Upload a new note authored by the signed-in user.

    The optional file is stored inline as a base64 data URI. The new note
    becomes the first entry of the collection.
    """
    try:
        draft = NoteDraft(
            title=title,
            description=description,
            content=content,
            course=course,
            year=year,
            subject=subject,
            tags=tags,
            is_premium=is_premium,
            price=price,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        ) from e

    attachment = None
    if file is not None and file.filename:
        raw = await file.read()
        attachment = encode_attachment(raw, file.filename, file.content_type)
        logger.info("Encoded attachment '%s' (%d bytes)", file.filename, len(raw))

    return await state.upload(draft, attachment)


@router.put("/{note_id}", response_model=list[Note])
async def update_note(note_id: str, note: Note, state: AppState = Depends(get_state)):
    """Replace a stored note. An unknown id leaves the collection unchanged."""
    if note.id != note_id:
        raise HTTPException(
            status_code=422,
            detail="Path id does not match note id",
        )
    if note.missing_price:
        raise HTTPException(status_code=422, detail="Premium notes require a price")
    return await state.update_note(note)


@router.post("/{note_id}/like", response_model=LikeResponse)
async def toggle_like(note_id: str, state: AppState = Depends(get_state)):
    """Like the note, or unlike it if already liked."""
    result = await state.toggle_like(note_id)
    return LikeResponse(notes=result.notes, liked_ids=result.liked_ids)


@router.post("/{note_id}/download")
async def download_note(note_id: str, state: AppState = Depends(get_state)) -> Response:
    """Return the note's file (or its text content) and count the download."""
    try:
        payload = await state.download(note_id)
    except NoteNotFound as e:
        raise _not_found(e) from e

    return Response(
        content=payload.data,
        media_type=payload.mime_type,
        headers={"Content-Disposition": payload.content_disposition},
    )


@router.post(
    "/{note_id}/comments", response_model=Note, status_code=status.HTTP_201_CREATED
)
async def post_comment(
    note_id: str,
    comment: CommentCreate,
    _: User = Depends(get_current_user),
    state: AppState = Depends(get_state),
):
    """Add a comment by the signed-in user; it becomes the note's newest comment."""
    try:
        return await state.post_comment(note_id, comment.content)
    except NoteNotFound as e:
        raise _not_found(e) from e
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

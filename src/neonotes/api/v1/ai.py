"""
AI API Router

Summaries, tag suggestions and the note tutor chat. Every endpoint returns
200: when Gemini is unreachable or not configured the body carries the
collaborator's fallback text, or the entered tags unchanged.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from neonotes.api.deps import get_ai, get_state
from neonotes.core.exceptions import NoteNotFound
from neonotes.schemas.ai import (
    AIStatus,
    ChatRequest,
    ChatResponse,
    SummarizeRequest,
    SummaryResponse,
    TagRequest,
    TagResponse,
)
from neonotes.services.ai import AICollaborator
from neonotes.services.notes import merge_tags
from neonotes.services.state import AppState

router = APIRouter()


@router.get("/status", response_model=AIStatus)
async def ai_status(ai: AICollaborator = Depends(get_ai)):
    return AIStatus(configured=ai.is_configured, model=ai.model)


@router.post("/summarize", response_model=SummaryResponse)
async def summarize(request: SummarizeRequest, ai: AICollaborator = Depends(get_ai)):
    return SummaryResponse(summary=await ai.summarize(request.text))


@router.post("/tags", response_model=TagResponse)
async def suggest_tags(request: TagRequest, ai: AICollaborator = Depends(get_ai)):
    """Entered tags followed by new AI suggestions, without duplicates."""
    suggested = await ai.suggest_tags(request.title, request.description)
    return TagResponse(tags=merge_tags(request.tags, suggested))


@router.post("/notes/{note_id}/chat", response_model=ChatResponse)
async def chat_with_note(
    note_id: str,
    request: ChatRequest,
    state: AppState = Depends(get_state),
    ai: AICollaborator = Depends(get_ai),
):
    """Ask the tutor about a note, grounded on that note's text content."""
    try:
        note = state.get_note(note_id)
    except NoteNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    answer = await ai.chat(note.content, request.history, request.question)
    return ChatResponse(answer=answer)

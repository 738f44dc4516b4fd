"""
AI Schemas

Request/response bodies for the AI collaborator endpoints.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    """One prior exchange in a note chat ("model" is the assistant side)."""

    role: Literal["user", "model"]
    text: str


class SummarizeRequest(BaseModel):
    text: str = Field(..., min_length=1)


class SummaryResponse(BaseModel):
    summary: str


class TagRequest(BaseModel):
    """Note fields to tag, plus the tags the user already entered."""

    title: str = Field(..., min_length=1)
    description: str = ""
    tags: list[str] = Field(default_factory=list)


class TagResponse(BaseModel):
    tags: list[str] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Question about a note, with the conversation so far."""

    question: str = Field(..., min_length=1, max_length=2000)
    history: list[ChatTurn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    answer: str


class AIStatus(BaseModel):
    configured: bool
    model: str

"""
AI Service

Google Gemini integration for note summaries, tag suggestions and the
note-grounded tutor chat.

Design:
    - Async HTTP calls via httpx against the generateContent REST API.
    - Graceful degradation: a missing API key, transport error, error
      status or malformed response yields a fixed fallback string or an
      empty list. Nothing is raised to the caller.
    - No retry, no cancellation; the timeout comes from settings.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Final

import httpx

from neonotes.core.config import settings
from neonotes.schemas.ai import ChatTurn

logger = logging.getLogger(__name__)

NOT_CONFIGURED: Final = "API Key not configured."
SUMMARY_FAILED: Final = "Error generating summary. Please try again."
SUMMARY_EMPTY: Final = "Could not generate summary."
CHAT_FAILED: Final = "Sorry, I'm having trouble connecting to the AI tutor right now."
CHAT_EMPTY: Final = "I couldn't generate an answer."

SUMMARY_PROMPT: Final = (
    "Summarize the following study note into 3-4 concise, easy-to-read bullet "
    "points. Use markdown formatting. \n\nContent:\n{content}"
)

TAGS_PROMPT: Final = (
    "Generate 5 relevant, single-word or two-word tags for a study note with the "
    'title "{title}" and description "{description}". Return JSON only.'
)

TUTOR_PROMPT: Final = """You are a helpful AI tutor. Use the following note content as your primary source of truth.

Note Content:
{content}

Student Question: {question}

Answer thoroughly but concisely."""

TAGS_SCHEMA: Final[dict[str, Any]] = {
    "type": "OBJECT",
    "properties": {
        "tags": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
}

# Errors that mean "the external service failed" rather than a bug here
_SERVICE_ERRORS = (
    httpx.HTTPError,
    ValueError,
    KeyError,
    IndexError,
    TypeError,
    AttributeError,
)


class AICollaborator:
    """
    Stateless wrapper around the Gemini generateContent endpoint.

    Usage::

        ai = AICollaborator()
        summary = await ai.summarize(note.content)
        tags = await ai.suggest_tags(note.title, note.description)
        answer = await ai.chat(note.content, history, "What is a limit?")
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the collaborator.

        Args:
            api_key: Gemini API key (default from config). Empty string
                forces degraded mode.
            model: Model name (default from config).
            base_url: API root up to the version segment (default from config).
            timeout: Request timeout in seconds (default from config).
            transport: Custom httpx transport, used by tests.
        """
        self._api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self._model = model or settings.GEMINI_MODEL
        self._base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self._timeout = timeout or settings.AI_TIMEOUT
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model(self) -> str:
        return self._model

    async def summarize(self, text: str) -> str:
        """Summarize note text into a few markdown bullet points."""
        if not self.is_configured:
            return NOT_CONFIGURED

        contents = [_turn("user", SUMMARY_PROMPT.format(content=text))]
        try:
            data = await self._generate(contents, {"temperature": 0.3})
            return _extract_text(data) or SUMMARY_EMPTY
        except _SERVICE_ERRORS as e:
            logger.error("Gemini summary failed (%s): %s", type(e).__name__, e)
            return SUMMARY_FAILED

    async def suggest_tags(self, title: str, description: str) -> list[str]:
        """Suggest short tags for a note; empty list when unavailable."""
        if not self.is_configured:
            return []

        prompt = TAGS_PROMPT.format(title=title, description=description)
        contents = [_turn("user", prompt)]
        config = {"responseMimeType": "application/json", "responseSchema": TAGS_SCHEMA}
        try:
            data = await self._generate(contents, config)
            payload = json.loads(_extract_text(data) or "{}")
            tags = payload.get("tags") or []
            return [str(tag).strip() for tag in tags if str(tag).strip()]
        except _SERVICE_ERRORS as e:
            logger.error("Gemini tag suggestion failed (%s): %s", type(e).__name__, e)
            return []

    async def chat(
        self,
        note_content: str,
        history: Sequence[ChatTurn],
        question: str,
    ) -> str:
        """
        Answer ``question`` using the note as the primary source of truth.

        Earlier turns are sent as conversation history; the note content
        travels with the newest question only.
        """
        if not self.is_configured:
            return NOT_CONFIGURED

        contents = [_turn(turn.role, turn.text) for turn in history]
        contents.append(
            _turn("user", TUTOR_PROMPT.format(content=note_content, question=question))
        )
        try:
            data = await self._generate(contents)
            return _extract_text(data) or CHAT_EMPTY
        except _SERVICE_ERRORS as e:
            logger.error("Gemini chat failed (%s): %s", type(e).__name__, e)
            return CHAT_FAILED

    async def _generate(
        self,
        contents: list[dict[str, Any]],
        generation_config: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Call generateContent and return the decoded JSON body.

        Raises:
            httpx.HTTPError: Transport failure, timeout or error status.
            ValueError: Response body is not JSON.
        """
        url = f"{self._base_url}/models/{self._model}:generateContent"
        payload: dict[str, Any] = {"contents": contents}
        if generation_config:
            payload["generationConfig"] = generation_config

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self._api_key or ""},
            )
            response.raise_for_status()
            data = response.json()

        logger.info("Gemini response received (model=%s)", self._model)
        return data


def _turn(role: str, text: str) -> dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


def _extract_text(data: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate ("" if none)."""
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = candidates[0].get("content", {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts).strip()


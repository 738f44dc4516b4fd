"""
Core Exceptions

Recoverable, caller-visible failures. Decode failures and AI service
failures never surface as exceptions; they resolve to defaults inside the
storage gateway and the AI collaborator.
"""


class NeoNotesError(Exception):
    """Base class for NeoNotes errors."""


class InvalidCredentials(NeoNotesError):
    """Authentication attempt matched no known credential pair."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class NotSignedIn(NeoNotesError):
    """Operation requires a current user."""

    def __init__(self, message: str = "Sign in required") -> None:
        super().__init__(message)


class NoteNotFound(NeoNotesError):
    """No stored note has the requested id."""

    def __init__(self, note_id: str) -> None:
        super().__init__(f"Note not found: {note_id}")
        self.note_id = note_id

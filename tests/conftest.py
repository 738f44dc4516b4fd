"""
Pytest Configuration and Fixtures

Shared fixtures for the offline unit tests. Everything runs against the
in-memory store and a degraded (keyless) AI collaborator unless a test
injects its own.
"""

import os

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Test environment defaults - MUST be before any neonotes imports.
#
# settings is built at import time, so the memory backend has to be in
# place before the first `import neonotes...`.
# ---------------------------------------------------------------------------
load_dotenv()  # .env -> os.environ (no-op if file is missing)

_test_env = {
    "STORE_BACKEND": "memory",
    "LOG_LEVEL": "WARNING",
}
for _key, _value in _test_env.items():
    os.environ.setdefault(_key, _value)

# ---------------------------------------------------------------------------
# Imports (safe now that env vars are set)
# ---------------------------------------------------------------------------
from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from neonotes.main import create_app  # noqa: E402
from neonotes.repositories import MemoryStore  # noqa: E402
from neonotes.schemas.notes import Note, User, UserRole  # noqa: E402
from neonotes.services.ai import AICollaborator  # noqa: E402
from neonotes.services.storage import StorageGateway  # noqa: E402


@pytest.fixture
def store() -> MemoryStore:
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def gateway(store: MemoryStore) -> StorageGateway:
    """Gateway over the empty store (not initialized)."""
    return StorageGateway(store)


@pytest.fixture
def author() -> User:
    return User(
        id="a9",
        name="Test Author",
        email="author@example.com",
        role=UserRole.AUTHOR,
        avatar="https://example.com/a9.png",
    )


@pytest.fixture
def make_note(author: User):
    """Factory for minimal valid notes."""

    def _make(note_id: str = "t1", **overrides) -> Note:
        fields = {
            "id": note_id,
            "title": f"Note {note_id}",
            "description": "desc",
            "content": "body",
            "course": "Course",
            "year": "2024",
            "subject": "Testing",
            "tags": ["pytest"],
            "thumbnail": "https://example.com/t.png",
            "author": author,
            "created_at": "2024-05-01",
        }
        fields.update(overrides)
        return Note(**fields)

    return _make


@pytest.fixture
def client(store: MemoryStore) -> Generator[TestClient, None, None]:
    """
    TestClient over a fresh app.

    The context manager runs the lifespan handler, so the store is seeded
    before the first request.
    """
    app = create_app(store=store, ai=AICollaborator(api_key=""))
    with TestClient(app) as test_client:
        yield test_client

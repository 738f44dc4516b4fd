"""
HTTP API Unit Tests

Drives the FastAPI app through TestClient over the in-memory store.
TestClient runs the lifespan handler, so every test starts from a freshly
seeded store with nobody signed in.
"""

from __future__ import annotations

import json

import httpx
from fastapi.testclient import TestClient

from neonotes.main import create_app
from neonotes.repositories import MemoryStore
from neonotes.services.ai import NOT_CONFIGURED, AICollaborator
from neonotes.services.storage import USER_KEY

NOTES = "/api/v1/notes"
AUTH = "/api/v1/auth"


def _login(
    client: TestClient, email: str = "alex@example.com", password: str = "student"
):
    return client.post(f"{AUTH}/login", json={"email": email, "password": password})


def test_health_check(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "neonotes"
    assert "environment" in data


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


def test_login_me_logout(client: TestClient) -> None:
    assert client.get(f"{AUTH}/me").status_code == 401

    response = _login(client)
    assert response.status_code == 200
    assert response.json()["email"] == "alex@example.com"
    assert client.get(f"{AUTH}/me").json()["role"] == "student"

    assert client.post(f"{AUTH}/logout").status_code == 204
    assert client.get(f"{AUTH}/me").status_code == 401


def test_invalid_credentials(client: TestClient, store: MemoryStore) -> None:
    response = _login(client, password="wrong")

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"
    assert USER_KEY not in store.keys()


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


def test_list_and_filter(client: TestClient) -> None:
    assert len(client.get(f"{NOTES}/").json()) == 4

    result = client.get(f"{NOTES}/", params={"q": "chem"}).json()
    assert [n["id"] for n in result] == ["n3"]

    result = client.get(f"{NOTES}/", params={"author": "a1"}).json()
    assert [n["id"] for n in result] == ["n1", "n3"]

    assert client.get(f"{NOTES}/subjects").json()[0] == "All"
    assert client.get(f"{NOTES}/popular", params={"limit": 1}).json()[0]["id"] == "n4"
    assert client.get(f"{NOTES}/recent").json()[0]["id"] == "n1"


def test_note_json_uses_camel_case(client: TestClient) -> None:
    note = client.get(f"{NOTES}/n2").json()

    assert note["isPremium"] is True
    assert note["price"] == 4.99
    assert note["createdAt"] == "2024-02-15"


def test_unknown_note(client: TestClient) -> None:
    assert client.get(f"{NOTES}/missing").status_code == 404


def test_like_toggle(client: TestClient) -> None:
    before = client.get(f"{NOTES}/n1").json()["likes"]

    liked = client.post(f"{NOTES}/n1/like").json()
    assert liked["likedIds"] == ["n1"]
    assert client.get(f"{NOTES}/n1").json()["likes"] == before + 1
    assert client.get(f"{NOTES}/liked").json() == ["n1"]

    unliked = client.post(f"{NOTES}/n1/like").json()
    assert unliked["likedIds"] == []
    assert client.get(f"{NOTES}/n1").json()["likes"] == before


def test_download_text_fallback(client: TestClient) -> None:
    before = client.get(f"{NOTES}/n2").json()["downloads"]

    response = client.post(f"{NOTES}/n2/download")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "Advanced_Calculus" in response.headers["content-disposition"]
    assert b"Derivatives" in response.content
    assert client.get(f"{NOTES}/n2").json()["downloads"] == before + 1


def test_download_non_ascii_title(client: TestClient) -> None:
    _login(client)
    created = client.post(f"{NOTES}/", data={"title": 'Calculus – Limits "数学"'})
    note_id = created.json()["id"]

    response = client.post(f"{NOTES}/{note_id}/download")

    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert disposition.isascii()
    assert 'filename="Calculus___Limits_____.txt"' in disposition
    assert (
        "filename*=UTF-8''Calculus_%E2%80%93_Limits_%22%E6%95%B0%E5%AD%A6%22.txt"
        in disposition
    )
    assert client.get(f"{NOTES}/{note_id}").json()["downloads"] == 1


def test_suggested_tags_merge_with_entered_tags(store: MemoryStore) -> None:
    reply = {"tags": ["Calculus", "Limits", "Math"]}

    def gemini(request: httpx.Request) -> httpx.Response:
        part = {"text": json.dumps(reply)}
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [part]}}]}
        )

    ai = AICollaborator(api_key="test-key", transport=httpx.MockTransport(gemini))
    with TestClient(create_app(store=store, ai=ai)) as client:
        response = client.post(
            "/api/v1/ai/tags",
            json={"title": "Limits", "tags": ["Math", "Exam"]},
        )

    assert response.json()["tags"] == ["Math", "Exam", "Calculus", "Limits"]


def test_upload_requires_sign_in(client: TestClient) -> None:
    response = client.post(f"{NOTES}/", data={"title": "Anonymous"})
    assert response.status_code == 401


def test_upload_with_file(client: TestClient) -> None:
    _login(client)

    response = client.post(
        f"{NOTES}/",
        data={
            "title": "Fluid Dynamics",
            "subject": "Physics",
            "tags": ["Physics", "Fluids"],
            "is_premium": "true",
            "price": "2.5",
        },
        files={"file": ("fluids.pdf", b"%PDF-1.4 test", "application/pdf")},
    )

    assert response.status_code == 201
    note = response.json()
    assert note["author"]["email"] == "alex@example.com"
    assert note["fileName"] == "fluids.pdf"
    assert note["tags"] == ["Physics", "Fluids"]
    assert note["price"] == 2.5
    assert client.get(f"{NOTES}/").json()[0]["id"] == note["id"]

    download = client.post(f"{NOTES}/{note['id']}/download")
    assert download.content == b"%PDF-1.4 test"
    assert download.headers["content-type"] == "application/pdf"


def test_upload_premium_without_price(client: TestClient) -> None:
    _login(client)

    response = client.post(f"{NOTES}/", data={"title": "Paid", "is_premium": "true"})

    assert response.status_code == 422


def test_comment_flow(client: TestClient) -> None:
    anonymous = client.post(f"{NOTES}/n3/comments", json={"content": "hi"})
    assert anonymous.status_code == 401

    _login(client)
    response = client.post(f"{NOTES}/n3/comments", json={"content": "Helpful!"})

    assert response.status_code == 201
    comments = client.get(f"{NOTES}/n3").json()["comments"]
    assert comments[0]["content"] == "Helpful!"
    assert comments[0]["userName"] == "Alex Student"


def test_update_note(client: TestClient) -> None:
    note = client.get(f"{NOTES}/n1").json()
    note["title"] = "Hooks, revisited"

    response = client.put(f"{NOTES}/n1", json=note)

    assert response.status_code == 200
    assert client.get(f"{NOTES}/n1").json()["title"] == "Hooks, revisited"
    assert client.put(f"{NOTES}/n2", json=note).status_code == 422


def test_update_premium_note_requires_price(client: TestClient) -> None:
    note = client.get(f"{NOTES}/n2").json()
    note["price"] = None

    response = client.put(f"{NOTES}/n2", json=note)

    assert response.status_code == 422
    assert client.get(f"{NOTES}/n2").json()["price"] == 4.99


# ---------------------------------------------------------------------------
# Admin and AI
# ---------------------------------------------------------------------------


def test_admin_stats_requires_admin(client: TestClient) -> None:
    assert client.get("/api/v1/admin/stats").status_code == 401

    _login(client)
    assert client.get("/api/v1/admin/stats").status_code == 403

    _login(client, "admin@neonotes.com", "admin")
    stats = client.get("/api/v1/admin/stats").json()
    assert stats["totalNotes"] == 4
    assert len(stats["pendingReview"]) == 2


def test_ai_endpoints_degrade_without_key(client: TestClient) -> None:
    assert client.get("/api/v1/ai/status").json()["configured"] is False

    summary = client.post("/api/v1/ai/summarize", json={"text": "abc"}).json()
    assert summary["summary"] == NOT_CONFIGURED

    tags = client.post("/api/v1/ai/tags", json={"title": "Calc"}).json()
    assert tags["tags"] == []

    chat = client.post("/api/v1/ai/notes/n1/chat", json={"question": "What?"})
    assert chat.status_code == 200
    assert chat.json()["answer"] == NOT_CONFIGURED

    missing = client.post("/api/v1/ai/notes/zzz/chat", json={"question": "What?"})
    assert missing.status_code == 404

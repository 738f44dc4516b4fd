"""
Catalog Queries

Read-only views over a note collection: browse filtering, home page
rankings and the admin dashboard aggregates.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Final

from neonotes.schemas.notes import AdminStats, Note

ALL_SUBJECTS: Final = "All"

# Revenue is an estimate: each premium note is assumed to sell this many copies.
REVENUE_SALES_PER_NOTE: Final = 12
PENDING_REVIEW_COUNT: Final = 2


def search_notes(
    notes: Sequence[Note],
    term: str = "",
    subject: str | None = None,
    author_id: str | None = None,
) -> list[Note]:
    """
    Filter notes for the browse page. Collection order is preserved.

    Args:
        term: Case-insensitive substring of the title or of any tag.
        subject: Exact subject; None or "All" matches every subject.
        author_id: Id of the embedded author snapshot.
    """
    needle = term.strip().lower()

    def matches(note: Note) -> bool:
        if needle and needle not in note.title.lower():
            if not any(needle in tag.lower() for tag in note.tags):
                return False
        if subject and subject != ALL_SUBJECTS and note.subject != subject:
            return False
        if author_id and note.author.id != author_id:
            return False
        return True

    return [note for note in notes if matches(note)]


def list_subjects(notes: Sequence[Note]) -> list[str]:
    """'All' followed by each distinct subject in first-seen order."""
    return [ALL_SUBJECTS, *dict.fromkeys(note.subject for note in notes)]


def _created(note: Note) -> date:
    try:
        return date.fromisoformat(note.created_at[:10])
    except ValueError:
        return date.min


def recent_notes(notes: Sequence[Note], limit: int = 4) -> list[Note]:
    """Newest notes first."""
    return sorted(notes, key=_created, reverse=True)[:limit]


def popular_notes(notes: Sequence[Note], limit: int = 4) -> list[Note]:
    """Most downloaded notes first."""
    return sorted(notes, key=lambda n: n.downloads, reverse=True)[:limit]


def admin_stats(notes: Sequence[Note]) -> AdminStats:
    """Dashboard totals. The review queue is simulated as the first notes."""
    premium = [n for n in notes if n.is_premium and n.price]
    revenue = sum((n.price or 0.0) * REVENUE_SALES_PER_NOTE for n in premium)
    return AdminStats(
        total_notes=len(notes),
        total_downloads=sum(n.downloads for n in notes),
        total_likes=sum(n.likes for n in notes),
        premium_notes=sum(1 for n in notes if n.is_premium),
        estimated_revenue=round(revenue, 2),
        pending_review=list(notes[:PENDING_REVIEW_COUNT]),
    )

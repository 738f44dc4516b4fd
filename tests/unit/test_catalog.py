"""
Catalog Query Unit Tests

Browse filtering, subject listing, home page rankings and admin totals.
"""

from __future__ import annotations

import pytest

from neonotes.schemas.notes import Note
from neonotes.services import catalog
from neonotes.services.seed import sample_notes


@pytest.fixture
def notes() -> list[Note]:
    return sample_notes()


class TestSearchNotes:
    def test_empty_term_matches_everything(self, notes: list[Note]) -> None:
        assert catalog.search_notes(notes) == notes

    def test_term_matches_title_case_insensitively(self, notes: list[Note]) -> None:
        result = catalog.search_notes(notes, term="CALCULUS")
        assert [n.id for n in result] == ["n2"]

    def test_term_matches_tags(self, notes: list[Note]) -> None:
        result = catalog.search_notes(notes, term="python")
        assert [n.id for n in result] == ["n4"]

    def test_subject_filter(self, notes: list[Note]) -> None:
        assert [n.id for n in catalog.search_notes(notes, subject="Science")] == ["n3"]
        assert catalog.search_notes(notes, subject="All") == notes

    def test_author_filter(self, notes: list[Note]) -> None:
        result = catalog.search_notes(notes, author_id="a1")
        assert [n.id for n in result] == ["n1", "n3"]

    def test_filters_combine(self, notes: list[Note]) -> None:
        assert catalog.search_notes(notes, term="react", author_id="a2") == []


def test_list_subjects(notes: list[Note]) -> None:
    extra = notes[0].model_copy(update={"id": "dup"})
    assert catalog.list_subjects([*notes, extra]) == [
        "All",
        "Frontend",
        "Calculus",
        "Science",
        "AI",
    ]


def test_recent_notes_newest_first(notes: list[Note]) -> None:
    assert [n.id for n in catalog.recent_notes(notes)] == ["n1", "n3", "n2", "n4"]
    assert len(catalog.recent_notes(notes, limit=2)) == 2


def test_popular_notes_by_downloads(notes: list[Note]) -> None:
    assert [n.id for n in catalog.popular_notes(notes, limit=3)] == ["n4", "n1", "n2"]


def test_admin_stats(notes: list[Note]) -> None:
    stats = catalog.admin_stats(notes)

    assert stats.total_notes == 4
    assert stats.total_downloads == 1205 + 850 + 543 + 2100
    assert stats.total_likes == 342 + 120 + 89 + 560
    assert stats.premium_notes == 2
    assert stats.estimated_revenue == pytest.approx((4.99 + 9.99) * 12)
    assert [n.id for n in stats.pending_review] == ["n1", "n2"]


def test_admin_stats_empty() -> None:
    stats = catalog.admin_stats([])

    assert stats.total_notes == 0
    assert stats.estimated_revenue == 0
    assert stats.pending_review == []

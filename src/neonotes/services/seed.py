"""
Built-in Data

Demo identities, their fixed credentials, and the sample note collection
written into an empty store on first start.
"""

from typing import Final

from neonotes.schemas.notes import Note, User, UserRole

DEMO_MEMBER: Final = User(
    id="u1",
    name="Alex Student",
    email="alex@example.com",
    role=UserRole.STUDENT,
    avatar="https://picsum.photos/id/64/100/100",
)

ADMIN: Final = User(
    id="admin1",
    name="System Admin",
    email="admin@neonotes.com",
    role=UserRole.ADMIN,
    avatar="https://ui-avatars.com/api/?name=Admin&background=4F46E5&color=fff",
)

# email -> (password, identity). Demonstration only: plain text, not configurable.
CREDENTIALS: Final[dict[str, tuple[str, User]]] = {
    ADMIN.email: ("admin", ADMIN),
    DEMO_MEMBER.email: ("student", DEMO_MEMBER),
}

_SARAH = User(
    id="a1",
    name="Sarah Dev",
    email="sarah@dev.com",
    role=UserRole.AUTHOR,
    avatar="https://picsum.photos/id/237/100/100",
)
_PROF_MATH = User(
    id="a2",
    name="Prof. Math",
    email="prof@math.com",
    role=UserRole.AUTHOR,
    avatar="https://picsum.photos/id/20/100/100",
)
_TECH_GURU = User(
    id="a3",
    name="Tech Guru",
    email="tech@guru.com",
    role=UserRole.AUTHOR,
    avatar="https://picsum.photos/id/60/100/100",
)

_SAMPLE_NOTES: Final[tuple[Note, ...]] = (
    Note(
        id="n1",
        title="Introduction to React Hooks",
        description="A comprehensive guide to useState, useEffect, and custom hooks.",
        content=(
            'React Hooks are functions that let you "hook into" React state and '
            "lifecycle features from function components.\n\n"
            "1. useState: Returns a stateful value, and a function to update it.\n"
            "2. useEffect: Accepts a function that contains imperative, possibly "
            "effectful code.\n"
            "3. useContext: Accepts a context object and returns the current "
            "context value.\n\n"
            "Rules of Hooks:\n"
            "- Only Call Hooks at the Top Level\n"
            "- Only Call Hooks from React Functions"
        ),
        course="Web Development",
        year="2024",
        subject="Frontend",
        tags=["React", "JavaScript", "Frontend"],
        thumbnail="https://picsum.photos/seed/react/400/250",
        author=_SARAH,
        downloads=1205,
        likes=342,
        created_at="2024-03-10",
        file_name="react_hooks_intro.pdf",
        mime_type="application/pdf",
    ),
    Note(
        id="n2",
        title="Advanced Calculus: Limits & Derivatives",
        description="Detailed notes on limits, continuity, and differentiation rules.",
        content=(
            "A limit is the value that a function (or sequence) approaches as the "
            "input (or index) approaches some value.\n\n"
            "Derivatives represent the rate of change of a function with respect "
            "to a variable. Geometrically, the derivative is the slope of the "
            "tangent line to the graph of the function at a given point.\n\n"
            "Common Rules:\n"
            "- Power Rule\n- Product Rule\n- Quotient Rule\n- Chain Rule"
        ),
        course="Mathematics",
        year="2023",
        subject="Calculus",
        tags=["Math", "Calculus", "Limits"],
        thumbnail="https://picsum.photos/seed/math/400/250",
        author=_PROF_MATH,
        downloads=850,
        likes=120,
        is_premium=True,
        price=4.99,
        created_at="2024-02-15",
    ),
    Note(
        id="n3",
        title="Organic Chemistry: Hydrocarbons",
        description="Study notes covering Alkanes, Alkenes, and Alkynes.",
        content=(
            "Hydrocarbons are organic compounds consisting entirely of hydrogen "
            "and carbon.\n\n"
            "Alkanes: Saturated hydrocarbons (single bonds). Formula CnH2n+2.\n"
            "Alkenes: Unsaturated hydrocarbons (double bonds). Formula CnH2n.\n"
            "Alkynes: Unsaturated hydrocarbons (triple bonds). Formula CnH2n-2.\n\n"
            "Reactions:\n- Combustion\n- Halogenation\n- Hydrogenation"
        ),
        course="Chemistry",
        year="2024",
        subject="Science",
        tags=["Chemistry", "Organic", "Science"],
        thumbnail="https://picsum.photos/seed/chem/400/250",
        author=_SARAH,
        downloads=543,
        likes=89,
        created_at="2024-03-01",
    ),
    Note(
        id="n4",
        title="Machine Learning Basics",
        description="Introduction to Supervised and Unsupervised Learning.",
        content=(
            "Machine learning is a field of inquiry devoted to understanding and "
            "building methods that 'learn', that is, methods that leverage data to "
            "improve performance on some set of tasks.\n\n"
            "Supervised Learning:\n"
            "The algorithm learns on a labeled dataset, providing an answer key "
            "that the algorithm can use to evaluate its accuracy on training data.\n\n"
            "Unsupervised Learning:\n"
            "Provides unlabeled data that the algorithm tries to make sense of by "
            "extracting features and patterns on its own."
        ),
        course="Computer Science",
        year="2024",
        subject="AI",
        tags=["AI", "ML", "Python"],
        thumbnail="https://picsum.photos/seed/ai/400/250",
        author=_TECH_GURU,
        downloads=2100,
        likes=560,
        is_premium=True,
        price=9.99,
        created_at="2024-01-20",
    ),
)


def sample_notes() -> list[Note]:
    """Fresh deep copies of the sample collection (callers may mutate them)."""
    return [note.model_copy(deep=True) for note in _SAMPLE_NOTES]

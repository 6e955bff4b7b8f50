"""Shared test fixtures for cardsort tests."""

from __future__ import annotations

import pytest

from cardsort.models import Card, Category, Participant, Placement, SortingSession

COMPLETED_AT = 1_767_000_000_000


def _make_session(
    session_id: str,
    groups: dict[str, list[str]],
    *,
    names: dict[str, str] | None = None,
    completed: bool = True,
    duration: float | None = None,
    cards: list[Card] | None = None,
) -> SortingSession:
    """Build a session from ``{category_id: [card_id, ...]}``.

    Category names default to the category id.
    """
    names = names or {}
    placements = [
        Placement(
            card_id=card_id,
            category_id=category_id,
            category_name=names.get(category_id, category_id),
            position=position,
        )
        for category_id, card_ids in groups.items()
        for position, card_id in enumerate(card_ids)
    ]
    categories = [
        Category(id=category_id, name=names.get(category_id, category_id), card_ids=list(card_ids))
        for category_id, card_ids in groups.items()
    ]
    return SortingSession(
        id=session_id,
        participant=Participant(
            id=f"participant-{session_id}",
            completed_at=COMPLETED_AT if completed else None,
            duration=duration,
        ),
        cards=cards or [],
        categories=categories,
        placements=placements,
    )


@pytest.fixture
def make_session():
    """Factory for sessions built from ``{category_id: [card_id, ...]}``."""
    return _make_session


@pytest.fixture
def sample_cards() -> list[Card]:
    """Four cards: two billing tasks and two collaboration tasks."""
    return [
        Card(id="a", label="Budget Planning"),
        Card(id="b", label="Invoice Generation"),
        Card(id="c", label="Team Chat"),
        Card(id="d", label="Video Calls"),
    ]


@pytest.fixture
def sample_sessions(sample_cards: list[Card]) -> list[SortingSession]:
    """Both participants pair a+b; only the first also pairs c+d."""
    return [
        _make_session("s1", {"money": ["a", "b"], "talk": ["c", "d"]}, cards=sample_cards),
        _make_session(
            "s2", {"money": ["a", "b"], "talk": ["c"], "meet": ["d"]}, cards=sample_cards,
        ),
    ]

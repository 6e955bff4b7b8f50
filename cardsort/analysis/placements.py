"""Per-card placement summaries and open-sort category usage."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence

from cardsort.analysis.metrics import agreement_score, percentage
from cardsort.analysis.models import (
    CardPlacementSummary,
    CategoryAnalysis,
    CategoryCard,
    CategoryPlacement,
    StandardizedCategory,
)
from cardsort.models import Card, SortingSession

UNPLACED = "Unplaced"

DEFAULT_TOP_CARDS = 5

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def normalize_category(name: str) -> str:
    """Fold a participant's category label to a comparable key.

    ``"  Money & Billing!"`` → ``"money  billing"``.  Internal whitespace
    is kept as-is; only non-alphanumeric characters are stripped.
    """
    return _NON_ALNUM.sub("", name.lower().strip())


def analyze_card_placements(
    sessions: Sequence[SortingSession],
    cards: Sequence[Card],
) -> list[CardPlacementSummary]:
    """Summarise where each card was placed, one entry per card in order."""
    by_session = [
        {p.card_id: p.category_name for p in session.placements}
        for session in sessions
    ]

    summaries: list[CardPlacementSummary] = []
    for card in cards:
        # Counter keeps first-seen order, and sorted() is stable, so ties
        # stay in the order participants used them.
        tally: Counter[str] = Counter()
        for placed in by_session:
            name = placed.get(card.id)
            if name is not None:
                tally[normalize_category(name)] += 1

        total = sum(tally.values())
        placements = sorted(
            (
                CategoryPlacement(
                    category_name=name,
                    count=count,
                    percentage=percentage(count, total),
                )
                for name, count in tally.items()
            ),
            key=lambda p: p.count,
            reverse=True,
        )
        top = placements[0] if placements else None
        summaries.append(
            CardPlacementSummary(
                card_id=card.id,
                card_label=card.label,
                placements=placements,
                agreement_score=agreement_score(top.percentage) if top else 0.0,
                primary_category=top.category_name if top else UNPLACED,
            )
        )
    return summaries


def analyze_category_usage(
    sessions: Sequence[SortingSession],
    *,
    top_n: int = DEFAULT_TOP_CARDS,
) -> CategoryAnalysis:
    """Merge participants' categories by normalised name.

    ``frequency`` counts how many session categories collapsed into each
    name; a card's ``percentage`` is its placements in that name divided by
    ``frequency``.  Categories come back most-used first.
    """
    original_names: dict[str, list[str]] = {}
    frequency: Counter[str] = Counter()
    card_counts: dict[str, Counter[str]] = {}
    card_labels: dict[str, str] = {}

    for session in sessions:
        for card in session.cards:
            card_labels.setdefault(card.id, card.label)
        for category in session.categories:
            key = normalize_category(category.name)
            names = original_names.setdefault(key, [])
            if category.name not in names:
                names.append(category.name)
            frequency[key] += 1
            counts = card_counts.setdefault(key, Counter())
            for placement in session.placements:
                if placement.category_id == category.id:
                    counts[placement.card_id] += 1

    categories = [
        StandardizedCategory(
            name=key,
            original_names=original_names[key],
            frequency=frequency[key],
            top_cards=[
                CategoryCard(
                    card_id=card_id,
                    card_label=card_labels.get(card_id, card_id),
                    frequency=count,
                    percentage=percentage(count, frequency[key]),
                )
                for card_id, count in sorted(
                    card_counts[key].items(), key=lambda item: item[1], reverse=True
                )[:top_n]
            ],
        )
        for key in original_names
    ]
    categories.sort(key=lambda c: c.frequency, reverse=True)
    return CategoryAnalysis(standardized_categories=categories)

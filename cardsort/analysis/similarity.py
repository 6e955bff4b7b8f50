"""Build the card x card similarity matrix from sorting sessions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from itertools import combinations

from cardsort.analysis.metrics import co_occurrence_similarity
from cardsort.analysis.models import CardRef, SimilarityCell, SimilarityMatrix
from cardsort.models import Card, SortingSession

logger = logging.getLogger(__name__)


def compute_similarity_matrix(
    sessions: Sequence[SortingSession],
    cards: Sequence[Card],
) -> SimilarityMatrix:
    """Count how often each pair of cards shared a category.

    ``cards`` fixes the row/column order.  Placements are grouped by
    ``category_id`` within each session, so two categories that happen to
    share a label are still counted separately.  Placements for cards not
    in ``cards`` contribute nothing.
    """
    card_ids = [c.id for c in cards]
    index = {card_id: i for i, card_id in enumerate(card_ids)}
    n = len(card_ids)
    counts = [[0] * n for _ in range(n)]

    skipped = 0
    for session in sessions:
        by_category: dict[str, list[int]] = {}
        for placement in session.placements:
            idx = index.get(placement.card_id)
            if idx is None:
                skipped += 1
                continue
            by_category.setdefault(placement.category_id, []).append(idx)

        for members in by_category.values():
            for a, b in combinations(members, 2):
                counts[a][b] += 1
                counts[b][a] += 1

    if skipped:
        logger.debug("Ignored %d placement(s) referencing unknown cards", skipped)

    participant_count = len(sessions)
    matrix = [
        [co_occurrence_similarity(count, participant_count) for count in row]
        for row in counts
    ]
    for i in range(n):
        matrix[i][i] = 1.0

    return SimilarityMatrix(
        card_ids=card_ids,
        card_labels=[c.label for c in cards],
        matrix=matrix,
        participant_count=participant_count,
    )


def get_similarity_cells(similarity: SimilarityMatrix) -> list[SimilarityCell]:
    """Every unordered card pair, most similar first.

    The sort is stable, so pairs with equal similarity stay in row-major
    order (i < j).
    """
    ids = similarity.card_ids
    labels = similarity.card_labels
    total = similarity.participant_count
    cells: list[SimilarityCell] = []
    for i, j in combinations(range(len(ids)), 2):
        value = similarity.matrix[i][j]
        cells.append(
            SimilarityCell(
                card_a=CardRef(id=ids[i], label=labels[i]),
                card_b=CardRef(id=ids[j], label=labels[j]),
                co_occurrences=round(value * total),
                total_pairings=total,
                similarity=value,
            )
        )
    cells.sort(key=lambda c: c.similarity, reverse=True)
    return cells

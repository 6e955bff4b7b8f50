"""Rule-based findings over the similarity matrix and placement summaries.

Rules run in a fixed order (strong cluster, ambiguous cards, consensus) and
are independent of one another; any of them may produce nothing.
"""

from __future__ import annotations

from collections.abc import Sequence

from cardsort.analysis.models import (
    CardPlacementSummary,
    Insight,
    InsightType,
    SimilarityMatrix,
)
from cardsort.analysis.similarity import get_similarity_cells

STRONG_CLUSTER_THRESHOLD = 0.8
AMBIGUITY_THRESHOLD = 0.4
MAX_AMBIGUOUS_INSIGHTS = 2
CONSENSUS_THRESHOLD = 0.9
MIN_CONSENSUS_CARDS = 3
CONSENSUS_CONFIDENCE = 0.9


def generate_insights(
    similarity: SimilarityMatrix,
    summaries: Sequence[CardPlacementSummary],
    *,
    strong_cluster_threshold: float = STRONG_CLUSTER_THRESHOLD,
    ambiguity_threshold: float = AMBIGUITY_THRESHOLD,
    max_ambiguous: int = MAX_AMBIGUOUS_INSIGHTS,
    consensus_threshold: float = CONSENSUS_THRESHOLD,
    min_consensus_cards: int = MIN_CONSENSUS_CARDS,
) -> list[Insight]:
    """Return the insights for one analysis run, in rule order."""
    insights: list[Insight] = []

    strong = _strong_cluster(similarity, strong_cluster_threshold)
    if strong is not None:
        insights.append(strong)

    # With no participants every card scores 0, which says nothing about clarity
    ambiguous = (
        [s for s in summaries if s.agreement_score < ambiguity_threshold]
        if similarity.participant_count > 0
        else []
    )
    for summary in ambiguous[:max_ambiguous]:
        insights.append(
            Insight(
                type=InsightType.AMBIGUOUS_CARD,
                message=(
                    f'"{summary.card_label}" shows low placement agreement '
                    f"({_pct(summary.agreement_score)}%). Consider reviewing this "
                    "item's clarity or scope."
                ),
                confidence=1 - summary.agreement_score,
                related_cards=[summary.card_id],
            )
        )

    consensus = [s for s in summaries if s.agreement_score >= consensus_threshold]
    if len(consensus) >= min_consensus_cards:
        insights.append(
            Insight(
                type=InsightType.CONSENSUS,
                message=(
                    f"{len(consensus)} cards show very high placement agreement "
                    f"(>{_pct(consensus_threshold)}%), suggesting clear user mental "
                    "models for these items."
                ),
                confidence=CONSENSUS_CONFIDENCE,
                related_cards=[s.card_id for s in consensus],
            )
        )

    return insights


def _strong_cluster(similarity: SimilarityMatrix, threshold: float) -> Insight | None:
    """The single most similar pair, if it clears *threshold*."""
    cells = get_similarity_cells(similarity)
    if not cells or cells[0].similarity < threshold:
        return None
    top = cells[0]
    return Insight(
        type=InsightType.STRONG_CLUSTER,
        message=(
            f'"{top.card_a.label}" and "{top.card_b.label}" were sorted together '
            f"{_pct(top.similarity)}% of the time, indicating a strong conceptual "
            "relationship."
        ),
        confidence=top.similarity,
        related_cards=[top.card_a.id, top.card_b.id],
    )


def _pct(fraction: float) -> int:
    """Round a 0–1 fraction to a whole percentage, halves rounding up."""
    return int(fraction * 100 + 0.5)

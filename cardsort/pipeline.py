"""Full analysis run: filter sessions, then run every analysis stage in order."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cardsort.analysis.clustering import compute_hierarchical_clustering
from cardsort.analysis.insights import generate_insights
from cardsort.analysis.metrics import completion_rate, mean_duration
from cardsort.analysis.models import AnalysisResults
from cardsort.analysis.placements import analyze_card_placements, analyze_category_usage
from cardsort.analysis.similarity import compute_similarity_matrix
from cardsort.config import CardSortSettings
from cardsort.models import Card, SortingSession

logger = logging.getLogger(__name__)


def run_full_analysis(
    study_id: str,
    study_name: str,
    sessions: Sequence[SortingSession],
    cards: Sequence[Card],
    *,
    settings: CardSortSettings | None = None,
    analyzed_at: int = 0,
) -> AnalysisResults:
    """Analyse every completed session of a study.

    Abandoned sessions (no ``completed_at``) only count towards the
    completion rate.  *analyzed_at* (epoch ms) is stamped by the
    caller; the run never reads the clock, so identical inputs give
    identical results.
    """
    if settings is None:
        settings = CardSortSettings()

    completed = [s for s in sessions if s.is_completed]
    logger.info(
        "Analysing study %s: %d of %d sessions completed, %d cards",
        study_id, len(completed), len(sessions), len(cards),
    )

    similarity = compute_similarity_matrix(completed, cards)
    clusters = compute_hierarchical_clustering(
        similarity, thresholds=settings.cluster_thresholds,
    )
    categories = analyze_category_usage(completed, top_n=settings.top_cards_per_category)
    summaries = analyze_card_placements(completed, cards)
    insights = generate_insights(
        similarity,
        summaries,
        strong_cluster_threshold=settings.strong_cluster_threshold,
        ambiguity_threshold=settings.ambiguity_threshold,
        max_ambiguous=settings.max_ambiguous_insights,
        consensus_threshold=settings.consensus_threshold,
        min_consensus_cards=settings.min_consensus_cards,
    )
    logger.debug("Generated %d insight(s)", len(insights))

    return AnalysisResults(
        study_id=study_id,
        study_name=study_name,
        analyzed_at=analyzed_at,
        participant_count=len(completed),
        total_sessions=len(sessions),
        completion_rate=completion_rate(len(completed), len(sessions)),
        average_duration=mean_duration([s.participant.duration for s in completed]),
        similarity_matrix=similarity,
        cluster_analysis=clusters,
        category_analysis=categories,
        card_summaries=summaries,
        insights=insights,
    )

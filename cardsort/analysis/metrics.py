"""Low-level arithmetic for the analysis stages.

Pure functions with no I/O and no models.  Every ratio guards its denominator
so empty studies produce zeros instead of raising.
"""

from __future__ import annotations

from collections.abc import Sequence


def co_occurrence_similarity(co_occurrences: int, participant_count: int) -> float:
    """Fraction of participants who put two cards in the same category.

    Returns 0 when nobody has sorted yet.
    """
    if participant_count <= 0:
        return 0.0
    return co_occurrences / participant_count


def percentage(count: int, total: int) -> float:
    """``count`` as a percentage of ``total`` (0–100), 0 when total is 0."""
    if total <= 0:
        return 0.0
    return count / total * 100


def agreement_score(top_percentage: float) -> float:
    """Share of a card's placements that landed in its most common category.

    1.0 = every participant agreed, values near 1/k mean placements were
    spread evenly over k categories.
    """
    return top_percentage / 100


def average_linkage(distance_a: float, distance_b: float) -> float:
    """Distance from a freshly merged cluster (A+B) to a third cluster.

    Unweighted mean of the two sub-cluster distances.  Cluster sizes are
    not taken into account, so this is WPGMA rather than size-weighted UPGMA.
    """
    return (distance_a + distance_b) / 2


def completion_rate(completed: int, total: int) -> float:
    """Completed sessions over all sessions started, 0 when none started."""
    if total <= 0:
        return 0.0
    return completed / total


def mean_duration(durations: Sequence[float | None]) -> float:
    """Arithmetic mean of the known durations; ``None`` entries are skipped.

    Returns 0 when no duration is known.
    """
    known = [d for d in durations if d is not None]
    if not known:
        return 0.0
    return sum(known) / len(known)

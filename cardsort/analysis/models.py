"""Data structures for card-sort analysis results.

These are plain dataclasses (not Pydantic). They're ephemeral, computed
fresh on every run from the session data, and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class InsightType(str, Enum):
    STRONG_CLUSTER = "strong_cluster"
    AMBIGUOUS_CARD = "ambiguous_card"
    CATEGORY_CONFUSION = "category_confusion"  # reserved, no rule emits it yet
    CONSENSUS = "consensus"


@dataclass
class SimilarityMatrix:
    """Symmetric card x card similarity (fraction of participants who co-sorted)."""

    card_ids: list[str]
    card_labels: list[str]
    matrix: list[list[float]]  # matrix[i][j] in [0, 1], diagonal 1
    participant_count: int


@dataclass
class CardRef:
    id: str
    label: str


@dataclass
class SimilarityCell:
    """One unordered card pair, flattened for table views."""

    card_a: CardRef
    card_b: CardRef
    co_occurrences: int
    total_pairings: int  # participant count
    similarity: float


@dataclass
class DendrogramNode:
    """A dendrogram node.

    Leaves carry ``card_id`` and ``value`` 0; internal nodes carry exactly
    two ``children`` and the merge distance as ``value``.
    """

    id: str
    name: str
    value: float = 0.0
    card_id: str | None = None
    children: list[DendrogramNode] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass
class SuggestedCluster:
    id: str
    name: str  # "Cluster 1", "Cluster 2", ...
    card_ids: list[str]
    card_labels: list[str]


@dataclass
class ClusterCut:
    """A flat partition of every card at one distance threshold."""

    threshold: float
    clusters: list[SuggestedCluster] = field(default_factory=list)


@dataclass
class ClusterAnalysis:
    root: DendrogramNode | None  # None when there are no cards
    suggested_clusters: list[ClusterCut] = field(default_factory=list)


@dataclass
class CategoryPlacement:
    category_name: str  # normalised
    count: int
    percentage: float


@dataclass
class CardPlacementSummary:
    """Where one card ended up across all sessions."""

    card_id: str
    card_label: str
    placements: list[CategoryPlacement]  # count descending
    agreement_score: float  # share of placements in the top category, 0-1
    primary_category: str


@dataclass
class CategoryCard:
    card_id: str
    card_label: str
    frequency: int
    percentage: float


@dataclass
class StandardizedCategory:
    """Participant categories merged under one normalised name."""

    name: str
    original_names: list[str]
    frequency: int  # how many session categories merged into this one
    top_cards: list[CategoryCard] = field(default_factory=list)


@dataclass
class CategoryAnalysis:
    standardized_categories: list[StandardizedCategory] = field(default_factory=list)


@dataclass
class Insight:
    type: InsightType
    message: str
    confidence: float
    related_cards: list[str] = field(default_factory=list)


@dataclass
class AnalysisResults:
    """Complete analysis for one study, handed back to the caller."""

    study_id: str
    study_name: str
    analyzed_at: int  # epoch ms
    participant_count: int
    total_sessions: int
    completion_rate: float
    average_duration: float  # ms
    similarity_matrix: SimilarityMatrix
    cluster_analysis: ClusterAnalysis
    category_analysis: CategoryAnalysis
    card_summaries: list[CardPlacementSummary]
    insights: list[Insight]

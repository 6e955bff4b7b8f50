"""Card-sort analysis: similarity, clustering, placements and insights."""

from cardsort.analysis.clustering import compute_hierarchical_clustering
from cardsort.analysis.insights import generate_insights
from cardsort.analysis.models import AnalysisResults, InsightType
from cardsort.analysis.placements import analyze_card_placements, analyze_category_usage
from cardsort.analysis.similarity import compute_similarity_matrix, get_similarity_cells

__all__ = [
    "AnalysisResults",
    "InsightType",
    "analyze_card_placements",
    "analyze_category_usage",
    "compute_hierarchical_clustering",
    "compute_similarity_matrix",
    "generate_insights",
    "get_similarity_cells",
]

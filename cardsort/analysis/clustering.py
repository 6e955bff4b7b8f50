"""Agglomerative clustering of cards into a dendrogram plus flat cuts.

Distances are ``1 - similarity``.  Each step merges the closest pair of
current clusters; the merged cluster's distance to every other cluster is
the unweighted mean of its two halves' distances (see
:func:`cardsort.analysis.metrics.average_linkage`).

Tie-break: the current clusters are scanned row-major (``i < j``) and only
a strictly smaller distance replaces the best pair, so the first pair found
wins.  Merged clusters leave the list and the new cluster is appended at the
end, which makes the whole merge sequence deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from cardsort.analysis.metrics import average_linkage
from cardsort.analysis.models import (
    ClusterAnalysis,
    ClusterCut,
    DendrogramNode,
    SimilarityMatrix,
    SuggestedCluster,
)

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLDS = (0.3, 0.5, 0.7)

INTERNAL_NODE_NAME = "Cluster"


@dataclass
class _Merge:
    """One step of the merge history, replayed when cutting."""

    left_id: str
    right_id: str
    distance: float
    node_id: str


@dataclass
class _Cluster:
    node: DendrogramNode
    card_ids: list[str]


def compute_hierarchical_clustering(
    similarity: SimilarityMatrix,
    *,
    thresholds: Sequence[float] = DEFAULT_THRESHOLDS,
) -> ClusterAnalysis:
    """Cluster the cards of *similarity* and cut the tree at each threshold.

    With no cards the root is ``None`` and every cut is empty.  A single
    card yields a lone leaf as root.
    """
    card_ids = similarity.card_ids
    labels = dict(zip(card_ids, similarity.card_labels))

    clusters = [
        _Cluster(
            node=DendrogramNode(id=card_id, name=labels[card_id], card_id=card_id),
            card_ids=[card_id],
        )
        for card_id in card_ids
    ]
    dist = [[1 - s for s in row] for row in similarity.matrix]
    merges: list[_Merge] = []

    while len(clusters) > 1:
        best = float("inf")
        bi, bj = 0, 1
        for i in range(len(clusters)):
            for j in range(i + 1, len(clusters)):
                if dist[i][j] < best:
                    best = dist[i][j]
                    bi, bj = i, j

        left, right = clusters[bi], clusters[bj]
        node = DendrogramNode(
            id=f"cluster-{len(merges) + 1}",
            name=INTERNAL_NODE_NAME,
            value=best,
            children=[left.node, right.node],
        )
        merges.append(
            _Merge(left_id=left.node.id, right_id=right.node.id, distance=best, node_id=node.id)
        )

        keep = [k for k in range(len(clusters)) if k != bi and k != bj]
        to_new = [average_linkage(dist[bi][k], dist[bj][k]) for k in keep]
        dist = [
            [dist[a][b] for b in keep] + [to_new[row]]
            for row, a in enumerate(keep)
        ]
        dist.append(to_new + [0.0])
        clusters = [clusters[k] for k in keep]
        clusters.append(_Cluster(node=node, card_ids=left.card_ids + right.card_ids))

    root = clusters[0].node if clusters else None
    logger.debug("Clustered %d cards in %d merges", len(card_ids), len(merges))

    return ClusterAnalysis(
        root=root,
        suggested_clusters=[
            _cut(merges, card_ids, labels, threshold) for threshold in thresholds
        ],
    )


def _cut(
    merges: list[_Merge],
    card_ids: list[str],
    labels: dict[str, str],
    threshold: float,
) -> ClusterCut:
    """Replay every merge at or below *threshold*, starting from singletons.

    Average linkage never produces a merge closer than the one before it,
    so the qualifying merges always form a prefix of the history and their
    children are present when replayed.
    """
    current: dict[str, list[str]] = {card_id: [card_id] for card_id in card_ids}
    for merge in merges:
        if merge.distance > threshold:
            continue
        members = current.pop(merge.left_id) + current.pop(merge.right_id)
        current[merge.node_id] = members

    return ClusterCut(
        threshold=threshold,
        clusters=[
            SuggestedCluster(
                id=cluster_id,
                name=f"Cluster {n}",
                card_ids=members,
                card_labels=[labels.get(card_id, card_id) for card_id in members],
            )
            for n, (cluster_id, members) in enumerate(current.items(), start=1)
        ],
    )


def walk_dendrogram(root: DendrogramNode | None) -> Iterator[DendrogramNode]:
    """Yield every node of the tree, parents before children, left first."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def dendrogram_leaves(root: DendrogramNode | None) -> list[DendrogramNode]:
    """Leaves of the tree in left-to-right order (the dendrogram's card order)."""
    return [node for node in walk_dendrogram(root) if node.is_leaf]

"""Read study export documents and write analysis results as JSON.

Results use the application's camelCase wire shape so the web client can
consume them unchanged.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic.alias_generators import to_camel

from cardsort.analysis.models import AnalysisResults, DendrogramNode
from cardsort.models import StudyExport


def load_export(path: Path) -> StudyExport:
    """Parse and validate an export document.

    Raises ``pydantic.ValidationError`` for malformed JSON or documents
    that break a session invariant (e.g. a card placed twice).
    """
    return StudyExport.model_validate_json(path.read_text(encoding="utf-8"))


def results_to_dict(results: AnalysisResults) -> dict[str, Any]:
    """Convert results to JSON-ready data with camelCase keys."""
    data = _camelise(asdict(results))
    data["clusterAnalysis"]["root"] = _node_to_dict(results.cluster_analysis.root)
    return data


def write_results(results: AnalysisResults, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(results_to_dict(results), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )


def _node_to_dict(node: DendrogramNode | None) -> dict[str, Any] | None:
    """Leaves carry ``cardId``; internal nodes carry ``children``, never both."""
    if node is None:
        return None
    if node.is_leaf:
        return {"id": node.id, "name": node.name, "cardId": node.card_id, "value": node.value}
    return {
        "id": node.id,
        "name": node.name,
        "children": [_node_to_dict(child) for child in node.children],
        "value": node.value,
    }


def _camelise(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_camel(k): _camelise(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_camelise(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value

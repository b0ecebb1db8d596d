"""Phenotype-phenotype overview graph helpers.

The overview edge list stores precomputed weights per ancestry and p-value
cutoff in columns named ``<ancestry>_<pvalue>_<edge_type>``, for example
``meta_1e-04_same_dir_weight``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from phenonet.errors import MissingWeightColumnError
from phenonet.models import Edge, Node


PVALUE_LABELS: tuple[str, ...] = (
    "1e-12",
    "1e-11",
    "1e-10",
    "1e-09",
    "1e-08",
    "1e-07",
    "1e-06",
    "1e-05",
    "1e-04",
)

DEFAULT_PVALUE_LABEL = "1e-04"

EDGE_TYPES: tuple[str, ...] = ("weight", "same_dir_weight", "diff_dir_weight")


def weight_column(ancestry: str, pvalue_label: str, edge_type: str) -> str:
    if edge_type not in EDGE_TYPES:
        raise ValueError(f"Unknown edge type: {edge_type}. Expected one of {EDGE_TYPES}")
    return f"{ancestry.lower()}_{pvalue_label}_{edge_type}"


def _weight(edge: Edge, column: str) -> float:
    value = edge.metadata.get(column)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    # NaN counts as no weight.
    return number if number == number else 0.0


def _require_columns(edges: Sequence[Edge], columns: Iterable[str]) -> None:
    missing = [
        column
        for column in columns
        if not any(column in edge.metadata for edge in edges)
    ]
    if missing:
        raise MissingWeightColumnError(
            f"Column(s) {', '.join(missing)} do not exist in overview edges."
        )


def edge_weights(
    edges: Sequence[Edge],
    ancestry: str,
    pvalue_label: str,
    edge_type: str = "weight",
) -> list[float]:
    """Stroke weight per edge for the selected ancestry, cutoff and edge type.

    ``weight`` combines the same- and opposite-direction columns.
    """

    if edge_type == "weight":
        same = weight_column(ancestry, pvalue_label, "same_dir_weight")
        diff = weight_column(ancestry, pvalue_label, "diff_dir_weight")
        _require_columns(edges, (same, diff))
        return [_weight(edge, same) + _weight(edge, diff) for edge in edges]

    column = weight_column(ancestry, pvalue_label, edge_type)
    _require_columns(edges, (column,))
    return [_weight(edge, column) for edge in edges]


def overview_degrees(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    ancestry: str,
    pvalue_label: str,
) -> dict[str, int]:
    """Count edges with a non-zero same- or opposite-direction weight."""

    same = weight_column(ancestry, pvalue_label, "same_dir_weight")
    diff = weight_column(ancestry, pvalue_label, "diff_dir_weight")

    degrees = {node.id: 0 for node in nodes}
    for edge in edges:
        if _weight(edge, same) == 0 and _weight(edge, diff) == 0:
            continue
        for node_id in {edge.source, edge.target}:
            if node_id in degrees:
                degrees[node_id] += 1
    return degrees


def filter_by_degree(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    threshold: int,
) -> tuple[list[Node], list[Edge]]:
    """Keep nodes whose static ``degree`` attribute reaches ``threshold``."""

    kept = [node for node in nodes if _static_degree(node) >= threshold]
    kept_ids = {node.id for node in kept}
    return kept, [
        edge
        for edge in edges
        if edge.source in kept_ids and edge.target in kept_ids
    ]


def _static_degree(node: Node) -> float:
    try:
        return float(node.metadata.get("degree", 0))
    except (TypeError, ValueError):
        return 0.0


def max_degree(nodes: Sequence[Node]) -> int:
    """Upper bound for the degree slider."""

    return int(max((_static_degree(node) for node in nodes), default=0))


def search_nodes(nodes: Sequence[Node], query: str) -> list[Node]:
    """Nodes whose label contains ``query`` (case-insensitive)."""

    needle = query.strip().lower()
    if not needle:
        return []
    return [
        node
        for node in nodes
        if needle in str(node.metadata.get("label") or "").lower()
    ]


def neighbors(node_id: str, edges: Iterable[Edge]) -> list[str]:
    """Ids adjacent to ``node_id`` in first-seen order."""

    seen: dict[str, None] = {}
    for edge in edges:
        if edge.touches(node_id):
            seen.setdefault(edge.other(node_id), None)
    return list(seen)

"""Per-node degree counts under the current filters."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from phenonet.models import Edge, Node


def aggregate_degrees(nodes: Sequence[Node], edges: Iterable[Edge]) -> dict[str, int]:
    """Count visible incident edges for every node in ``nodes``.

    Endpoints that are not part of ``nodes`` are ignored.
    """

    degrees = {node.id: 0 for node in nodes}
    for edge in edges:
        if edge.source in degrees:
            degrees[edge.source] += 1
        if edge.target in degrees and edge.target != edge.source:
            degrees[edge.target] += 1
    return degrees

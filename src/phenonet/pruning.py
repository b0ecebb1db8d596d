"""Derive a node set consistent with a filtered edge set."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from phenonet.models import Edge, Node


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityClassifier:
    """Split node ids into primary (SNP-like) and secondary (phenotype) entities."""

    primary_prefix: str = "rs"

    def is_primary(self, node_id: str) -> bool:
        return node_id.startswith(self.primary_prefix)


@dataclass
class PruneResult:
    """Retained nodes and the edges whose endpoints are both retained."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)


class NodePruner:
    """Drop low-degree primary nodes and the secondary nodes they orphan.

    A primary node survives when at least ``min_degree`` filtered edges touch
    it. A secondary node survives when one of its filtered edges reaches a
    surviving primary node. Anchor ids are always retained.
    """

    def __init__(
        self,
        *,
        classifier: EntityClassifier | None = None,
        min_degree: int = 2,
    ) -> None:
        if min_degree < 0:
            raise ValueError(f"min_degree must be >= 0, got {min_degree}")
        self.classifier = classifier or EntityClassifier()
        self.min_degree = min_degree

    def prune(
        self,
        edges: Sequence[Edge],
        nodes: Sequence[Node],
        anchors: Iterable[str] = (),
    ) -> PruneResult:
        anchor_ids = list(dict.fromkeys(anchors))
        anchor_set = set(anchor_ids)

        degree: Counter[str] = Counter()
        for edge in edges:
            degree[edge.source] += 1
            if edge.target != edge.source:
                degree[edge.target] += 1

        primary = [node for node in nodes if self.classifier.is_primary(node.id)]
        secondary = [node for node in nodes if not self.classifier.is_primary(node.id)]

        kept_primary = [
            node
            for node in primary
            if node.id in anchor_set or degree[node.id] >= self.min_degree
        ]
        kept_primary_ids = {node.id for node in kept_primary}

        linked_secondary: set[str] = set()
        for edge in edges:
            if edge.target in kept_primary_ids:
                linked_secondary.add(edge.source)
            if edge.source in kept_primary_ids:
                linked_secondary.add(edge.target)

        kept_secondary = [
            node
            for node in secondary
            if node.id in anchor_set or node.id in linked_secondary
        ]

        kept_nodes = kept_primary + kept_secondary
        kept_ids = {node.id for node in kept_nodes}

        # Anchors missing from the input node set still have to be visible.
        for anchor_id in anchor_ids:
            if anchor_id not in kept_ids:
                kept_nodes.append(Node(id=anchor_id))
                kept_ids.add(anchor_id)

        kept_edges = [
            edge
            for edge in edges
            if edge.source in kept_ids and edge.target in kept_ids
        ]

        logger.debug(
            "Pruned %d -> %d nodes, %d -> %d edges (min_degree=%d, anchors=%s)",
            len(nodes),
            len(kept_nodes),
            len(edges),
            len(kept_edges),
            self.min_degree,
            anchor_ids,
        )
        return PruneResult(nodes=kept_nodes, edges=kept_edges)

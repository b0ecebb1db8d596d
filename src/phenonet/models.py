"""Canonical in-memory data models used by phenonet."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class AncestryStats:
    """Association statistics for one ancestry of one record.

    ``beta`` is the raw signed effect size (``NaN`` when missing) and ``pvalue``
    defaults to ``1.0`` so that unusable rows never pass a p-value cutoff.
    """

    pvalue: float = 1.0
    beta: float = math.nan

    @property
    def direction(self) -> int:
        """Sign of the effect size, ``0`` for zero or missing beta."""

        if math.isnan(self.beta) or self.beta == 0:
            return 0
        return 1 if self.beta > 0 else -1

    @property
    def has_beta(self) -> bool:
        return not math.isnan(self.beta)


@dataclass(frozen=True)
class AssociationRecord:
    """One SNP-phenotype (or phenotype-phenotype) row of the input table.

    Display-only columns are carried untouched in ``metadata``.
    """

    source_id: str
    target_id: str
    stats: Mapping[str, AncestryStats] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def for_ancestry(self, ancestry: str) -> AncestryStats:
        """Return stats for ``ancestry``, or an all-missing placeholder."""

        return self.stats.get(ancestry.lower(), AncestryStats())


@dataclass(frozen=True)
class Node:
    """Graph node keyed by ``id``."""

    id: str
    category: str | None = None
    size: float | None = None
    color: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "size": self.size,
            "color": self.color,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class Edge:
    """Association edge between two node ids.

    ``beta`` holds the absolute effect size and ``direction`` its sign. In
    comparison mode ``pvalue2`` carries the second ancestry's p-value and
    ``direction`` is the product of both signs.
    """

    source: str
    target: str
    beta: float = math.nan
    direction: int = 0
    pvalue: float = 1.0
    pvalue2: float | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def key(self) -> tuple[str, str]:
        return (self.source, self.target)

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def other(self, node_id: str) -> str:
        """Return the endpoint opposite ``node_id``."""

        return self.target if self.source == node_id else self.source

    def to_row(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "beta": None if math.isnan(self.beta) else self.beta,
            "direction": self.direction,
            "pvalue": self.pvalue,
            "pvalue2": self.pvalue2,
            "metadata": dict(self.metadata),
        }


@dataclass
class DerivedGraph:
    """Mutually consistent node/edge sets plus per-node degree counts."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    degrees: dict[str, int] = field(default_factory=dict)

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def is_consistent(self) -> bool:
        """True when every edge endpoint is part of the node set."""

        ids = set(self.node_ids())
        return all(edge.source in ids and edge.target in ids for edge in self.edges)

    def to_payload(self) -> dict[str, Any]:
        """Serialize into a JSON-ready dict for rendering layers."""

        return {
            "nodes": [node.to_row() for node in self.nodes],
            "edges": [edge.to_row() for edge in self.edges],
            "degrees": dict(self.degrees),
        }

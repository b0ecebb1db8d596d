"""Build association networks from records and shape per-page views."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Any

from phenonet.errors import EmptySelectionError
from phenonet.merge import merge_comparative
from phenonet.models import AssociationRecord, Edge, Node
from phenonet.pruning import EntityClassifier


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayColumns:
    """Metadata keys copied onto nodes for display."""

    source_color: str = "rsid_hex"
    target_color: str = "phe_hex"
    target_label: str = "phe_label"
    target_category: str = "phe_cat"
    chromosome: str = "chrom"


DEFAULT_DISPLAY = DisplayColumns()


def _meta_text(metadata: Any, key: str) -> str | None:
    value = metadata.get(key) if metadata else None
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_nodes(
    records: Iterable[AssociationRecord],
    display: DisplayColumns = DEFAULT_DISPLAY,
) -> list[Node]:
    """Collect unique nodes in first-seen order (source node before target)."""

    nodes: dict[str, Node] = {}
    for record in records:
        if record.source_id not in nodes:
            nodes[record.source_id] = Node(
                id=record.source_id,
                color=_meta_text(record.metadata, display.source_color),
                metadata={"chromosome": _meta_text(record.metadata, display.chromosome)},
            )
        if record.target_id not in nodes:
            nodes[record.target_id] = Node(
                id=record.target_id,
                category=_meta_text(record.metadata, display.target_category),
                color=_meta_text(record.metadata, display.target_color),
                metadata={"label": _meta_text(record.metadata, display.target_label)},
            )
    return list(nodes.values())


def build_edges(records: Iterable[AssociationRecord], ancestry: str) -> list[Edge]:
    """One edge per record using the ``ancestry`` statistics."""

    edges: list[Edge] = []
    for record in records:
        stats = record.for_ancestry(ancestry)
        edges.append(
            Edge(
                source=record.source_id,
                target=record.target_id,
                beta=abs(stats.beta),
                direction=stats.direction,
                pvalue=stats.pvalue,
            )
        )
    return edges


def build_comparison_edges(
    records: Sequence[AssociationRecord],
    ancestry: str,
    ancestry2: str,
    *,
    directed: bool = True,
) -> list[Edge]:
    """Edges for ``ancestry`` merged with those of ``ancestry2``."""

    return merge_comparative(
        build_edges(records, ancestry),
        build_edges(records, ancestry2),
        directed=directed,
    )


def available_ancestries(
    records: Iterable[AssociationRecord],
    entity_id: str,
    ancestries: Iterable[str],
) -> list[str]:
    """Ancestries with at least one usable beta among ``entity_id`` rows."""

    rows = [
        record
        for record in records
        if record.target_id == entity_id or record.source_id == entity_id
    ]
    return [
        ancestry
        for ancestry in ancestries
        if any(record.for_ancestry(ancestry).has_beta for record in rows)
    ]


def drop_missing_beta(nodes: Sequence[Node], edges: Sequence[Edge]) -> tuple[list[Node], list[Edge]]:
    """Remove NaN-beta edges and the nodes left without any edge."""

    valid_edges = [edge for edge in edges if not math.isnan(edge.beta)]
    valid_ids: set[str] = set()
    for edge in valid_edges:
        valid_ids.add(edge.source)
        valid_ids.add(edge.target)
    return [node for node in nodes if node.id in valid_ids], valid_edges


class CenterViewBuilder:
    """Shape the network around one inspected phenotype.

    Keeps the ``center_link_limit`` most significant SNPs of the center
    phenotype, then the ``secondary_limit`` best connected other phenotypes
    (each needs more than one edge).
    """

    def __init__(
        self,
        center_id: str,
        *,
        classifier: EntityClassifier | None = None,
        center_link_limit: int = 100,
        secondary_limit: int = 100,
    ) -> None:
        self.center_id = center_id
        self.classifier = classifier or EntityClassifier()
        self.center_link_limit = center_link_limit
        self.secondary_limit = secondary_limit

    def build(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> tuple[list[Node], list[Edge]]:
        nodes, edges = drop_missing_beta(nodes, edges)
        is_primary = self.classifier.is_primary
        center = self.center_id

        center_links = sorted(
            (edge for edge in edges if edge.touches(center)),
            key=lambda edge: edge.pvalue,
        )[: self.center_link_limit]
        top_primary = {edge.other(center) for edge in center_links}

        nodes = [node for node in nodes if node.id in top_primary or not is_primary(node.id)]
        edges = [
            edge
            for edge in edges
            if edge.source in top_primary or edge.target in top_primary
        ]

        degrees: dict[str, int] = {
            node.id: 0
            for node in nodes
            if not is_primary(node.id) and node.id != center
        }
        for edge in edges:
            if edge.source in degrees:
                degrees[edge.source] += 1
            if edge.target in degrees:
                degrees[edge.target] += 1

        ranked = sorted(
            ((node_id, degree) for node_id, degree in degrees.items() if degree > 1),
            key=lambda item: -item[1],
        )[: self.secondary_limit]
        top_secondary = {node_id for node_id, _ in ranked}

        nodes = [
            node
            for node in nodes
            if node.id in top_secondary or is_primary(node.id) or node.id == center
        ]
        edges = [
            edge
            for edge in edges
            if edge.source in top_secondary
            or edge.target in top_secondary
            or edge.touches(center)
        ]

        nodes = [
            replace(node, color=node.color or "gray") if node.id == center else node
            for node in nodes
        ]

        logger.debug(
            "Center view %s: %d SNPs, %d phenotypes, %d edges",
            center,
            len(top_primary),
            len(top_secondary),
            len(edges),
        )
        return nodes, edges


def _chromosome_sort_key(value: str | None) -> tuple[int, float, str]:
    text = (value or "").strip()
    try:
        return (0, float(text), "")
    except ValueError:
        return (1, 0.0, text)


def select_pair_records(
    records: Sequence[AssociationRecord],
    left_id: str,
    right_id: str,
    *,
    limit: int = 100,
    chromosome_key: str = DEFAULT_DISPLAY.chromosome,
) -> list[AssociationRecord]:
    """Rows of two phenotypes restricted to the SNPs they share.

    When more than ``limit`` SNPs are shared they are ordered by chromosome and
    sampled evenly, keeping every ``ceil(n / limit)``-th SNP.
    """

    pair = {left_id, right_id}
    rows = [record for record in records if record.target_id in pair]

    left_snps = list(dict.fromkeys(r.source_id for r in rows if r.target_id == left_id))
    right_snps = {r.source_id for r in rows if r.target_id == right_id}
    common = [snp for snp in left_snps if snp in right_snps]

    if len(common) > limit:
        chromosome: dict[str, str | None] = {}
        for record in rows:
            if record.source_id not in chromosome:
                chromosome[record.source_id] = _meta_text(record.metadata, chromosome_key)
        common.sort(key=lambda snp: _chromosome_sort_key(chromosome.get(snp)))
        step = math.ceil(len(common) / limit)
        common = common[::step]

    logger.debug("Shared SNPs between %s and %s: %d", left_id, right_id, len(common))

    shared = set(common)
    selected = [record for record in rows if record.source_id in shared]
    if not selected:
        raise EmptySelectionError(
            f"No data found for the selected phenotypes ({left_id}, {right_id})."
        )
    return selected


class PairViewBuilder:
    """Keep SNPs that link to at least two distinct phenotypes."""

    def __init__(self, *, classifier: EntityClassifier | None = None, min_phenotypes: int = 2) -> None:
        self.classifier = classifier or EntityClassifier()
        self.min_phenotypes = min_phenotypes

    def build(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> tuple[list[Node], list[Edge]]:
        nodes, edges = drop_missing_beta(nodes, edges)
        is_primary = self.classifier.is_primary

        phenotypes: dict[str, set[str]] = {node.id: set() for node in nodes if is_primary(node.id)}
        for edge in edges:
            if edge.source in phenotypes and not is_primary(edge.target):
                phenotypes[edge.source].add(edge.target)
            if edge.target in phenotypes and not is_primary(edge.source):
                phenotypes[edge.target].add(edge.source)

        kept = {node_id for node_id, linked in phenotypes.items() if len(linked) >= self.min_phenotypes}

        nodes = [node for node in nodes if node.id in kept or not is_primary(node.id)]
        edges = [edge for edge in edges if edge.source in kept or edge.target in kept]
        return nodes, edges

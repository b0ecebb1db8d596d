"""Composable derived-graph pipeline."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from phenonet.config import ThresholdSet
from phenonet.degree import aggregate_degrees
from phenonet.errors import AncestryUnavailableError
from phenonet.filtering import filter_edges
from phenonet.models import AssociationRecord, DerivedGraph
from phenonet.network import (
    CenterViewBuilder,
    PairViewBuilder,
    available_ancestries,
    build_comparison_edges,
    build_edges,
    build_nodes,
    select_pair_records,
)
from phenonet.profiles import NetworkProfile
from phenonet.pruning import NodePruner


logger = logging.getLogger(__name__)


@dataclass
class DerivationReport:
    """Stage-by-stage counts for one derivation pass."""

    ancestries: tuple[str, ...]
    comparison: bool
    input_records: int
    candidate_edges: int
    view_edges: int
    filtered_edges: int
    retained_nodes: int
    retained_edges: int


@dataclass
class DerivationResult:
    graph: DerivedGraph = field(default_factory=DerivedGraph)
    report: DerivationReport | None = None


class DerivedGraphPipeline:
    """Build, shape, filter and prune an association network in order.

    ``anchors`` names the inspected phenotype(s): one id for the center view,
    the left and right ids for the pair view. Anchors stay visible whatever the
    thresholds.
    """

    def __init__(
        self,
        *,
        profile: NetworkProfile,
        records: Sequence[AssociationRecord],
        anchors: Sequence[str],
        pruner: NodePruner | None = None,
    ) -> None:
        if profile.view == "center" and len(anchors) != 1:
            raise ValueError("The center view needs exactly one anchor phenotype.")
        if profile.view == "pair" and len(anchors) != 2:
            raise ValueError("The pair view needs exactly two anchor phenotypes.")

        self.profile = profile
        self.anchors = tuple(anchors)
        self.pruner = pruner or NodePruner(
            classifier=profile.classifier,
            min_degree=profile.min_degree,
        )

        if profile.view == "pair":
            records = select_pair_records(
                records,
                anchors[0],
                anchors[1],
                limit=profile.pair_snp_limit,
                chromosome_key=profile.display_columns.chromosome,
            )
        self.records = list(records)

    def available_ancestries(self) -> list[str]:
        """Profile ancestries with data for every checked anchor phenotype.

        The pair view needs data for both phenotypes, the center view only for
        the center one.
        """

        ancestries = list(self.profile.ancestries)
        for anchor in self._checked_anchors():
            ancestries = available_ancestries(self.records, anchor, ancestries)
        return ancestries

    def _checked_anchors(self) -> tuple[str, ...]:
        return self.anchors if self.profile.view == "pair" else self.anchors[:1]

    def _anchor_without_data(self, ancestry: str) -> str:
        for anchor in self._checked_anchors():
            if not available_ancestries(self.records, anchor, [ancestry]):
                return anchor
        return self.anchors[0]

    def run(self, thresholds: ThresholdSet, ancestries: Sequence[str]) -> DerivationResult:
        selected = tuple(ancestry.lower() for ancestry in ancestries)
        if not 1 <= len(selected) <= 2:
            raise ValueError("Please select one ancestry, or two to compare.")

        available = set(self.available_ancestries())
        for ancestry in selected:
            if ancestry not in available:
                entity_id = self._anchor_without_data(ancestry)
                logger.warning(
                    "Ancestry %s has no beta values for %s; skipping render",
                    ancestry,
                    entity_id,
                )
                raise AncestryUnavailableError(ancestry, entity_id)

        comparison = len(selected) == 2
        if thresholds.comparison != comparison:
            thresholds = thresholds.with_changes(comparison=comparison)

        nodes = build_nodes(self.records, self.profile.display_columns)
        if comparison:
            edges = build_comparison_edges(
                self.records,
                selected[0],
                selected[1],
                directed=self.profile.directed_merge_key,
            )
        else:
            edges = build_edges(self.records, selected[0])
        candidate_edges = len(edges)

        nodes, edges = self._view_builder().build(nodes, edges)
        view_edges = len(edges)

        filtered = filter_edges(edges, thresholds)
        pruned = self.pruner.prune(filtered, nodes, anchors=self.anchors)
        degrees = aggregate_degrees(pruned.nodes, pruned.edges)

        report = DerivationReport(
            ancestries=selected,
            comparison=comparison,
            input_records=len(self.records),
            candidate_edges=candidate_edges,
            view_edges=view_edges,
            filtered_edges=len(filtered),
            retained_nodes=len(pruned.nodes),
            retained_edges=len(pruned.edges),
        )
        logger.info(
            "Derived %s graph for %s (%s): %d nodes, %d edges",
            self.profile.view,
            "/".join(self.anchors),
            "/".join(selected),
            report.retained_nodes,
            report.retained_edges,
        )
        return DerivationResult(
            graph=DerivedGraph(nodes=pruned.nodes, edges=pruned.edges, degrees=degrees),
            report=report,
        )

    def _view_builder(self) -> CenterViewBuilder | PairViewBuilder:
        if self.profile.view == "pair":
            return PairViewBuilder(classifier=self.profile.classifier)
        return CenterViewBuilder(
            self.anchors[0],
            classifier=self.profile.classifier,
            center_link_limit=self.profile.center_link_limit,
            secondary_limit=self.profile.secondary_limit,
        )

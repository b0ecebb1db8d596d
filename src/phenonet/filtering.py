"""Threshold-based edge filtering."""

from __future__ import annotations

from collections.abc import Iterable

from phenonet.config import ThresholdSet
from phenonet.models import Edge


def edge_passes(edge: Edge, thresholds: ThresholdSet) -> bool:
    """Return True when ``edge`` satisfies every active threshold.

    NaN comparisons are always False, so rows with missing beta never pass.
    """

    if not edge.pvalue < thresholds.p_max:
        return False

    p_max2 = thresholds.second_p_max
    if p_max2 is not None:
        if edge.pvalue2 is None or not edge.pvalue2 < p_max2:
            return False

    if not edge.beta > thresholds.beta_min:
        return False

    if thresholds.direction != 0 and edge.direction != thresholds.direction:
        return False

    return True


def filter_edges(edges: Iterable[Edge], thresholds: ThresholdSet) -> list[Edge]:
    """Keep the edges passing ``thresholds``, preserving input order."""

    return [edge for edge in edges if edge_passes(edge, thresholds)]

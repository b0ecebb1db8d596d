"""Merge two ancestry-specific edge lists for comparison mode."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import replace

from phenonet.models import Edge


def merge_key(edge: Edge, *, directed: bool = True) -> tuple[str, str]:
    """Join key for ``edge``.

    Directed keys use literal ``(source, target)`` order; undirected keys sort
    the endpoints so ``(a, b)`` and ``(b, a)`` collide.
    """

    if directed:
        return edge.key()
    return tuple(sorted(edge.key()))  # type: ignore[return-value]


def _max_beta(beta_a: float, beta_b: float) -> float:
    if math.isnan(beta_a) or math.isnan(beta_b):
        return math.nan
    return max(beta_a, beta_b)


def merge_comparative(
    edges_a: Sequence[Edge],
    edges_b: Sequence[Edge],
    *,
    directed: bool = True,
) -> list[Edge]:
    """Return edges present in both lists, in ``edges_a`` order.

    The merged weight is the larger beta, the direction is the product of both
    signs (``+1`` same direction, ``-1`` opposite) and ``pvalue2`` carries the
    p-value from ``edges_b``. Later duplicates in ``edges_b`` win.
    """

    lookup: dict[tuple[str, str], Edge] = {}
    for edge in edges_b:
        lookup[merge_key(edge, directed=directed)] = edge

    merged: list[Edge] = []
    for edge in edges_a:
        match = lookup.get(merge_key(edge, directed=directed))
        if match is None:
            continue
        merged.append(
            replace(
                edge,
                beta=_max_beta(edge.beta, match.beta),
                direction=edge.direction * match.direction,
                pvalue2=match.pvalue,
            )
        )

    return merged

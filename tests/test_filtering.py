import math
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from phenonet import Edge, ThresholdSet, edge_passes, filter_edges, merge_comparative  # noqa: E402


def _edges() -> list[Edge]:
    return [
        Edge(source="rs1", target="p1", beta=0.5, direction=1, pvalue=1e-8),
        Edge(source="rs2", target="p1", beta=0.05, direction=-1, pvalue=1e-6),
        Edge(source="rs3", target="p2", beta=math.nan, direction=0, pvalue=1e-9),
        Edge(source="rs4", target="p2", beta=0.3, direction=-1, pvalue=1e-3),
        Edge(source="rs5", target="p3", beta=0.2, direction=-1, pvalue=1e-5, pvalue2=1e-2),
    ]


def test_filter_keeps_input_order_and_drops_failing_edges() -> None:
    kept = filter_edges(_edges(), ThresholdSet(p_max=1e-4))

    assert [edge.source for edge in kept] == ["rs1", "rs2", "rs5"]


def test_nan_beta_never_passes_even_with_zero_cutoff() -> None:
    edge = _edges()[2]

    assert edge_passes(edge, ThresholdSet(p_max=1.0, beta_min=0.0)) is False


def test_beta_cutoff_is_strict() -> None:
    edge = Edge(source="rs1", target="p1", beta=0.2, direction=1, pvalue=1e-8)

    assert edge_passes(edge, ThresholdSet(p_max=1e-4, beta_min=0.2)) is False
    assert edge_passes(edge, ThresholdSet(p_max=1e-4, beta_min=0.19)) is True


def test_direction_filter_selects_sign() -> None:
    negative = filter_edges(_edges(), ThresholdSet(p_max=1e-4, direction=-1))
    positive = filter_edges(_edges(), ThresholdSet(p_max=1e-4, direction=1))

    assert [edge.source for edge in negative] == ["rs2", "rs5"]
    assert [edge.source for edge in positive] == ["rs1"]


def test_comparison_mode_checks_second_pvalue() -> None:
    edges = [
        Edge(source="rs1", target="p1", beta=0.5, direction=1, pvalue=1e-8, pvalue2=1e-7),
        Edge(source="rs2", target="p1", beta=0.5, direction=1, pvalue=1e-8, pvalue2=1e-2),
        Edge(source="rs3", target="p1", beta=0.5, direction=1, pvalue=1e-8),
    ]
    thresholds = ThresholdSet(p_max=1e-4, p_max2=1e-4, comparison=True)

    assert [edge.source for edge in filter_edges(edges, thresholds)] == ["rs1"]

    # Without comparison mode the second cutoff is ignored.
    single = thresholds.with_changes(comparison=False)
    assert len(filter_edges(edges, single)) == 3


def test_missing_second_pvalue_fails_without_second_cutoff() -> None:
    first = [
        Edge(source="rs1", target="100", beta=0.5, direction=1, pvalue=1e-6),
        Edge(source="rs2", target="100", beta=0.4, direction=1, pvalue=1e-7),
    ]
    second = [
        Edge(source="rs1", target="100", beta=0.2, direction=1, pvalue=1.0),
        Edge(source="rs2", target="100", beta=0.2, direction=1, pvalue=0.5),
    ]
    merged = merge_comparative(first, second)

    kept = filter_edges(merged, ThresholdSet(comparison=True))

    assert [edge.source for edge in kept] == ["rs2"]


def test_filter_is_idempotent() -> None:
    thresholds = ThresholdSet(p_max=1e-4, beta_min=0.1)
    edges = _edges()

    first = filter_edges(edges, thresholds)
    second = filter_edges(edges, thresholds)

    assert first == second
    assert filter_edges(first, thresholds) == first


def test_tightening_pvalue_never_grows_the_edge_set() -> None:
    sizes = [
        len(filter_edges(_edges(), ThresholdSet.from_exponents(exponent)))
        for exponent in (-2, -4, -6, -8, -10)
    ]

    assert sizes == sorted(sizes, reverse=True)


def test_tightening_beta_never_grows_the_edge_set() -> None:
    sizes = [
        len(filter_edges(_edges(), ThresholdSet(p_max=1.0, beta_min=beta)))
        for beta in (0.0, 0.1, 0.25, 0.4, 0.9)
    ]

    assert sizes == sorted(sizes, reverse=True)
    assert sizes[0] == 4
    assert sizes[-1] == 0

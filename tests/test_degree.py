import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from phenonet import Edge, Node, aggregate_degrees  # noqa: E402


def test_single_edge_counts_for_both_endpoints() -> None:
    nodes = [Node(id="p1"), Node(id="p2")]

    assert aggregate_degrees(nodes, [Edge(source="p1", target="p2")]) == {"p1": 1, "p2": 1}


def test_no_edges_reports_zero_for_every_node() -> None:
    nodes = [Node(id="p1"), Node(id="p2")]

    assert aggregate_degrees(nodes, []) == {"p1": 0, "p2": 0}


def test_unknown_endpoints_are_ignored() -> None:
    nodes = [Node(id="rs1"), Node(id="p1")]
    edges = [
        Edge(source="rs1", target="p1"),
        Edge(source="rs1", target="p9"),
        Edge(source="rs7", target="p1"),
    ]

    assert aggregate_degrees(nodes, edges) == {"rs1": 2, "p1": 2}

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from phenonet import Edge, MissingWeightColumnError, Node  # noqa: E402
from phenonet.overview import (  # noqa: E402
    edge_weights,
    filter_by_degree,
    max_degree,
    neighbors,
    overview_degrees,
    search_nodes,
    weight_column,
)


def _nodes() -> list[Node]:
    return [
        Node(id="p1", metadata={"label": "Atrial fibrillation", "degree": 3.0}),
        Node(id="p2", metadata={"label": "Heart failure", "degree": 1.0}),
        Node(id="p3", metadata={"label": "Atrial flutter", "degree": 2.0}),
    ]


def _edges() -> list[Edge]:
    return [
        Edge(
            source="p1",
            target="p2",
            metadata={"meta_1e-04_same_dir_weight": 0.5, "meta_1e-04_diff_dir_weight": 0.0},
        ),
        Edge(
            source="p1",
            target="p3",
            metadata={"meta_1e-04_same_dir_weight": 0.0, "meta_1e-04_diff_dir_weight": 0.25},
        ),
        Edge(
            source="p2",
            target="p3",
            metadata={"meta_1e-04_same_dir_weight": 0.0, "meta_1e-04_diff_dir_weight": None},
        ),
    ]


def test_weight_column_name() -> None:
    assert weight_column("META", "1e-08", "diff_dir_weight") == "meta_1e-08_diff_dir_weight"

    with pytest.raises(ValueError):
        weight_column("meta", "1e-08", "unknown")


def test_combined_weight_sums_both_directions() -> None:
    assert edge_weights(_edges(), "meta", "1e-04") == [0.5, 0.25, 0.0]
    assert edge_weights(_edges(), "meta", "1e-04", "same_dir_weight") == [0.5, 0.0, 0.0]


def test_missing_weight_columns_raise() -> None:
    with pytest.raises(MissingWeightColumnError):
        edge_weights(_edges(), "eur", "1e-04")


def test_overview_degrees_count_weighted_edges_only() -> None:
    assert overview_degrees(_nodes(), _edges(), "meta", "1e-04") == {"p1": 2, "p2": 1, "p3": 1}


def test_filter_by_static_degree() -> None:
    nodes, edges = filter_by_degree(_nodes(), _edges(), 2)

    assert [node.id for node in nodes] == ["p1", "p3"]
    assert [edge.key() for edge in edges] == [("p1", "p3")]
    assert max_degree(_nodes()) == 3


def test_search_is_case_insensitive_substring() -> None:
    assert [node.id for node in search_nodes(_nodes(), "ATRIAL")] == ["p1", "p3"]
    assert search_nodes(_nodes(), "   ") == []


def test_neighbors_in_first_seen_order() -> None:
    assert neighbors("p3", _edges()) == ["p1", "p2"]
    assert neighbors("p9", _edges()) == []

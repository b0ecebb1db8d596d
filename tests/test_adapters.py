import csv
import math
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from phenonet import NetworkProfile  # noqa: E402
from phenonet.adapters import (  # noqa: E402
    AssociationTableAdapter,
    OverviewTableAdapter,
    ancestry_columns,
    expand_input_paths,
)


def _write_csv(path: Path, rows: list[dict[str, object]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as stream:
        writer = csv.DictWriter(stream, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)


def _row(rsid: str, phe_id: str, beta: str, pval: str) -> dict[str, object]:
    return {
        "rsid": rsid,
        "phe_id": phe_id,
        "phe_label": "Atrial fibrillation",
        "phe_cat": "circulatory",
        "phe_hex": "#aa0000",
        "rsid_hex": "#999999",
        "chrom": "7",
        "beta.meta": beta,
        "pval.meta": pval,
        "beta.EUR": "",
        "pval.EUR": "NA",
    }


def test_ancestry_columns_detects_labels() -> None:
    assert ancestry_columns(["rsid", "beta.meta", "pval.meta", "pval.AFR", "beta."]) == ["meta", "afr"]


def test_association_adapter_normalizes_missing_values(tmp_path: Path) -> None:
    path = tmp_path / "427.csv"
    _write_csv(
        path,
        [
            _row("rs1", "427", "-0.25", "3e-9"),
            _row("rs2", "427", "not-a-number", ""),
            _row("", "427", "0.1", "1e-5"),
        ],
    )

    adapter = AssociationTableAdapter(input_paths=path)
    records = list(adapter.read())

    assert len(records) == 2
    assert adapter.skipped_rows == 1

    first, second = records
    assert first.source_id == "rs1"
    assert first.target_id == "427"
    assert first.for_ancestry("meta").beta == -0.25
    assert first.for_ancestry("meta").pvalue == 3e-9
    assert first.for_ancestry("meta").direction == -1
    assert math.isnan(first.for_ancestry("eur").beta)
    assert first.for_ancestry("eur").pvalue == 1.0
    assert first.metadata["phe_label"] == "Atrial fibrillation"
    assert "beta.meta" not in first.metadata

    assert math.isnan(second.for_ancestry("meta").beta)
    assert second.for_ancestry("meta").pvalue == 1.0


def test_for_entity_reads_split_files(tmp_path: Path) -> None:
    _write_csv(tmp_path / "181_1.csv", [_row("rs1", "181", "0.1", "1e-6")])
    _write_csv(tmp_path / "181_2.csv", [_row("rs2", "181", "0.2", "1e-7")])
    profile = NetworkProfile(name="test", view="center", split_entities=("181",))

    records = list(AssociationTableAdapter.for_entity(tmp_path, "181", profile).read())

    assert [record.source_id for record in records] == ["rs1", "rs2"]


def test_for_entity_missing_file_raises(tmp_path: Path) -> None:
    profile = NetworkProfile(name="test", view="center")

    with pytest.raises(FileNotFoundError):
        AssociationTableAdapter.for_entity(tmp_path, "999", profile)


def test_overview_adapter_maps_known_columns(tmp_path: Path) -> None:
    nodes_csv = tmp_path / "node_attributes.csv"
    edges_csv = tmp_path / "edgelist.csv"
    _write_csv(
        nodes_csv,
        [
            {
                "id": "427",
                "x": "10.5",
                "y": "-3",
                "size": "4",
                "label": "Atrial fibrillation",
                "hex": "#ff0000",
                "phenotype_category": "circulatory",
                "degree": "12",
            }
        ],
    )
    _write_csv(
        edges_csv,
        [{"source": "427", "target": "428", "meta_1e-04_same_dir_weight": "0.5", "note": "x"}],
    )

    adapter = OverviewTableAdapter(nodes_csv=nodes_csv, edges_csv=edges_csv)
    nodes = adapter.read_nodes()
    edges = adapter.read_edges()

    assert nodes[0].id == "427"
    assert nodes[0].category == "circulatory"
    assert nodes[0].size == 4.0
    assert nodes[0].color == "#ff0000"
    assert nodes[0].metadata["degree"] == 12.0
    assert nodes[0].metadata["x"] == 10.5
    assert nodes[0].metadata["label"] == "Atrial fibrillation"

    assert edges[0].key() == ("427", "428")
    assert edges[0].metadata["meta_1e-04_same_dir_weight"] == 0.5
    assert edges[0].metadata["note"] == "x"


def test_expand_input_paths_keeps_explicit_order_and_sorts_directories(tmp_path: Path) -> None:
    for name in ("b.csv", "a.csv", "notes.txt"):
        (tmp_path / name).write_text("rsid,phe_id\n")

    assert expand_input_paths([tmp_path / "b.csv", tmp_path / "a.csv"]) == [tmp_path / "b.csv", tmp_path / "a.csv"]
    assert expand_input_paths(tmp_path) == [tmp_path / "a.csv", tmp_path / "b.csv"]
    assert expand_input_paths(str(tmp_path / "*.csv")) == [tmp_path / "a.csv", tmp_path / "b.csv"]

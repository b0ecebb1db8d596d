"""Adapter for the phenotype-phenotype overview graph tables."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from phenonet.adapters.common import TabularAdapterMixin
from phenonet.models import Edge, Node


NODE_FIELD_COLUMNS: dict[str, str] = {
    "id": "id",
    "phenotype_category": "category",
    "size": "size",
    "hex": "color",
}


class OverviewTableAdapter(TabularAdapterMixin):
    """Read ``node_attributes.csv`` and the overview edge list.

    Known columns map onto node fields; every other column, including the
    precomputed per-ancestry weight columns, lands in ``metadata`` with numeric
    strings converted to floats.
    """

    name = "overview_table"

    def __init__(self, *, nodes_csv: str | Path, edges_csv: str | Path) -> None:
        self.nodes_csv = Path(nodes_csv)
        self.edges_csv = Path(edges_csv)

    def read_nodes(self) -> list[Node]:
        nodes: list[Node] = []
        for row in self._rows(self.nodes_csv):
            node_id = self._to_string(row.get("id"))
            if not node_id:
                continue
            metadata = {
                key: self._to_scalar(value)
                for key, value in row.items()
                if key not in NODE_FIELD_COLUMNS
            }
            nodes.append(
                Node(
                    id=node_id,
                    category=self._to_string(row.get("phenotype_category")),
                    size=self._to_float(row.get("size")),
                    color=self._to_string(row.get("hex")),
                    metadata=metadata,
                )
            )
        return nodes

    def read_edges(self) -> list[Edge]:
        edges: list[Edge] = []
        for row in self._rows(self.edges_csv):
            source = self._to_string(row.get("source"))
            target = self._to_string(row.get("target"))
            if not source or not target:
                continue
            metadata = {
                key: self._to_scalar(value)
                for key, value in row.items()
                if key not in ("source", "target")
            }
            edges.append(Edge(source=source, target=target, metadata=metadata))
        return edges

    @staticmethod
    def _rows(path: Path) -> list[dict[str, Any]]:
        if not path.exists():
            raise FileNotFoundError(f"Overview table not found: {path}")
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
        return frame.to_dict(orient="records")

#!/usr/bin/env python3
"""Report per-phenotype degrees of the overview graph under one filter setting."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from phenonet.adapters import OverviewTableAdapter  # noqa: E402
from phenonet.errors import MissingWeightColumnError  # noqa: E402
from phenonet.overview import (  # noqa: E402
    DEFAULT_PVALUE_LABEL,
    EDGE_TYPES,
    PVALUE_LABELS,
    edge_weights,
    filter_by_degree,
    max_degree,
    neighbors,
    overview_degrees,
    search_nodes,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute overview graph degrees")
    parser.add_argument("--nodes-csv", required=True, help="node_attributes.csv path")
    parser.add_argument("--edges-csv", required=True, help="Overview edge list CSV path")
    parser.add_argument("--ancestry", default="meta")
    parser.add_argument("--pvalue", default=DEFAULT_PVALUE_LABEL, choices=PVALUE_LABELS)
    parser.add_argument("--edge-type", default="weight", choices=EDGE_TYPES)
    parser.add_argument(
        "--min-degree",
        type=int,
        default=0,
        help="Hide phenotypes whose precomputed degree is below this value.",
    )
    parser.add_argument(
        "--search",
        default=None,
        help="Report phenotypes whose label contains this text, with their neighbours.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("phenonet.overview")

    adapter = OverviewTableAdapter(nodes_csv=args.nodes_csv, edges_csv=args.edges_csv)
    all_nodes = adapter.read_nodes()
    nodes, edges = filter_by_degree(all_nodes, adapter.read_edges(), args.min_degree)

    try:
        weights = edge_weights(edges, args.ancestry, args.pvalue, args.edge_type)
    except MissingWeightColumnError as exc:
        logger.error("%s", exc)
        return 1

    degrees = overview_degrees(nodes, edges, args.ancestry, args.pvalue)
    payload = {
        "ancestry": args.ancestry,
        "pvalue": args.pvalue,
        "edge_type": args.edge_type,
        "nodes": len(nodes),
        "weighted_edges": sum(1 for weight in weights if weight != 0),
        "max_degree": max_degree(all_nodes),
        "degrees": degrees,
    }
    if args.search:
        payload["matches"] = [
            {
                "id": node.id,
                "label": node.metadata.get("label"),
                "neighbors": neighbors(node.id, edges),
            }
            for node in search_nodes(nodes, args.search)
        ]
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""Derive a filtered association graph for one or two phenotypes."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from phenonet import (  # noqa: E402
    AncestryUnavailableError,
    DerivedGraphPipeline,
    EmptySelectionError,
    NetworkProfileLoader,
    ThresholdSet,
    parse_pvalue_exponent,
)
from phenonet.adapters import AssociationTableAdapter  # noqa: E402
from phenonet.publishers import JsonGraphPublisher  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Filter phenotype-association node files into a derived graph payload."
    )
    parser.add_argument("--data-dir", required=True, help="Directory holding <phenotype>.csv node files")
    parser.add_argument(
        "--entity",
        action="append",
        required=True,
        help="Phenotype id to inspect. Pass twice (left, right) for pair profiles.",
    )
    parser.add_argument(
        "--profile",
        default="center_phenotype",
        help="Network profile name from config/profiles",
    )
    parser.add_argument(
        "--profile-path",
        default=None,
        help="Optional explicit profile JSON path (overrides --profile)",
    )
    parser.add_argument("--profiles-dir", default=None, help="Optional custom profile directory")
    parser.add_argument(
        "--ancestry",
        action="append",
        default=None,
        help="Ancestry label (beta.<ancestry> column). Pass twice to compare two ancestries.",
    )
    parser.add_argument(
        "--pvalue",
        default="-4",
        help="P-value cutoff as an exponent (-4) or a value (1e-4).",
    )
    parser.add_argument(
        "--pvalue2",
        default=None,
        help="Cutoff for the second ancestry in comparison mode (defaults to --pvalue).",
    )
    parser.add_argument("--beta", type=float, default=0.0, help="Absolute beta cutoff in [0, 1].")
    parser.add_argument(
        "--direction",
        type=int,
        choices=(-1, 0, 1),
        default=0,
        help="Keep only edges with this effect direction (0 disables the filter).",
    )
    parser.add_argument(
        "--output-root",
        default=None,
        help="Write the derived graph JSON under this directory.",
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
    logger = logging.getLogger("phenonet.derive_graph")

    profile_loader = NetworkProfileLoader(args.profiles_dir)
    profile = profile_loader.load(args.profile_path if args.profile_path else args.profile)

    ancestries = args.ancestry or [profile.default_ancestry]
    p_exponent = parse_pvalue_exponent(args.pvalue)
    p_exponent2 = parse_pvalue_exponent(args.pvalue2) if args.pvalue2 else p_exponent
    thresholds = ThresholdSet.from_exponents(
        p_exponent,
        beta_min=args.beta,
        direction=args.direction,
        p_exponent2=p_exponent2,
        comparison=len(ancestries) == 2,
    )

    adapter = AssociationTableAdapter.for_entity(args.data_dir, args.entity[0], profile)
    records = list(adapter.read())
    logger.info("Number of rows: %d (skipped %d)", len(records), adapter.skipped_rows)

    try:
        pipeline = DerivedGraphPipeline(profile=profile, records=records, anchors=args.entity)
        result = pipeline.run(thresholds, ancestries)
    except (AncestryUnavailableError, EmptySelectionError) as exc:
        logger.error("%s", exc)
        return 1

    report = result.report
    payload = {
        "profile": profile.name,
        "entities": args.entity,
        "ancestries": list(report.ancestries),
        "comparison": report.comparison,
        "input_records": report.input_records,
        "filtered_edges": report.filtered_edges,
        "nodes": report.retained_nodes,
        "edges": report.retained_edges,
    }

    if args.output_root:
        publisher = JsonGraphPublisher(output_root=args.output_root)
        payload["output_json"] = str(
            publisher.publish(result.graph, view=profile.view, entity_id="_".join(args.entity))
        )

    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Core phenonet primitives.

This package derives filtered phenotype-association graphs from flat
association tables: threshold filtering, comparison-mode merging, node pruning
and degree aggregation, plus the loaders and publishers around them.
"""

from .config import BASE_ANCESTRIES, ThresholdSet, parse_pvalue_exponent
from .controller import Debouncer, GraphController
from .degree import aggregate_degrees
from .errors import (
    AncestryUnavailableError,
    EmptySelectionError,
    MissingWeightColumnError,
    PhenonetError,
    ProfileValidationError,
)
from .filtering import edge_passes, filter_edges
from .merge import merge_comparative
from .models import AncestryStats, AssociationRecord, DerivedGraph, Edge, Node
from .network import (
    CenterViewBuilder,
    DisplayColumns,
    PairViewBuilder,
    available_ancestries,
    build_comparison_edges,
    build_edges,
    build_nodes,
    select_pair_records,
)
from .pipeline import DerivationReport, DerivationResult, DerivedGraphPipeline
from .profiles import NetworkProfile, NetworkProfileLoader
from .pruning import EntityClassifier, NodePruner, PruneResult

__all__ = [
    "AncestryStats",
    "AssociationRecord",
    "AncestryUnavailableError",
    "BASE_ANCESTRIES",
    "CenterViewBuilder",
    "Debouncer",
    "DerivationReport",
    "DerivationResult",
    "DerivedGraph",
    "DerivedGraphPipeline",
    "DisplayColumns",
    "Edge",
    "EmptySelectionError",
    "EntityClassifier",
    "GraphController",
    "MissingWeightColumnError",
    "NetworkProfile",
    "NetworkProfileLoader",
    "Node",
    "NodePruner",
    "PairViewBuilder",
    "PhenonetError",
    "ProfileValidationError",
    "PruneResult",
    "ThresholdSet",
    "aggregate_degrees",
    "available_ancestries",
    "build_comparison_edges",
    "build_edges",
    "build_nodes",
    "edge_passes",
    "filter_edges",
    "merge_comparative",
    "parse_pvalue_exponent",
    "select_pair_records",
]

"""Input adapters for phenonet."""

from .association_table import AssociationTableAdapter
from .base import RecordAdapter
from .common import TabularAdapterMixin, ancestry_columns, expand_input_paths
from .overview_table import OverviewTableAdapter

__all__ = [
    "RecordAdapter",
    "AssociationTableAdapter",
    "OverviewTableAdapter",
    "TabularAdapterMixin",
    "ancestry_columns",
    "expand_input_paths",
]

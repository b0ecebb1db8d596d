"""phenonet output publishers."""

from .base import Publisher
from .json_graph import JsonGraphPublisher

__all__ = [
    "Publisher",
    "JsonGraphPublisher",
]

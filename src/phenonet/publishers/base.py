"""Publisher interface for phenonet outputs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from phenonet.models import DerivedGraph


class Publisher(ABC):
    """Publishes derived graphs into consumer-facing artifacts."""

    @abstractmethod
    def publish(self, graph: DerivedGraph, *, view: str, entity_id: str) -> Path:
        """Publish one derived graph and return the written location."""

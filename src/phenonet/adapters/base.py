"""Base interface for phenonet input adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from phenonet.models import AssociationRecord


class RecordAdapter(ABC):
    """Adapter that converts a source table into association records."""

    name: str

    @abstractmethod
    def read(self) -> Iterable[AssociationRecord]:
        """Yield association records from the adapter source."""

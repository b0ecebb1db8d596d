"""Adapter for per-phenotype SNP association node files."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from phenonet.adapters.base import RecordAdapter
from phenonet.adapters.common import (
    BETA_PREFIX,
    PVALUE_PREFIX,
    TabularAdapterMixin,
    ancestry_columns,
    expand_input_paths,
)
from phenonet.models import AncestryStats, AssociationRecord
from phenonet.profiles import NetworkProfile


logger = logging.getLogger(__name__)


class AssociationTableAdapter(TabularAdapterMixin, RecordAdapter):
    """Read ``rsid``/``phe_id`` rows with ``beta.<ancestry>``/``pval.<ancestry>`` columns.

    Missing or non-numeric betas become ``NaN`` and missing p-values ``1.0``, so
    unusable rows are excluded later by the threshold filter rather than here.
    """

    name = "association_table"

    def __init__(
        self,
        *,
        input_paths: str | Path | Iterable[str | Path],
        source_column: str = "rsid",
        target_column: str = "phe_id",
        chunksize: int = 100_000,
    ) -> None:
        self.input_paths = expand_input_paths(input_paths)
        self.source_column = source_column
        self.target_column = target_column
        self.chunksize = chunksize
        self.skipped_rows = 0

    @classmethod
    def for_entity(
        cls,
        data_dir: str | Path,
        entity_id: str,
        profile: NetworkProfile,
        *,
        chunksize: int = 100_000,
    ) -> "AssociationTableAdapter":
        """Adapter over the node file(s) of one phenotype."""

        paths = profile.entity_files(data_dir, entity_id)
        missing = [str(path) for path in paths if not path.exists()]
        if missing:
            raise FileNotFoundError(f"Node file(s) not found for {entity_id}: {', '.join(missing)}")

        return cls(
            input_paths=paths,
            source_column=profile.source_column,
            target_column=profile.target_column,
            chunksize=chunksize,
        )

    def read(self) -> Iterable[AssociationRecord]:
        if not self.input_paths:
            raise FileNotFoundError("No association CSV files matched the configured input paths.")

        for path in self.input_paths:
            logger.debug("Reading association rows from %s", path)
            frame_iter = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                chunksize=self.chunksize,
            )
            for frame in frame_iter:
                ancestries = ancestry_columns(frame.columns)
                for row in frame.to_dict(orient="records"):
                    record = self._to_record(row, ancestries)
                    if record is None:
                        self.skipped_rows += 1
                        continue
                    yield record

    def _to_record(self, row: Mapping[str, Any], ancestries: list[str]) -> AssociationRecord | None:
        source_id = self._to_string(row.get(self.source_column))
        target_id = self._to_string(row.get(self.target_column))
        if not source_id or not target_id:
            return None

        lowered = {str(key).lower(): value for key, value in row.items()}
        stats: dict[str, AncestryStats] = {}
        for ancestry in ancestries:
            beta = self._to_float(self._column(lowered, BETA_PREFIX, ancestry))
            pvalue = self._to_float(self._column(lowered, PVALUE_PREFIX, ancestry))
            stats[ancestry] = AncestryStats(
                pvalue=1.0 if pvalue is None else pvalue,
                beta=math.nan if beta is None else beta,
            )

        metadata = {
            key: self._to_string(value)
            for key, value in row.items()
            if key not in (self.source_column, self.target_column)
            and not str(key).lower().startswith((BETA_PREFIX, PVALUE_PREFIX))
        }

        return AssociationRecord(
            source_id=source_id,
            target_id=target_id,
            stats=stats,
            metadata=metadata,
        )

    @staticmethod
    def _column(row: Mapping[str, Any], prefix: str, ancestry: str) -> Any:
        return row.get(f"{prefix}{ancestry}")

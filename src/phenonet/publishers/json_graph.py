"""JSON publisher for derived graphs."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from phenonet.models import DerivedGraph
from phenonet.publishers.base import Publisher


class JsonGraphPublisher(Publisher):
    """Write ``<output_root>/<view>/<entity_id>.json`` payloads for the renderer."""

    def __init__(self, *, output_root: str | Path, indent: int | None = 4) -> None:
        self.output_root = Path(output_root)
        self.indent = indent

    def publish(self, graph: DerivedGraph, *, view: str, entity_id: str) -> Path:
        view_dir = self.output_root / view
        view_dir.mkdir(parents=True, exist_ok=True)

        path = view_dir / f"{self._safe_name(entity_id)}.json"
        with path.open("w") as stream:
            json.dump(self._clean(graph.to_payload()), stream, indent=self.indent)
        return path

    @staticmethod
    def _safe_name(entity_id: str) -> str:
        return entity_id.replace("/", "-")

    def _clean(self, value: Any) -> Any:
        # json.dump would emit NaN literals, which browsers reject.
        if isinstance(value, float) and math.isnan(value):
            return None
        if isinstance(value, dict):
            return {key: self._clean(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._clean(item) for item in value]
        return value

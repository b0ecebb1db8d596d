"""Network profile loader for phenonet views."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema.validators import validator_for

from phenonet.config import BASE_ANCESTRIES, DEFAULT_ANCESTRY
from phenonet.errors import ProfileValidationError
from phenonet.network import DisplayColumns
from phenonet.pruning import EntityClassifier


REPO_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_SCHEMA_PATH = REPO_ROOT / "schemas" / "network_profile.schema.json"


@dataclass(frozen=True)
class NetworkProfile:
    """Column layout and view limits for one kind of association page."""

    name: str
    view: str
    description: str = ""
    source_column: str = "rsid"
    target_column: str = "phe_id"
    primary_prefix: str = "rs"
    ancestries: tuple[str, ...] = BASE_ANCESTRIES
    default_ancestry: str = DEFAULT_ANCESTRY
    min_degree: int = 2
    center_link_limit: int = 100
    secondary_limit: int = 100
    pair_snp_limit: int = 100
    debounce_seconds: float = 0.2
    directed_merge_key: bool = True
    split_entities: tuple[str, ...] = ()
    display_columns: DisplayColumns = field(default_factory=DisplayColumns)

    @property
    def classifier(self) -> EntityClassifier:
        return EntityClassifier(primary_prefix=self.primary_prefix)

    def entity_files(self, data_dir: str | Path, entity_id: str) -> list[Path]:
        """CSV files holding the rows of ``entity_id``.

        Large entities are stored in two chunks, ``<id>_1.csv`` and ``<id>_2.csv``.
        """

        root = Path(data_dir)
        if entity_id in self.split_entities:
            return [root / f"{entity_id}_1.csv", root / f"{entity_id}_2.csv"]
        return [root / f"{entity_id}.csv"]


class NetworkProfileLoader:
    """Load profile JSON from ``config/profiles`` or a custom path."""

    def __init__(
        self,
        profiles_dir: str | Path | None = None,
        *,
        schema_path: str | Path | None = None,
    ) -> None:
        if profiles_dir is None:
            profiles_dir = REPO_ROOT / "config" / "profiles"
        self.profiles_dir = Path(profiles_dir)
        self.schema_path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH
        self._validator: Any = None

    def list_profiles(self) -> list[str]:
        """Return available profile names from the configured profile directory."""

        return sorted(path.stem for path in self.profiles_dir.glob("*.json"))

    def load(self, name_or_path: str | Path) -> NetworkProfile:
        """Load a profile by name (for example, ``center_phenotype``) or explicit path."""

        path = self._resolve_path(name_or_path)
        payload = json.loads(path.read_text())
        self._validate(payload, path)
        return self._parse(payload)

    def _resolve_path(self, name_or_path: str | Path) -> Path:
        requested = Path(name_or_path)

        if requested.exists():
            return requested

        candidate = self.profiles_dir / f"{requested}.json"
        if candidate.exists():
            return candidate

        raise FileNotFoundError(
            f"Profile not found: {name_or_path}. Available: {', '.join(self.list_profiles())}"
        )

    def _compile_validator(self) -> Any:
        if self._validator is None:
            schema = json.loads(self.schema_path.read_text())
            Validator = validator_for(schema)
            Validator.check_schema(schema)
            self._validator = Validator(schema)
        return self._validator

    def _validate(self, payload: Any, path: Path) -> None:
        validator = self._compile_validator()
        errors = sorted(validator.iter_errors(payload), key=lambda err: [str(p) for p in err.path])
        if errors:
            messages = [
                f"{err.message} (path=/{'/'.join(str(p) for p in err.path)})"
                for err in errors
            ]
            raise ProfileValidationError(str(path), messages)

    def _parse(self, payload: dict[str, Any]) -> NetworkProfile:
        ancestries = tuple(
            str(item).strip().lower()
            for item in payload.get("ancestries", BASE_ANCESTRIES)
        )
        default_ancestry = str(payload.get("default_ancestry", DEFAULT_ANCESTRY)).strip().lower()
        if default_ancestry not in ancestries:
            raise ProfileValidationError(
                str(payload.get("name")),
                [f"default_ancestry {default_ancestry!r} is not listed in ancestries"],
            )

        return NetworkProfile(
            name=str(payload["name"]),
            view=str(payload["view"]),
            description=str(payload.get("description", "")),
            source_column=str(payload.get("source_column", "rsid")),
            target_column=str(payload.get("target_column", "phe_id")),
            primary_prefix=str(payload.get("primary_prefix", "rs")),
            ancestries=ancestries,
            default_ancestry=default_ancestry,
            min_degree=int(payload.get("min_degree", 2)),
            center_link_limit=int(payload.get("center_link_limit", 100)),
            secondary_limit=int(payload.get("secondary_limit", 100)),
            pair_snp_limit=int(payload.get("pair_snp_limit", 100)),
            debounce_seconds=float(payload.get("debounce_seconds", 0.2)),
            directed_merge_key=bool(payload.get("directed_merge_key", True)),
            split_entities=tuple(str(item) for item in payload.get("split_entities", ())),
            display_columns=DisplayColumns(**payload.get("display_columns", {})),
        )

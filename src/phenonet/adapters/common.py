"""Shared utilities for tabular source adapters."""

from __future__ import annotations

import glob
from pathlib import Path
from typing import Any, Iterable

import pandas as pd


BETA_PREFIX = "beta."
PVALUE_PREFIX = "pval."

NODE_FILE_SUFFIXES: tuple[str, ...] = (".csv", ".csv.gz")


def expand_input_paths(input_paths: str | Path | Iterable[str | Path]) -> list[Path]:
    """Resolve node files from explicit paths, directories or glob patterns.

    Explicit paths keep their order (split entities rely on it); directory and
    glob matches are sorted by name.
    """

    if isinstance(input_paths, (str, Path)):
        input_paths = [input_paths]

    resolved: list[Path] = []
    for item in input_paths:
        path = Path(item).expanduser()
        if path.is_file():
            resolved.append(path)
        elif path.is_dir():
            resolved.extend(_node_files(path.iterdir()))
        else:
            resolved.extend(_node_files(Path(match) for match in glob.glob(str(path))))
    return resolved


def _node_files(paths: Iterable[Path]) -> list[Path]:
    return sorted(
        path
        for path in paths
        if path.is_file() and path.name.lower().endswith(NODE_FILE_SUFFIXES)
    )


def ancestry_columns(columns: Iterable[str]) -> list[str]:
    """Ancestry labels that have a ``beta.<ancestry>`` or ``pval.<ancestry>`` column."""

    labels: dict[str, None] = {}
    for column in columns:
        for prefix in (BETA_PREFIX, PVALUE_PREFIX):
            lowered = str(column).lower()
            if lowered.startswith(prefix) and len(lowered) > len(prefix):
                labels.setdefault(lowered[len(prefix):], None)
    return list(labels)


class TabularAdapterMixin:
    """Common conversions for CSV-based source adapters."""

    @staticmethod
    def _to_string(value: Any) -> str | None:
        if value is None or pd.isna(value):
            return None

        cleaned = str(value).strip()
        if not cleaned or cleaned.lower() in {"nan", "none", "null", "na"}:
            return None

        return cleaned

    @staticmethod
    def _to_float(value: Any) -> float | None:
        if TabularAdapterMixin._to_string(value) is None:
            return None

        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return None if pd.isna(number) else number

    @staticmethod
    def _to_scalar(value: Any) -> Any:
        """Numeric strings become floats; everything else stays as cleaned text."""

        text = TabularAdapterMixin._to_string(value)
        if text is None:
            return None
        number = TabularAdapterMixin._to_float(text)
        return text if number is None else number

"""Threshold contracts and shared constants for phenonet."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any


BASE_ANCESTRIES: tuple[str, ...] = ("amr", "eas", "afr", "eur", "meta")

DEFAULT_ANCESTRY = "meta"

# Loosest p-value cutoff of the association pages, as a base-10 exponent.
MAX_P_EXPONENT = -4.0

DIRECTIONS: tuple[int, ...] = (-1, 0, 1)


def parse_pvalue_exponent(value: Any) -> float:
    """Return the base-10 exponent for a p-value cutoff.

    Accepts either the exponent itself (``"-4"``) or a p-value written in
    scientific notation (``"1e-10"``), in which case the exponent of its
    normalized form is returned (``"5e-8"`` -> ``-8``).
    """

    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Could not parse p-value threshold: {value!r}") from exc

    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"Could not parse p-value threshold: {value!r}")

    if number <= 0:
        return number

    if number > 1:
        raise ValueError(f"p-value threshold must be <= 1 or an exponent <= 0, got {value!r}")

    return float(math.floor(math.log10(number)))


@dataclass(frozen=True)
class ThresholdSet:
    """Immutable filter parameters for one recomputation of a derived graph.

    ``direction`` selects edges by sign (``0`` disables the direction filter).
    ``p_max2`` only applies when ``comparison`` is enabled; unset, it means 1.0,
    so a missing second p-value still fails.
    """

    p_max: float = 10 ** MAX_P_EXPONENT
    beta_min: float = 0.0
    direction: int = 0
    p_max2: float | None = None
    comparison: bool = False

    def __post_init__(self) -> None:
        if not self.p_max > 0:
            raise ValueError(f"p_max must be positive, got {self.p_max}")
        if self.p_max2 is not None and not self.p_max2 > 0:
            raise ValueError(f"p_max2 must be positive, got {self.p_max2}")
        if not 0.0 <= self.beta_min <= 1.0:
            raise ValueError(f"beta_min must be within [0, 1], got {self.beta_min}")
        if self.direction not in DIRECTIONS:
            raise ValueError(f"direction must be one of {DIRECTIONS}, got {self.direction}")

    @classmethod
    def from_exponents(
        cls,
        p_exponent: float,
        *,
        beta_min: float = 0.0,
        direction: int = 0,
        p_exponent2: float | None = None,
        comparison: bool = False,
    ) -> "ThresholdSet":
        """Build thresholds from base-10 exponents (``-4`` means ``1e-4``)."""

        return cls(
            p_max=10 ** float(p_exponent),
            beta_min=float(beta_min),
            direction=int(direction),
            p_max2=None if p_exponent2 is None else 10 ** float(p_exponent2),
            comparison=comparison,
        )

    @property
    def second_p_max(self) -> float | None:
        """Cutoff for ``Edge.pvalue2``, or None outside comparison mode."""

        if not self.comparison:
            return None
        return 1.0 if self.p_max2 is None else self.p_max2

    def with_changes(self, **changes: Any) -> "ThresholdSet":
        """Return a new threshold set with ``changes`` applied."""

        return replace(self, **changes)

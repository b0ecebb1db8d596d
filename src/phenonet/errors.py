"""Exceptions raised by phenonet loaders and pipelines."""

from __future__ import annotations


class PhenonetError(Exception):
    """Base class for phenonet errors."""


class ProfileValidationError(PhenonetError):
    """A network profile does not match the profile JSON schema."""

    def __init__(self, path: str, messages: list[str]) -> None:
        self.path = path
        self.messages = messages
        super().__init__(f"Invalid network profile {path}: " + "; ".join(messages))


class AncestryUnavailableError(PhenonetError):
    """The requested ancestry has no usable beta values for an entity."""

    def __init__(self, ancestry: str, entity_id: str) -> None:
        self.ancestry = ancestry
        self.entity_id = entity_id
        super().__init__(
            f"The selected ancestry ({ancestry}) does not contain any data for {entity_id}."
        )


class EmptySelectionError(PhenonetError):
    """A record selection produced no rows."""


class MissingWeightColumnError(PhenonetError):
    """Overview edges carry none of the requested weight columns."""

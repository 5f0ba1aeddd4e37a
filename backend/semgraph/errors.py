"""Error taxonomy shared by the graph store, templates, and schema index."""

from __future__ import annotations

from collections.abc import Sequence


class SemanticGraphError(Exception):
    """Base class for semantic graph failures."""


class ValidationError(SemanticGraphError):
    """Input rejected before any persistence was attempted."""


class NotFoundError(SemanticGraphError):
    """Operation addressed an id or name that does not exist."""


class HierarchyIntegrityError(SemanticGraphError):
    """Schema type hierarchy has a dangling parent, several roots, or a cycle."""


class InvalidTransition(SemanticGraphError):
    """Interaction flow received an event that is not valid in its current state."""


class PersistenceError(SemanticGraphError):
    """Storage collaborator failed; the in-memory snapshot was left untouched."""

    def __init__(self, action: str, message: str) -> None:
        super().__init__(f"{action} failed: {message}")
        self.action = action


class PartialFailure(SemanticGraphError):
    """Compound operation where earlier steps were persisted and a later one failed."""

    def __init__(
        self,
        message: str,
        *,
        failed_step: str,
        created_entity_ids: Sequence[str] = (),
        created_relation_ids: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.failed_step = failed_step
        self.created_entity_ids = list(created_entity_ids)
        self.created_relation_ids = list(created_relation_ids)

"""Relation (triple) request/response schemas."""

from pydantic import BaseModel, ConfigDict


class RelationDraft(BaseModel):
    """Fields accepted when creating a relation."""

    subject_id: str
    object_id: str
    predicate: str
    confidence: float | None = None


class RelationRead(BaseModel):
    """Serialized relation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    subject_id: str
    predicate: str
    object_id: str
    confidence: float | None


class TripleRead(RelationRead):
    """Relation plus denormalized endpoint names and types."""

    subject_name: str
    subject_type: str
    object_name: str
    object_type: str

"""Schemas for editable/deletable graph records."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class DeleteResult(BaseModel):
    """Generic delete response payload."""

    id: str
    deleted: bool


class EntityUpdateRequest(BaseModel):
    """Allowed mutable fields for an entity; an empty schema_type clears it."""

    name: str | None = Field(default=None, min_length=1)
    entity_type: str | None = Field(default=None, min_length=1)
    schema_type: str | None = None
    description: str | None = None
    schema_properties: dict[str, str] | None = None
    position_x: float | None = None
    position_y: float | None = None

    @model_validator(mode="after")
    def validate_non_empty_update(self) -> "EntityUpdateRequest":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided.")
        return self


class PositionUpdate(BaseModel):
    """New layout coordinate for one entity."""

    entity_id: str = Field(min_length=1)
    x: float
    y: float


class PositionBatchRequest(BaseModel):
    """Coalesced position updates."""

    positions: list[PositionUpdate] = Field(min_length=1)

"""Entity request/response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class EntityDraft(BaseModel):
    """Fields accepted when creating an entity."""

    name: str
    entity_type: str
    schema_type: str | None = None
    description: str | None = None
    schema_properties: dict[str, str] = Field(default_factory=dict)
    position_x: float = 0.0
    position_y: float = 0.0


class EntityRead(BaseModel):
    """Serialized entity."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    name: str
    entity_type: str
    schema_type: str | None
    description: str | None
    schema_properties: dict[str, str]
    position_x: float
    position_y: float

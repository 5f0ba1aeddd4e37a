"""Schema.org catalog query payloads."""

from pydantic import BaseModel


class SchemaPropertyRead(BaseModel):
    name: str
    required: bool
    description: str
    example: str
    defined_by: str | None = None


class SchemaTypeRead(BaseModel):
    """Catalog type without its subtree."""

    name: str
    parent: str | None
    description: str
    category: str
    search_feature: str | None
    child_names: list[str]
    descendant_count: int


class SchemaTypeDetail(SchemaTypeRead):
    ancestors: list[str]
    properties: list[SchemaPropertyRead]


class EntityTypeRead(BaseModel):
    """Entity type with render hints and schema suggestions."""

    value: str
    label: str
    icon: str
    color: str
    suggested_schema_types: list[str]


class PredicateRead(BaseModel):
    """Predicate with the render hints used for its edges."""

    value: str
    label: str
    icon: str
    color: str

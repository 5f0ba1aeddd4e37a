"""Graph snapshot and neighborhood payloads."""

from pydantic import BaseModel

from semgraph.schemas.entity import EntityRead
from semgraph.schemas.relation import RelationRead, TripleRead


class GraphSnapshot(BaseModel):
    """All entities and relations of one project."""

    project_id: str
    entities: list[EntityRead]
    relations: list[RelationRead]


class EntityNeighborhood(BaseModel):
    """Entity with its outgoing and incoming triples."""

    entity: EntityRead
    outgoing: list[TripleRead]
    incoming: list[TripleRead]
    related_entities: list[EntityRead]


class JsonLdScript(BaseModel):
    """One embeddable JSON-LD document."""

    entity_id: str | None = None
    schema_type: str
    document: dict[str, object]
    script: str

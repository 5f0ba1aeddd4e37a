"""Graph metrics and recommendation payloads."""

from typing import Literal

from pydantic import BaseModel, Field

from semgraph.schemas.entity import EntityRead
from semgraph.schemas.relation import RelationRead

Priority = Literal["high", "medium", "low"]
RecommendationKind = Literal[
    "disconnected",
    "missing_schema",
    "missing_description",
    "low_relations",
    "suggested_entity",
    "suggested_relation",
    "self_reference",
    "redundant_relation",
    "missing_required_properties",
]
AuthorityTier = Literal["strong", "developing", "early"]


class TypeCount(BaseModel):
    entity_type: str
    count: int


class PredicateCount(BaseModel):
    predicate: str
    count: int


class AuthorityScores(BaseModel):
    """The four capped sub-scores, each in [0, 25]."""

    entity_count: float
    relation_density: float
    schema_coverage: float
    connectivity: float


class GraphMetrics(BaseModel):
    """Derived connectivity and authority view of one graph snapshot."""

    entity_count: int
    relation_count: int
    connected_ids: list[str]
    disconnected: list[EntityRead]
    relation_count_by_entity: dict[str, int]
    type_distribution: list[TypeCount]
    predicate_distribution: list[PredicateCount]
    scores: AuthorityScores
    authority_score: int
    authority_tier: AuthorityTier
    with_schema: int
    with_description: int
    unique_predicates: int
    schema_coverage_pct: int
    connectivity_pct: int
    schema_property_coverage_pct: int


class Recommendation(BaseModel):
    """One actionable suggestion derived from the graph."""

    kind: RecommendationKind
    priority: Priority
    title: str
    description: str
    action: str
    entity_id: str | None = None
    entity_name: str | None = None
    relation_id: str | None = None
    target_tab: str | None = None
    suggested_entity_type: str | None = None
    suggested_name: str | None = None
    suggested_description: str | None = None
    suggested_schema_type: str | None = None
    source_entity_type: str | None = None
    subject_type: str | None = None
    object_type: str | None = None
    predicate: str | None = None
    missing_properties: list[str] = Field(default_factory=list)


class RecommendationOutcome(BaseModel):
    """What applying one recommendation did."""

    kind: RecommendationKind
    target_tab: str | None = None
    message: str
    entities: list[EntityRead] = Field(default_factory=list)
    relations: list[RelationRead] = Field(default_factory=list)

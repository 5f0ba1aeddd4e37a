"""Niche template authoring and instantiation schemas."""

from typing import Literal

from pydantic import BaseModel, Field

from semgraph.schemas.entity import EntityDraft, EntityRead
from semgraph.schemas.relation import RelationRead


class TemplateEntity(BaseModel):
    """Entity stub; blank names fall back to the placeholder."""

    name: str = ""
    placeholder: str = ""
    entity_type: str
    schema_type: str | None = None
    description: str = ""


class TemplateRelation(BaseModel):
    """Relation between two stubs, addressed by their index."""

    subject_index: int
    object_index: int
    predicate: str


class ScopeQuestion(BaseModel):
    """Yes/no question; "no" removes the listed stubs."""

    key: str
    prompt: str
    default: bool = True
    entity_indices: list[int] = Field(default_factory=list)


class DataQuestion(BaseModel):
    """Free-text question whose answer overwrites one stub field."""

    key: str
    prompt: str
    entity_index: int
    field: Literal["name", "description", "schema_type"] = "name"
    required: bool = False
    placeholder: str = ""


class NicheTemplate(BaseModel):
    """Reusable graph skeleton for a business archetype."""

    key: str
    label: str
    description: str = ""
    icon: str = "building"
    entities: list[TemplateEntity]
    relations: list[TemplateRelation] = Field(default_factory=list)
    scope_questions: list[ScopeQuestion] = Field(default_factory=list)
    data_questions: list[DataQuestion] = Field(default_factory=list)


class TemplateSummary(BaseModel):
    key: str
    label: str
    description: str
    icon: str
    entity_count: int
    relation_count: int


class TemplateAnswers(BaseModel):
    """Wizard answers keyed by question key."""

    scope_answers: dict[str, bool] = Field(default_factory=dict)
    data_answers: dict[str, str] = Field(default_factory=dict)


class IndexedRelation(BaseModel):
    subject_index: int
    object_index: int
    predicate: str


class InstantiatedGraph(BaseModel):
    """Entity drafts plus relations still addressed by index."""

    entities: list[EntityDraft]
    relations: list[IndexedRelation]
    removed_indices: list[int] = Field(default_factory=list)


class GenerationResult(BaseModel):
    """Records persisted by a template run."""

    entities: list[EntityRead]
    relations: list[RelationRead]

"""ORM models package exports."""

from semgraph.models.entity import SemanticEntity
from semgraph.models.relation import SemanticRelation

__all__ = ["SemanticEntity", "SemanticRelation"]

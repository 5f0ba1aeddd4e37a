"""SQLAlchemy metadata registry import for Alembic."""

from semgraph.models import SemanticEntity, SemanticRelation
from semgraph.models.base import Base

__all__ = ["Base", "SemanticEntity", "SemanticRelation"]

"""Semantic relation (triple) ORM model."""

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from semgraph.models.base import Base, CreatedAtMixin, IdMixin


class SemanticRelation(Base, IdMixin, CreatedAtMixin):
    """Directed, predicate-labeled edge between two entities."""

    __tablename__ = "semantic_relations"

    project_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    subject_id: Mapped[str] = mapped_column(
        ForeignKey("semantic_entities.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    predicate: Mapped[str] = mapped_column(String(255), nullable=False)
    object_id: Mapped[str] = mapped_column(
        ForeignKey("semantic_entities.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    confidence: Mapped[float | None] = mapped_column(Float, nullable=True)
    ordinal: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

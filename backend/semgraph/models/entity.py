"""Semantic entity ORM model."""

from sqlalchemy import JSON, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from semgraph.models.base import Base, CreatedAtMixin, IdMixin, UpdatedAtMixin


class SemanticEntity(Base, IdMixin, CreatedAtMixin, UpdatedAtMixin):
    """Node of a project's semantic graph."""

    __tablename__ = "semantic_entities"

    project_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(64), nullable=False)
    schema_type: Mapped[str | None] = mapped_column(String(128), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    schema_properties: Mapped[dict[str, str]] = mapped_column(JSON, default=dict, nullable=False)
    position_x: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    position_y: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    ordinal: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

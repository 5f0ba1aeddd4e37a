"""Persistence collaborators for the graph store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from semgraph.models.base import new_id
from semgraph.models.entity import SemanticEntity
from semgraph.models.relation import SemanticRelation
from semgraph.schemas.entity import EntityDraft, EntityRead
from semgraph.schemas.relation import RelationDraft, RelationRead

ENTITY_MUTABLE_FIELDS = frozenset(
    {
        "name",
        "entity_type",
        "schema_type",
        "description",
        "schema_properties",
        "position_x",
        "position_y",
    }
)


class GraphRepository(ABC):
    """Record-oriented store with project-scoped entity and relation collections."""

    @abstractmethod
    def select_entities(self, project_id: str) -> list[EntityRead]:
        """Return entities of a project in creation order."""

    @abstractmethod
    def select_relations(self, project_id: str) -> list[RelationRead]:
        """Return relations of a project in creation order."""

    @abstractmethod
    def insert_entities(self, project_id: str, drafts: Sequence[EntityDraft]) -> list[EntityRead]:
        """Insert entities and return them with their assigned ids, in input order."""

    @abstractmethod
    def insert_relations(self, project_id: str, drafts: Sequence[RelationDraft]) -> list[RelationRead]:
        """Insert relations and return them with their assigned ids, in input order."""

    @abstractmethod
    def update_entity(self, project_id: str, entity_id: str, values: Mapping[str, Any]) -> EntityRead | None:
        """Apply column values to one entity; None when it does not exist."""

    @abstractmethod
    def update_positions(self, project_id: str, positions: Mapping[str, tuple[float, float]]) -> int:
        """Write layout coordinates in one batch; returns the number of rows touched."""

    @abstractmethod
    def delete_entity(self, project_id: str, entity_id: str) -> bool:
        """Delete one entity row."""

    @abstractmethod
    def delete_relation(self, project_id: str, relation_id: str) -> bool:
        """Delete one relation row."""

    @abstractmethod
    def delete_relations_touching(self, project_id: str, entity_id: str) -> int:
        """Delete relations whose subject or object is `entity_id`."""


class SqlGraphRepository(GraphRepository):
    """SQLAlchemy-backed repository; every call commits or rolls back on its own."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def select_entities(self, project_id: str) -> list[EntityRead]:
        rows = self.db.scalars(
            select(SemanticEntity)
            .where(SemanticEntity.project_id == project_id)
            .order_by(SemanticEntity.ordinal.asc(), SemanticEntity.id.asc())
        ).all()
        return [EntityRead.model_validate(row) for row in rows]

    def select_relations(self, project_id: str) -> list[RelationRead]:
        rows = self.db.scalars(
            select(SemanticRelation)
            .where(SemanticRelation.project_id == project_id)
            .order_by(SemanticRelation.ordinal.asc(), SemanticRelation.id.asc())
        ).all()
        return [RelationRead.model_validate(row) for row in rows]

    def insert_entities(self, project_id: str, drafts: Sequence[EntityDraft]) -> list[EntityRead]:
        start = self._next_ordinal(SemanticEntity.ordinal, SemanticEntity.project_id, project_id)
        rows = [
            SemanticEntity(
                id=new_id(),
                project_id=project_id,
                ordinal=start + offset,
                name=draft.name,
                entity_type=draft.entity_type,
                schema_type=draft.schema_type,
                description=draft.description,
                schema_properties=dict(draft.schema_properties),
                position_x=draft.position_x,
                position_y=draft.position_y,
            )
            for offset, draft in enumerate(drafts)
        ]
        try:
            self.db.add_all(rows)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return [EntityRead.model_validate(row) for row in rows]

    def insert_relations(self, project_id: str, drafts: Sequence[RelationDraft]) -> list[RelationRead]:
        start = self._next_ordinal(SemanticRelation.ordinal, SemanticRelation.project_id, project_id)
        rows = [
            SemanticRelation(
                id=new_id(),
                project_id=project_id,
                ordinal=start + offset,
                subject_id=draft.subject_id,
                predicate=draft.predicate,
                object_id=draft.object_id,
                confidence=draft.confidence,
            )
            for offset, draft in enumerate(drafts)
        ]
        try:
            self.db.add_all(rows)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return [RelationRead.model_validate(row) for row in rows]

    def update_entity(self, project_id: str, entity_id: str, values: Mapping[str, Any]) -> EntityRead | None:
        row = self._entity_row(project_id, entity_id)
        if row is None:
            return None
        for key, value in values.items():
            if key not in ENTITY_MUTABLE_FIELDS:
                raise KeyError(f"Entity column is not mutable: {key}")
            setattr(row, key, dict(value) if key == "schema_properties" else value)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(row)
        return EntityRead.model_validate(row)

    def update_positions(self, project_id: str, positions: Mapping[str, tuple[float, float]]) -> int:
        if not positions:
            return 0
        rows = self.db.scalars(
            select(SemanticEntity).where(
                SemanticEntity.project_id == project_id,
                SemanticEntity.id.in_(list(positions)),
            )
        ).all()
        for row in rows:
            row.position_x, row.position_y = positions[row.id]
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return len(rows)

    def delete_entity(self, project_id: str, entity_id: str) -> bool:
        row = self._entity_row(project_id, entity_id)
        if row is None:
            return False
        try:
            self.db.delete(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return True

    def delete_relation(self, project_id: str, relation_id: str) -> bool:
        row = self.db.scalar(
            select(SemanticRelation).where(
                SemanticRelation.project_id == project_id,
                SemanticRelation.id == relation_id,
            )
        )
        if row is None:
            return False
        try:
            self.db.delete(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return True

    def delete_relations_touching(self, project_id: str, entity_id: str) -> int:
        try:
            result = self.db.execute(
                delete(SemanticRelation).where(
                    SemanticRelation.project_id == project_id,
                    or_(SemanticRelation.subject_id == entity_id, SemanticRelation.object_id == entity_id),
                )
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return int(result.rowcount or 0)

    def _next_ordinal(self, ordinal_column, project_column, project_id: str) -> int:
        current = self.db.scalar(select(func.max(ordinal_column)).where(project_column == project_id))
        return int(current or 0) + 1

    def _entity_row(self, project_id: str, entity_id: str) -> SemanticEntity | None:
        return self.db.scalar(
            select(SemanticEntity).where(
                SemanticEntity.project_id == project_id,
                SemanticEntity.id == entity_id,
            )
        )


class InMemoryGraphRepository(GraphRepository):
    """Dictionary-backed repository for tests, scripts and previews."""

    def __init__(self) -> None:
        self.entities: dict[str, EntityRead] = {}
        self.relations: dict[str, RelationRead] = {}
        self.calls: list[str] = []

    def select_entities(self, project_id: str) -> list[EntityRead]:
        self.calls.append("select_entities")
        return [entity for entity in self.entities.values() if entity.project_id == project_id]

    def select_relations(self, project_id: str) -> list[RelationRead]:
        self.calls.append("select_relations")
        return [relation for relation in self.relations.values() if relation.project_id == project_id]

    def insert_entities(self, project_id: str, drafts: Sequence[EntityDraft]) -> list[EntityRead]:
        self.calls.append("insert_entities")
        created = [
            EntityRead(id=new_id(), project_id=project_id, **draft.model_dump()) for draft in drafts
        ]
        for entity in created:
            self.entities[entity.id] = entity
        return [entity.model_copy(deep=True) for entity in created]

    def insert_relations(self, project_id: str, drafts: Sequence[RelationDraft]) -> list[RelationRead]:
        self.calls.append("insert_relations")
        created = [
            RelationRead(id=new_id(), project_id=project_id, **draft.model_dump()) for draft in drafts
        ]
        for relation in created:
            self.relations[relation.id] = relation
        return [relation.model_copy() for relation in created]

    def update_entity(self, project_id: str, entity_id: str, values: Mapping[str, Any]) -> EntityRead | None:
        self.calls.append("update_entity")
        current = self.entities.get(entity_id)
        if current is None or current.project_id != project_id:
            return None
        unknown = set(values) - ENTITY_MUTABLE_FIELDS
        if unknown:
            raise KeyError(f"Entity column is not mutable: {sorted(unknown)[0]}")
        updated = current.model_copy(update=dict(values), deep=True)
        self.entities[entity_id] = updated
        return updated.model_copy(deep=True)

    def update_positions(self, project_id: str, positions: Mapping[str, tuple[float, float]]) -> int:
        self.calls.append("update_positions")
        touched = 0
        for entity_id, (x, y) in positions.items():
            current = self.entities.get(entity_id)
            if current is None or current.project_id != project_id:
                continue
            self.entities[entity_id] = current.model_copy(update={"position_x": x, "position_y": y})
            touched += 1
        return touched

    def delete_entity(self, project_id: str, entity_id: str) -> bool:
        self.calls.append("delete_entity")
        current = self.entities.get(entity_id)
        if current is None or current.project_id != project_id:
            return False
        del self.entities[entity_id]
        return True

    def delete_relation(self, project_id: str, relation_id: str) -> bool:
        self.calls.append("delete_relation")
        current = self.relations.get(relation_id)
        if current is None or current.project_id != project_id:
            return False
        del self.relations[relation_id]
        return True

    def delete_relations_touching(self, project_id: str, entity_id: str) -> int:
        self.calls.append("delete_relations_touching")
        doomed = [
            relation.id
            for relation in self.relations.values()
            if relation.project_id == project_id and entity_id in (relation.subject_id, relation.object_id)
        ]
        for relation_id in doomed:
            del self.relations[relation_id]
        return len(doomed)

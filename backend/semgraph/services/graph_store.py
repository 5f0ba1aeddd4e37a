"""Project-scoped graph store with referential integrity over a repository."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from time import perf_counter
from typing import Any, TypeVar

from semgraph.errors import NotFoundError, PersistenceError, SemanticGraphError, ValidationError
from semgraph.schema.entity_types import normalize_entity_type
from semgraph.schema.predicates import require_predicate
from semgraph.schemas.entity import EntityDraft, EntityRead
from semgraph.schemas.graph import EntityNeighborhood, GraphSnapshot
from semgraph.schemas.mutations import EntityUpdateRequest
from semgraph.schemas.relation import RelationDraft, RelationRead, TripleRead
from semgraph.services.notifications import LoggingNotificationSink, NotificationSink
from semgraph.services.repository import GraphRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _clean_properties(values: Mapping[str, Any] | None) -> dict[str, str]:
    cleaned: dict[str, str] = {}
    for key, value in (values or {}).items():
        name = str(key).strip()
        if not name or value is None:
            continue
        cleaned[name] = str(value)
    return cleaned


class GraphStore:
    """In-memory snapshot of one project's graph.

    Mutations are persisted through the repository first and only then applied
    to the snapshot, so derived views never show a write that failed.
    """

    def __init__(
        self,
        repository: GraphRepository,
        project_id: str,
        notifier: NotificationSink | None = None,
    ) -> None:
        clean_project_id = (project_id or "").strip()
        if not clean_project_id:
            raise ValidationError("Project id is required.")
        self.repository = repository
        self.project_id = clean_project_id
        self.notifier = notifier or LoggingNotificationSink()
        self._entities: dict[str, EntityRead] = {}
        self._relations: dict[str, RelationRead] = {}

    # Loading and queries

    def load(self) -> GraphSnapshot:
        started = perf_counter()
        entities = self._persist(
            "load entities", lambda: self.repository.select_entities(self.project_id), notify=False
        )
        relations = self._persist(
            "load relations", lambda: self.repository.select_relations(self.project_id), notify=False
        )
        self._entities = {entity.id: entity for entity in entities}
        self._relations = {relation.id: relation for relation in relations}
        logger.info(
            "semgraph.graph_loaded project_id=%s entities=%d relations=%d duration_ms=%.2f",
            self.project_id,
            len(self._entities),
            len(self._relations),
            (perf_counter() - started) * 1000.0,
        )
        return self.snapshot()

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(
            project_id=self.project_id,
            entities=self.list_entities(),
            relations=self.list_relations(),
        )

    def list_entities(self) -> list[EntityRead]:
        return [entity.model_copy(deep=True) for entity in self._entities.values()]

    def list_relations(self) -> list[RelationRead]:
        return [relation.model_copy() for relation in self._relations.values()]

    def get_entity(self, entity_id: str) -> EntityRead:
        entity = self._entities.get(entity_id)
        if entity is None:
            raise NotFoundError(f"Entity not found: {entity_id}")
        return entity.model_copy(deep=True)

    def has_entity(self, entity_id: str) -> bool:
        return entity_id in self._entities

    def neighborhood(self, entity_id: str) -> EntityNeighborhood:
        """Entity plus the triples leaving and entering it."""

        entity = self.get_entity(entity_id)
        outgoing: list[TripleRead] = []
        incoming: list[TripleRead] = []
        related: dict[str, EntityRead] = {}
        for relation in self._relations.values():
            if relation.subject_id == entity_id:
                outgoing.append(self._triple(relation))
                related.setdefault(relation.object_id, self._entities[relation.object_id])
            elif relation.object_id == entity_id:
                incoming.append(self._triple(relation))
                related.setdefault(relation.subject_id, self._entities[relation.subject_id])
        related.pop(entity_id, None)
        return EntityNeighborhood(
            entity=entity,
            outgoing=outgoing,
            incoming=incoming,
            related_entities=[item.model_copy(deep=True) for item in related.values()],
        )

    def list_triples(self, *, search: str | None = None, predicate: str | None = None) -> list[TripleRead]:
        """Triples filtered by free text over names/predicate and by exact predicate."""

        needle = (search or "").strip().lower()
        wanted_predicate = require_predicate(predicate) if predicate and predicate.strip() else None
        triples: list[TripleRead] = []
        for relation in self._relations.values():
            if wanted_predicate is not None and relation.predicate != wanted_predicate:
                continue
            triple = self._triple(relation)
            if needle and not any(
                needle in value.lower() for value in (triple.subject_name, triple.predicate, triple.object_name)
            ):
                continue
            triples.append(triple)
        return triples

    # Entity mutations

    def create_entity(self, draft: EntityDraft) -> EntityRead:
        return self.create_entities([draft])[0]

    def create_entities(self, drafts: Iterable[EntityDraft]) -> list[EntityRead]:
        """Validate every draft, then persist the whole batch in one call."""

        prepared = [self._prepare_entity_draft(draft) for draft in drafts]
        if not prepared:
            return []
        started = perf_counter()
        created = self._persist(
            "create entity",
            lambda: self.repository.insert_entities(self.project_id, prepared),
        )
        for entity in created:
            self._entities[entity.id] = entity
        logger.info(
            "semgraph.entities_created project_id=%s count=%d duration_ms=%.2f",
            self.project_id,
            len(created),
            (perf_counter() - started) * 1000.0,
        )
        if len(created) == 1:
            self.notifier.success("Entity created", created[0].name)
        else:
            self.notifier.success("Entities created", f"{len(created)} entities added to the graph")
        return [entity.model_copy(deep=True) for entity in created]

    def update_entity(self, entity_id: str, patch: EntityUpdateRequest | Mapping[str, Any]) -> EntityRead:
        if entity_id not in self._entities:
            raise NotFoundError(f"Entity not found: {entity_id}")
        values = self._prepare_entity_patch(patch)
        if not values:
            return self.get_entity(entity_id)

        updated = self._persist(
            "update entity",
            lambda: self.repository.update_entity(self.project_id, entity_id, values),
        )
        if updated is None:
            self._entities.pop(entity_id, None)
            raise NotFoundError(f"Entity not found: {entity_id}")
        self._entities[entity_id] = updated
        self.notifier.success("Entity updated", updated.name)
        return updated.model_copy(deep=True)

    def update_positions(self, positions: Mapping[str, tuple[float, float]]) -> int:
        """Persist a batch of layout coordinates; unknown ids are ignored."""

        known = {
            entity_id: (float(x), float(y))
            for entity_id, (x, y) in positions.items()
            if entity_id in self._entities
        }
        if not known:
            return 0
        touched = self._persist(
            "save positions",
            lambda: self.repository.update_positions(self.project_id, known),
        )
        for entity_id, (x, y) in known.items():
            self._entities[entity_id] = self._entities[entity_id].model_copy(
                update={"position_x": x, "position_y": y}
            )
        logger.debug(
            "semgraph.positions_saved project_id=%s count=%d",
            self.project_id,
            touched,
        )
        return touched

    def delete_entity(self, entity_id: str) -> bool:
        """Delete an entity and every relation touching it; absent ids are a no-op."""

        if entity_id not in self._entities:
            return False

        removed = self._persist(
            "delete entity relations",
            lambda: self.repository.delete_relations_touching(self.project_id, entity_id),
        )
        for relation_id in [
            relation.id
            for relation in self._relations.values()
            if entity_id in (relation.subject_id, relation.object_id)
        ]:
            del self._relations[relation_id]

        self._persist(
            "delete entity",
            lambda: self.repository.delete_entity(self.project_id, entity_id),
        )
        entity = self._entities.pop(entity_id)
        logger.info(
            "semgraph.entity_deleted project_id=%s entity_id=%s cascaded_relations=%d",
            self.project_id,
            entity_id,
            removed,
        )
        self.notifier.success("Entity removed", entity.name)
        return True

    # Relation mutations

    def create_relation(
        self,
        subject_id: str,
        object_id: str,
        predicate: str,
        confidence: float | None = None,
    ) -> RelationRead:
        draft = RelationDraft(
            subject_id=subject_id,
            object_id=object_id,
            predicate=predicate,
            confidence=confidence,
        )
        return self.create_relations([draft])[0]

    def create_relations(self, drafts: Iterable[RelationDraft]) -> list[RelationRead]:
        """Validate endpoints and duplicates, then persist the batch in one call."""

        existing = {(item.subject_id, item.predicate, item.object_id) for item in self._relations.values()}
        prepared: list[RelationDraft] = []
        for draft in drafts:
            clean = self._prepare_relation_draft(draft)
            key = (clean.subject_id, clean.predicate, clean.object_id)
            if key in existing:
                raise self._reject(
                    "Relation already exists",
                    f"{self._entities[clean.subject_id].name} {clean.predicate} "
                    f"{self._entities[clean.object_id].name}",
                )
            existing.add(key)
            prepared.append(clean)
        if not prepared:
            return []

        started = perf_counter()
        created = self._persist(
            "create relation",
            lambda: self.repository.insert_relations(self.project_id, prepared),
        )
        for relation in created:
            self._relations[relation.id] = relation
        logger.info(
            "semgraph.relations_created project_id=%s count=%d duration_ms=%.2f",
            self.project_id,
            len(created),
            (perf_counter() - started) * 1000.0,
        )
        if len(created) == 1:
            self.notifier.success("Relation created", created[0].predicate)
        else:
            self.notifier.success("Relations created", f"{len(created)} relations added to the graph")
        return [relation.model_copy() for relation in created]

    def delete_relation(self, relation_id: str) -> bool:
        if relation_id not in self._relations:
            return False
        self._persist(
            "delete relation",
            lambda: self.repository.delete_relation(self.project_id, relation_id),
        )
        del self._relations[relation_id]
        self.notifier.success("Relation removed")
        return True

    # Helpers

    def _prepare_entity_draft(self, draft: EntityDraft) -> EntityDraft:
        name = " ".join((draft.name or "").split())
        if not name:
            raise self._reject("Invalid entity", "Entity name is required.")
        try:
            entity_type = normalize_entity_type(draft.entity_type)
        except ValidationError as exc:
            raise self._reject("Invalid entity", str(exc)) from exc
        return EntityDraft(
            name=name,
            entity_type=entity_type,
            schema_type=_clean_optional(draft.schema_type),
            description=_clean_optional(draft.description),
            schema_properties=_clean_properties(draft.schema_properties),
            position_x=draft.position_x,
            position_y=draft.position_y,
        )

    def _prepare_entity_patch(self, patch: EntityUpdateRequest | Mapping[str, Any]) -> dict[str, Any]:
        raw = patch.model_dump(exclude_unset=True) if isinstance(patch, EntityUpdateRequest) else dict(patch)
        values: dict[str, Any] = {}
        for key, value in raw.items():
            if key == "name":
                if value is None:
                    continue
                name = " ".join(str(value).split())
                if not name:
                    raise self._reject("Invalid entity", "Entity name is required.")
                values["name"] = name
            elif key == "entity_type":
                if value is None:
                    continue
                try:
                    values["entity_type"] = normalize_entity_type(value)
                except ValidationError as exc:
                    raise self._reject("Invalid entity", str(exc)) from exc
            elif key in ("schema_type", "description"):
                values[key] = _clean_optional(value)
            elif key == "schema_properties":
                values[key] = _clean_properties(value)
            elif key in ("position_x", "position_y"):
                if value is not None:
                    values[key] = float(value)
            else:
                raise self._reject("Invalid entity", f"Unknown entity field: {key}")
        return values

    def _prepare_relation_draft(self, draft: RelationDraft) -> RelationDraft:
        missing = [
            entity_id for entity_id in (draft.subject_id, draft.object_id) if entity_id not in self._entities
        ]
        if missing:
            raise self._reject("Invalid relation", f"Unknown entity id: {missing[0]}")
        try:
            predicate = require_predicate(draft.predicate)
        except ValidationError as exc:
            raise self._reject("Invalid relation", str(exc)) from exc
        return RelationDraft(
            subject_id=draft.subject_id,
            object_id=draft.object_id,
            predicate=predicate,
            confidence=draft.confidence,
        )

    def _triple(self, relation: RelationRead) -> TripleRead:
        subject = self._entities[relation.subject_id]
        obj = self._entities[relation.object_id]
        return TripleRead(
            **relation.model_dump(),
            subject_name=subject.name,
            subject_type=subject.entity_type,
            object_name=obj.name,
            object_type=obj.entity_type,
        )

    def _reject(self, title: str, message: str) -> ValidationError:
        self.notifier.failure(title, message)
        return ValidationError(message)

    def _persist(self, action: str, call: Callable[[], T], *, notify: bool = True) -> T:
        try:
            return call()
        except SemanticGraphError:
            raise
        except Exception as exc:
            if notify:
                self.notifier.failure(f"Could not {action}", str(exc))
            logger.exception(
                "semgraph.persistence_failed project_id=%s action=%s",
                self.project_id,
                action,
            )
            raise PersistenceError(action, str(exc)) from exc

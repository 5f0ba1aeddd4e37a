"""Drag-to-connect interaction flow for the graph builder."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from semgraph.errors import InvalidTransition, PartialFailure, SemanticGraphError, ValidationError
from semgraph.schema.predicates import require_predicate
from semgraph.schemas.entity import EntityDraft, EntityRead
from semgraph.schemas.relation import RelationRead
from semgraph.services.graph_store import GraphStore

logger = logging.getLogger(__name__)


class EdgeState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CREATING_COMPANION = "creating_companion"


@dataclass(slots=True)
class CompanionResult:
    entity: EntityRead
    relation: RelationRead


class EdgeCreationFlow:
    """State machine: idle → connecting → connected | creating_companion → idle.

    Every exit back to idle clears the retained source, target and drop point.
    """

    def __init__(self, store: GraphStore) -> None:
        self.store = store
        self.state = EdgeState.IDLE
        self.source_id: str | None = None
        self.target_id: str | None = None
        self.drop_point: tuple[float, float] | None = None

    def begin_drag(self, source_id: str) -> None:
        self._expect(EdgeState.IDLE, "begin_drag")
        if not self.store.has_entity(source_id):
            raise ValidationError(f"Unknown entity id: {source_id}")
        self.source_id = source_id
        self.state = EdgeState.CONNECTING

    def release_on_entity(self, target_id: str) -> None:
        self._expect(EdgeState.CONNECTING, "release_on_entity")
        if not self.store.has_entity(target_id):
            self.cancel()
            raise ValidationError(f"Unknown entity id: {target_id}")
        self.target_id = target_id
        self.state = EdgeState.CONNECTED

    def release_on_canvas(self, x: float, y: float) -> None:
        self._expect(EdgeState.CONNECTING, "release_on_canvas")
        self.drop_point = (float(x), float(y))
        self.state = EdgeState.CREATING_COMPANION

    def confirm_connection(self, predicate: str, confidence: float | None = None) -> RelationRead:
        """Create source→predicate→target; any failure returns to idle untouched."""

        self._expect(EdgeState.CONNECTED, "confirm_connection")
        if self.source_id is None or self.target_id is None:
            raise InvalidTransition("confirm_connection needs a source and a target")
        source_id, target_id = self.source_id, self.target_id
        self._reset()
        return self.store.create_relation(source_id, target_id, predicate, confidence)

    def confirm_companion(self, predicate: str, draft: EntityDraft) -> CompanionResult:
        """Create the new entity at the drop point, then source→predicate→entity.

        A relation failure after the entity was created raises PartialFailure;
        the entity stays in the graph.
        """

        self._expect(EdgeState.CREATING_COMPANION, "confirm_companion")
        if self.source_id is None or self.drop_point is None:
            raise InvalidTransition("confirm_companion needs a source and a drop point")
        source_id = self.source_id
        x, y = self.drop_point
        self._reset()

        clean_predicate = require_predicate(predicate)
        entity = self.store.create_entity(draft.model_copy(update={"position_x": x, "position_y": y}))
        try:
            relation = self.store.create_relation(source_id, entity.id, clean_predicate)
        except SemanticGraphError as exc:
            logger.warning(
                "semgraph.companion_partial_failure project_id=%s source_id=%s entity_id=%s error=%s",
                self.store.project_id,
                source_id,
                entity.id,
                exc,
            )
            self.store.notifier.failure(
                "Entity created without its relation",
                f'"{entity.name}" was created but could not be connected: {exc}',
            )
            raise PartialFailure(
                f"Entity {entity.id} created, relation failed ({exc})",
                failed_step="relation",
                created_entity_ids=[entity.id],
            ) from exc
        return CompanionResult(entity=entity, relation=relation)

    def cancel(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.state = EdgeState.IDLE
        self.source_id = None
        self.target_id = None
        self.drop_point = None

    def _expect(self, state: EdgeState, event: str) -> None:
        if self.state is not state:
            raise InvalidTransition(f"{event} is not valid in state {self.state.value}")

"""Breadth-first companion expansion for suggested-entity recommendations."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from semgraph.errors import PartialFailure, PersistenceError, ValidationError
from semgraph.schema.suggestions import (
    COMPANION_SUGGESTIONS,
    companion_blueprints,
    find_relation_suggestion,
)
from semgraph.schemas.entity import EntityDraft
from semgraph.schemas.insights import Recommendation
from semgraph.schemas.relation import RelationDraft
from semgraph.schemas.templates import GenerationResult
from semgraph.services.graph_store import GraphStore

logger = logging.getLogger(__name__)

COLUMN_SPACING = 280.0
ROW_SPACING = 150.0
DEFAULT_ROOT = (300.0, 300.0)
FALLBACK_PREDICATE = "related_to"


@dataclass(slots=True)
class PlannedEntity:
    entity_type: str
    name: str
    description: str
    schema_type: str
    parent_type: str
    depth: int = 1


def plan_expansion(present_types: list[str], recommendation: Recommendation) -> list[PlannedEntity]:
    """Missing companion types reachable from the present types, breadth-first.

    The suggested type is planned first; each planned type records the type it
    was reached from. Present types sit at depth 0 and every planned type is
    one level below its parent.
    """

    blueprints = companion_blueprints()
    depth_of = {entity_type: 0 for entity_type in present_types}
    planned: list[PlannedEntity] = []

    suggested = recommendation.suggested_entity_type
    if suggested and suggested not in depth_of:
        source = recommendation.source_entity_type
        if source == suggested:
            raise ValidationError(f"Suggested type {suggested} cannot be its own source type.")
        if source not in depth_of:
            raise ValidationError(f"Source type {source} is not present in the graph.")
        blueprint = blueprints.get(suggested)
        planned.append(
            PlannedEntity(
                entity_type=suggested,
                name=recommendation.suggested_name or (blueprint.name if blueprint else suggested),
                description=recommendation.suggested_description or (blueprint.description if blueprint else ""),
                schema_type=recommendation.suggested_schema_type or (blueprint.schema_type if blueprint else ""),
                parent_type=source,
                depth=depth_of[source] + 1,
            )
        )
        depth_of[suggested] = depth_of[source] + 1

    queue = deque(present_types)
    if suggested:
        queue.append(suggested)
    while queue:
        current = queue.popleft()
        for suggestion in COMPANION_SUGGESTIONS.get(current, ()):
            if suggestion.entity_type in depth_of:
                continue
            depth_of[suggestion.entity_type] = depth_of[current] + 1
            planned.append(
                PlannedEntity(
                    entity_type=suggestion.entity_type,
                    name=suggestion.name,
                    description=suggestion.description,
                    schema_type=suggestion.schema_type,
                    parent_type=current,
                    depth=depth_of[suggestion.entity_type],
                )
            )
            queue.append(suggestion.entity_type)
    return planned


def tree_layout(planned: list[PlannedEntity], root: tuple[float, float]) -> list[tuple[float, float]]:
    """One column per depth, rows centered on the root's y coordinate."""

    root_x, root_y = root
    groups: dict[int, list[int]] = {}
    for position, item in enumerate(planned):
        groups.setdefault(item.depth, []).append(position)

    points: list[tuple[float, float]] = [(0.0, 0.0)] * len(planned)
    for depth, members in groups.items():
        start_y = root_y - (len(members) - 1) * ROW_SPACING / 2
        for row, position in enumerate(members):
            points[position] = (root_x + depth * COLUMN_SPACING, start_y + row * ROW_SPACING)
    return points


def _choose_predicate(parent_type: str, child_type: str) -> tuple[str, bool]:
    """Predicate for parent→child, or (predicate, True) when only child→parent is known."""

    forward = find_relation_suggestion(parent_type, child_type)
    if forward is not None:
        return forward.predicate, False
    reverse = find_relation_suggestion(child_type, parent_type)
    if reverse is not None:
        return reverse.predicate, True
    return FALLBACK_PREDICATE, False


def expand_from_suggestion(store: GraphStore, recommendation: Recommendation) -> GenerationResult:
    """Create every missing companion entity and link each one to its parent type."""

    if recommendation.kind != "suggested_entity":
        raise ValidationError("Recommendation is not an entity suggestion.")

    entities = store.list_entities()
    present_types = list(dict.fromkeys(entity.entity_type for entity in entities))
    planned = plan_expansion(present_types, recommendation)
    if not planned:
        store.notifier.success("Nothing to create", "Every suggested entity already exists in the graph.")
        return GenerationResult(entities=[], relations=[])

    source = next(
        (entity for entity in entities if entity.entity_type == recommendation.source_entity_type),
        None,
    )
    root = (source.position_x, source.position_y) if source is not None else DEFAULT_ROOT
    points = tree_layout(planned, root)

    created = store.create_entities(
        [
            EntityDraft(
                name=item.name,
                entity_type=item.entity_type,
                schema_type=item.schema_type or None,
                description=item.description or None,
                position_x=x,
                position_y=y,
            )
            for item, (x, y) in zip(planned, points)
        ]
    )

    existing_by_type: dict[str, str] = {}
    for entity in entities:
        existing_by_type.setdefault(entity.entity_type, entity.id)
    created_by_type = {entity.entity_type: entity.id for entity in created}

    drafts: list[RelationDraft] = []
    for item in planned:
        parent_id = existing_by_type.get(item.parent_type) or created_by_type.get(item.parent_type)
        child_id = created_by_type.get(item.entity_type)
        if not parent_id or not child_id:
            continue
        predicate, reverse = _choose_predicate(item.parent_type, item.entity_type)
        drafts.append(
            RelationDraft(
                subject_id=child_id if reverse else parent_id,
                object_id=parent_id if reverse else child_id,
                predicate=predicate,
            )
        )

    try:
        relations = store.create_relations(drafts)
    except (PersistenceError, ValidationError) as exc:
        raise PartialFailure(
            f"Expansion created {len(created)} entities but their relations failed ({exc})",
            failed_step="relations",
            created_entity_ids=[entity.id for entity in created],
        ) from exc

    logger.info(
        "semgraph.graph_expanded project_id=%s suggested_type=%s entities=%d relations=%d",
        store.project_id,
        recommendation.suggested_entity_type,
        len(created),
        len(relations),
    )
    store.notifier.success(
        "Graph expanded",
        f"{len(created)} entities and {len(relations)} relations created automatically.",
    )
    return GenerationResult(entities=created, relations=relations)

"""Recommendation engine: actionable suggestions derived from a graph snapshot."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from semgraph.errors import ValidationError
from semgraph.schema.hierarchy import SchemaHierarchyIndex, property_completion
from semgraph.schema.suggestions import COMPANION_SUGGESTIONS, RELATION_SUGGESTIONS
from semgraph.schemas.entity import EntityRead
from semgraph.schemas.insights import Priority, Recommendation, RecommendationOutcome
from semgraph.schemas.relation import RelationRead
from semgraph.services.expansion import expand_from_suggestion
from semgraph.services.graph_store import GraphStore
from semgraph.services.notifications import NotificationSink, UiEvent, UiEventBus

logger = logging.getLogger(__name__)

PRIORITY_ORDER: dict[Priority, int] = {"high": 0, "medium": 1, "low": 2}

TAB_BY_KIND: dict[str, str] = {
    "disconnected": "graph",
    "low_relations": "graph",
    "missing_description": "graph",
    "self_reference": "graph",
    "missing_schema": "schema",
    "missing_required_properties": "schema",
    "redundant_relation": "triples",
}


def recommend(
    entities: Sequence[EntityRead],
    relations: Sequence[RelationRead],
    schema_index: SchemaHierarchyIndex | None = None,
) -> list[Recommendation]:
    """Derive recommendations, sorted high < medium < low in discovery order.

    The core kinds are discovered first; the integrity checks (required
    properties, self references, duplicate triples) follow them within each
    priority. Relations whose endpoints are not in `entities` are ignored.
    """

    by_id = {entity.id: entity for entity in entities}
    valid = [
        relation
        for relation in relations
        if relation.subject_id in by_id and relation.object_id in by_id
    ]

    connected: set[str] = set()
    relation_count: dict[str, int] = {}
    for relation in valid:
        connected.update((relation.subject_id, relation.object_id))
        relation_count[relation.subject_id] = relation_count.get(relation.subject_id, 0) + 1
        relation_count[relation.object_id] = relation_count.get(relation.object_id, 0) + 1

    present_types = list(dict.fromkeys(entity.entity_type for entity in entities))
    present_type_set = set(present_types)
    typed_triples = {
        (by_id[relation.subject_id].entity_type, by_id[relation.object_id].entity_type, relation.predicate)
        for relation in valid
    }

    found: list[Recommendation] = []

    for entity in entities:
        if entity.id not in connected:
            found.append(
                _for_entity(
                    entity,
                    "disconnected",
                    "high",
                    f'"{entity.name}" is isolated in the graph',
                    "Entities without connections do not contribute to the semantic network.",
                    "Open the graph builder and drag a handle from this entity to another one",
                )
            )

    for entity in entities:
        if not (entity.schema_type or "").strip():
            found.append(
                _for_entity(
                    entity,
                    "missing_schema",
                    "high",
                    f'"{entity.name}" has no Schema.org type',
                    "Without Schema markup search engines cannot classify this entity.",
                    "Edit the entity and assign a Schema.org type",
                )
            )

    for entity in entities:
        if not (entity.description or "").strip():
            found.append(
                _for_entity(
                    entity,
                    "missing_description",
                    "medium",
                    f'"{entity.name}" has no description',
                    "Descriptions give search engines semantic context for the entity.",
                    "Edit the entity and add an explanatory description",
                )
            )

    for entity in entities:
        if entity.id in connected and relation_count.get(entity.id, 0) == 1:
            found.append(
                _for_entity(
                    entity,
                    "low_relations",
                    "low",
                    f'"{entity.name}" has only 1 connection',
                    "Entities with few connections carry less semantic weight.",
                    "Connect this entity to more relevant entities",
                )
            )

    suggested_types: set[str] = set()
    for source_type in present_types:
        for suggestion in COMPANION_SUGGESTIONS.get(source_type, ()):
            if suggestion.entity_type in present_type_set or suggestion.entity_type in suggested_types:
                continue
            suggested_types.add(suggestion.entity_type)
            found.append(
                Recommendation(
                    kind="suggested_entity",
                    priority="medium",
                    title=f"Create entity: {suggestion.name}",
                    description=suggestion.reason,
                    action=f'Create an entity of type "{suggestion.entity_type}" in the graph builder',
                    suggested_entity_type=suggestion.entity_type,
                    suggested_name=suggestion.name,
                    suggested_description=suggestion.description,
                    suggested_schema_type=suggestion.schema_type,
                    source_entity_type=source_type,
                )
            )

    for suggestion in RELATION_SUGGESTIONS:
        if suggestion.subject_type not in present_type_set or suggestion.object_type not in present_type_set:
            continue
        if (suggestion.subject_type, suggestion.object_type, suggestion.predicate) in typed_triples:
            continue
        found.append(
            Recommendation(
                kind="suggested_relation",
                priority="low",
                title=f"Connect {suggestion.subject_type} → {suggestion.predicate} → {suggestion.object_type}",
                description=suggestion.reason,
                action="Create this connection in the graph builder by dragging between the entities",
                subject_type=suggestion.subject_type,
                object_type=suggestion.object_type,
                predicate=suggestion.predicate,
            )
        )

    if schema_index is not None:
        for entity in entities:
            schema_type = (entity.schema_type or "").strip()
            if not schema_type or schema_type not in schema_index:
                continue
            completion = property_completion(
                schema_index, schema_type, entity.schema_properties, entity_name=entity.name
            )
            if completion.missing:
                rec = _for_entity(
                    entity,
                    "missing_required_properties",
                    "medium",
                    f'"{entity.name}" is missing required {schema_type} properties',
                    f"{completion.filled} of {completion.total} required properties are filled.",
                    "Fill in: " + ", ".join(completion.missing),
                )
                rec.missing_properties = list(completion.missing)
                found.append(rec)

    for relation in valid:
        if relation.subject_id == relation.object_id:
            entity = by_id[relation.subject_id]
            rec = _for_entity(
                entity,
                "self_reference",
                "medium",
                f'"{entity.name}" {relation.predicate} itself',
                "A relation from an entity to itself is usually a connection mistake.",
                "Point this relation at a different entity or remove it",
            )
            rec.relation_id = relation.id
            rec.predicate = relation.predicate
            found.append(rec)

    seen_triples: set[tuple[str, str, str]] = set()
    for relation in valid:
        key = (relation.subject_id, relation.predicate, relation.object_id)
        if key not in seen_triples:
            seen_triples.add(key)
            continue
        subject = by_id[relation.subject_id]
        obj = by_id[relation.object_id]
        found.append(
            Recommendation(
                kind="redundant_relation",
                priority="low",
                title=f'Duplicate triple "{subject.name}" {relation.predicate} "{obj.name}"',
                description="The same triple is declared more than once.",
                action="Remove the duplicate in the triples table",
                entity_id=subject.id,
                entity_name=subject.name,
                relation_id=relation.id,
                predicate=relation.predicate,
                target_tab=TAB_BY_KIND["redundant_relation"],
            )
        )

    return sorted(found, key=lambda rec: PRIORITY_ORDER[rec.priority])


def _for_entity(
    entity: EntityRead,
    kind: str,
    priority: Priority,
    title: str,
    description: str,
    action: str,
) -> Recommendation:
    return Recommendation(
        kind=kind,
        priority=priority,
        title=title,
        description=description,
        action=action,
        entity_id=entity.id,
        entity_name=entity.name,
        target_tab=TAB_BY_KIND.get(kind),
    )


def dispatch_recommendation(
    recommendation: Recommendation,
    events: UiEventBus,
    notifier: NotificationSink,
) -> UiEvent | None:
    """Ask the host UI to switch to the tab that fixes a "go fix" recommendation."""

    tab = recommendation.target_tab or TAB_BY_KIND.get(recommendation.kind)
    if tab is None:
        return None
    event = events.switch_tab(tab)
    subject = recommendation.entity_name or recommendation.predicate or "the graph"
    notifier.success(f"Opening the {tab} tab", f"Fix: {subject}")
    return event


def apply_suggested_relation(store: GraphStore, recommendation: Recommendation) -> RelationRead:
    """Create the suggested triple between the first entities of both types."""

    if recommendation.kind != "suggested_relation" or not recommendation.predicate:
        raise ValidationError("Recommendation is not a relation suggestion.")
    entities = store.list_entities()
    subject = next((item for item in entities if item.entity_type == recommendation.subject_type), None)
    obj = next((item for item in entities if item.entity_type == recommendation.object_type), None)
    if subject is None or obj is None:
        raise ValidationError(
            f"No {recommendation.subject_type} or {recommendation.object_type} entity to connect."
        )
    relation = store.create_relation(subject.id, obj.id, recommendation.predicate)
    logger.info(
        "semgraph.suggested_relation_applied project_id=%s subject_id=%s predicate=%s object_id=%s",
        store.project_id,
        subject.id,
        relation.predicate,
        obj.id,
    )
    return relation


def apply_recommendation(
    store: GraphStore,
    recommendation: Recommendation,
    events: UiEventBus,
) -> RecommendationOutcome:
    """Carry out one recommendation: create records or request a tab switch."""

    if recommendation.kind == "suggested_relation":
        relation = apply_suggested_relation(store, recommendation)
        return RecommendationOutcome(
            kind=recommendation.kind,
            message=f"{recommendation.subject_type} → {relation.predicate} → {recommendation.object_type}",
            relations=[relation],
        )
    if recommendation.kind == "suggested_entity":
        result = expand_from_suggestion(store, recommendation)
        return RecommendationOutcome(
            kind=recommendation.kind,
            message=f"{len(result.entities)} entities and {len(result.relations)} relations created",
            entities=result.entities,
            relations=result.relations,
        )
    event = dispatch_recommendation(recommendation, events, store.notifier)
    tab = event.detail["tab"] if event is not None else None
    return RecommendationOutcome(
        kind=recommendation.kind,
        target_tab=tab,
        message=f"Switch to the {tab} tab" if tab else "Nothing to do",
    )

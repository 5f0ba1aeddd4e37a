"""Niche template validation, instantiation and persistence."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from time import perf_counter

from semgraph.config import get_settings
from semgraph.errors import NotFoundError, PartialFailure, PersistenceError, ValidationError
from semgraph.schema.entity_types import normalize_entity_type
from semgraph.schema.niche_templates import NICHE_TEMPLATES, get_niche_template
from semgraph.schemas.entity import EntityDraft
from semgraph.schemas.relation import RelationDraft
from semgraph.schemas.templates import (
    GenerationResult,
    IndexedRelation,
    InstantiatedGraph,
    NicheTemplate,
    TemplateSummary,
)
from semgraph.services.graph_store import GraphStore

logger = logging.getLogger(__name__)


def list_templates() -> list[TemplateSummary]:
    return [
        TemplateSummary(
            key=template.key,
            label=template.label,
            description=template.description,
            icon=template.icon,
            entity_count=len(template.entities),
            relation_count=len(template.relations),
        )
        for template in NICHE_TEMPLATES
    ]


def require_template(key: str) -> NicheTemplate:
    template = get_niche_template(key)
    if template is None:
        raise NotFoundError(f"Template not found: {key}")
    return template.model_copy(deep=True)


def validate_template(template: NicheTemplate) -> None:
    """Raise ValidationError for any authoring defect in the template."""

    size = len(template.entities)
    if size == 0:
        raise ValidationError(f"Template {template.key} has no entities")

    for position, stub in enumerate(template.entities):
        try:
            normalize_entity_type(stub.entity_type)
        except ValidationError as exc:
            raise ValidationError(f"Template {template.key} entity {position}: {exc}") from exc

    for position, relation in enumerate(template.relations):
        for index in (relation.subject_index, relation.object_index):
            if not 0 <= index < size:
                raise ValidationError(
                    f"Template {template.key} relation {position} references entity index {index} "
                    f"outside 0..{size - 1}"
                )
        if not relation.predicate.strip():
            raise ValidationError(f"Template {template.key} relation {position} has a blank predicate")

    keys: set[str] = set()
    for question in [*template.scope_questions, *template.data_questions]:
        if question.key in keys:
            raise ValidationError(f"Template {template.key} repeats question key {question.key}")
        keys.add(question.key)

    for question in template.scope_questions:
        bad = [index for index in question.entity_indices if not 0 <= index < size]
        if bad:
            raise ValidationError(
                f"Template {template.key} scope question {question.key} references entity index {bad[0]}"
            )
    for question in template.data_questions:
        if not 0 <= question.entity_index < size:
            raise ValidationError(
                f"Template {template.key} data question {question.key} references entity index "
                f"{question.entity_index}"
            )


def circle_layout(
    count: int,
    *,
    center: tuple[float, float] | None = None,
    radius: float | None = None,
) -> list[tuple[float, float]]:
    """Evenly spaced points on a circle, angle 2*pi*i/count."""

    settings = get_settings()
    cx, cy = center if center is not None else (
        settings.template_layout_center_x,
        settings.template_layout_center_y,
    )
    r = settings.template_layout_radius if radius is None else radius
    points: list[tuple[float, float]] = []
    for i in range(count):
        angle = 2 * math.pi * i / count
        points.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    return points


def instantiate(
    template: NicheTemplate,
    scope_answers: Mapping[str, bool] | None = None,
    data_answers: Mapping[str, str] | None = None,
) -> InstantiatedGraph:
    """Produce entity drafts and index-addressed relations from a template."""

    validate_template(template)
    working = template.model_copy(deep=True)
    scope_answers = scope_answers or {}
    data_answers = data_answers or {}

    for question in working.data_questions:
        answer = (data_answers.get(question.key) or "").strip()
        if not answer:
            if question.required:
                raise ValidationError(f"Answer required: {question.prompt}")
            continue
        setattr(working.entities[question.entity_index], question.field, answer)

    removed: set[int] = set()
    for question in working.scope_questions:
        if scope_answers.get(question.key, question.default) is False:
            removed.update(question.entity_indices)

    remap: dict[int, int] = {}
    for old_index in range(len(working.entities)):
        if old_index not in removed:
            remap[old_index] = len(remap)

    survivors = [stub for index, stub in enumerate(working.entities) if index in remap]
    relations = [
        IndexedRelation(
            subject_index=remap[relation.subject_index],
            object_index=remap[relation.object_index],
            predicate=relation.predicate,
        )
        for relation in working.relations
        if relation.subject_index in remap and relation.object_index in remap
    ]
    for item in relations:
        if not (0 <= item.subject_index < len(survivors) and 0 <= item.object_index < len(survivors)):
            raise RuntimeError("relation index outside the instantiated entity list")

    positions = circle_layout(len(survivors))
    entities = [
        EntityDraft(
            name=stub.name.strip() or stub.placeholder.strip() or normalize_entity_type(stub.entity_type),
            entity_type=normalize_entity_type(stub.entity_type),
            schema_type=(stub.schema_type or "").strip() or None,
            description=stub.description.strip() or None,
            position_x=x,
            position_y=y,
        )
        for stub, (x, y) in zip(survivors, positions)
    ]
    return InstantiatedGraph(entities=entities, relations=relations, removed_indices=sorted(removed))


def compile_relations(instantiated: InstantiatedGraph, entity_ids: Sequence[str]) -> list[RelationDraft]:
    """Replace entity indices with the ids the persisted entities received."""

    if len(entity_ids) != len(instantiated.entities):
        raise ValidationError(
            f"Expected {len(instantiated.entities)} entity ids, got {len(entity_ids)}"
        )
    return [
        RelationDraft(
            subject_id=entity_ids[relation.subject_index],
            object_id=entity_ids[relation.object_index],
            predicate=relation.predicate,
        )
        for relation in instantiated.relations
    ]


def generate_from_template(
    store: GraphStore,
    template: NicheTemplate,
    scope_answers: Mapping[str, bool] | None = None,
    data_answers: Mapping[str, str] | None = None,
) -> GenerationResult:
    """Persist an instantiated template: all entities first, then relations.

    A relation failure keeps the entities and raises PartialFailure.
    """

    started = perf_counter()
    instantiated = instantiate(template, scope_answers, data_answers)
    entities = store.create_entities(instantiated.entities)
    drafts = compile_relations(instantiated, [entity.id for entity in entities])
    try:
        relations = store.create_relations(drafts)
    except (PersistenceError, ValidationError) as exc:
        logger.warning(
            "semgraph.template_partial_failure project_id=%s template=%s entities=%d error=%s",
            store.project_id,
            template.key,
            len(entities),
            exc,
        )
        store.notifier.failure(
            "Template partially generated",
            f"{len(entities)} entities were created but their relations failed: {exc}",
        )
        raise PartialFailure(
            f"Template {template.key}: entities created, relations failed ({exc})",
            failed_step="relations",
            created_entity_ids=[entity.id for entity in entities],
        ) from exc

    logger.info(
        "semgraph.template_generated project_id=%s template=%s entities=%d relations=%d removed=%d duration_ms=%.2f",
        store.project_id,
        template.key,
        len(entities),
        len(relations),
        len(instantiated.removed_indices),
        (perf_counter() - started) * 1000.0,
    )
    return GenerationResult(entities=entities, relations=relations)

"""Connectivity and authority analysis over a graph snapshot."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from semgraph.schema.hierarchy import SchemaHierarchyIndex, property_completion
from semgraph.schemas.entity import EntityRead
from semgraph.schemas.insights import (
    AuthorityScores,
    AuthorityTier,
    GraphMetrics,
    PredicateCount,
    TypeCount,
)
from semgraph.schemas.relation import RelationRead

SUB_SCORE_CAP = 25.0
ENTITY_TARGET = 15
DENSITY_TARGET = 1.5
DEFAULT_PREDICATE_LIMIT = 8


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""

    return int(math.floor(value + 0.5))


def authority_tier(score: int) -> AuthorityTier:
    if score >= 70:
        return "strong"
    if score >= 40:
        return "developing"
    return "early"


def _percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100) if whole else 0


def _cap(value: float) -> float:
    return max(0.0, min(value, SUB_SCORE_CAP))


def authority_scores(
    entity_count: int,
    relation_count: int,
    with_schema: int,
    disconnected_count: int,
) -> AuthorityScores:
    """The four orthogonal sub-scores, each independently capped at 25."""

    entity_score = min(entity_count / ENTITY_TARGET, 1) * SUB_SCORE_CAP
    density_score = (
        min(relation_count / (entity_count * DENSITY_TARGET), 1) * SUB_SCORE_CAP if entity_count > 1 else 0.0
    )
    schema_score = with_schema / entity_count * SUB_SCORE_CAP if entity_count > 0 else 0.0
    connectivity_score = (
        (entity_count - disconnected_count) / entity_count * SUB_SCORE_CAP if entity_count > 0 else 0.0
    )
    return AuthorityScores(
        entity_count=_cap(entity_score),
        relation_density=_cap(density_score),
        schema_coverage=_cap(schema_score),
        connectivity=_cap(connectivity_score),
    )


def analyze(
    entities: Sequence[EntityRead],
    relations: Sequence[RelationRead],
    *,
    predicate_limit: int = DEFAULT_PREDICATE_LIMIT,
    schema_index: SchemaHierarchyIndex | None = None,
) -> GraphMetrics:
    """Compute connectivity, distributions and the authority score.

    Relations whose endpoints are not in `entities` are skipped.
    """

    known_ids = {entity.id for entity in entities}
    valid_relations = [
        relation
        for relation in relations
        if relation.subject_id in known_ids and relation.object_id in known_ids
    ]

    connected: dict[str, None] = {}
    relation_counts: Counter[str] = Counter()
    for relation in valid_relations:
        connected.setdefault(relation.subject_id, None)
        connected.setdefault(relation.object_id, None)
        relation_counts[relation.subject_id] += 1
        relation_counts[relation.object_id] += 1

    disconnected = [entity for entity in entities if entity.id not in connected]
    type_counts = Counter(entity.entity_type for entity in entities)
    predicate_counts = Counter(relation.predicate for relation in valid_relations)

    entity_count = len(entities)
    relation_count = len(valid_relations)
    with_schema = sum(1 for entity in entities if (entity.schema_type or "").strip())
    with_description = sum(1 for entity in entities if (entity.description or "").strip())

    scores = authority_scores(entity_count, relation_count, with_schema, len(disconnected))
    total = round_half_up(
        scores.entity_count + scores.relation_density + scores.schema_coverage + scores.connectivity
    )
    total = max(0, min(total, 100))

    return GraphMetrics(
        entity_count=entity_count,
        relation_count=relation_count,
        connected_ids=list(connected),
        disconnected=list(disconnected),
        relation_count_by_entity=dict(relation_counts),
        type_distribution=[
            TypeCount(entity_type=entity_type, count=count) for entity_type, count in type_counts.most_common()
        ],
        predicate_distribution=[
            PredicateCount(predicate=predicate, count=count)
            for predicate, count in predicate_counts.most_common(predicate_limit)
        ],
        scores=scores,
        authority_score=total,
        authority_tier=authority_tier(total),
        with_schema=with_schema,
        with_description=with_description,
        unique_predicates=len(predicate_counts),
        schema_coverage_pct=_percent(with_schema, entity_count),
        connectivity_pct=_percent(entity_count - len(disconnected), entity_count),
        schema_property_coverage_pct=_schema_property_coverage(entities, schema_index),
    )


def _schema_property_coverage(
    entities: Sequence[EntityRead],
    schema_index: SchemaHierarchyIndex | None,
) -> int:
    """Filled share of required properties across entities whose schema type is catalogued."""

    if schema_index is None:
        return 0
    filled = 0
    total = 0
    for entity in entities:
        if not entity.schema_type or entity.schema_type not in schema_index:
            continue
        completion = property_completion(
            schema_index,
            entity.schema_type,
            entity.schema_properties,
            entity_name=entity.name,
        )
        filled += completion.filled
        total += completion.total
    return _percent(filled, total)

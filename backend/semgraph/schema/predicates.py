"""Predicate vocabulary and label normalization for relations."""

from __future__ import annotations

import re

from semgraph.errors import ValidationError
from semgraph.schema.suggestions import RELATION_SUGGESTIONS

_CORE_PREDICATES: tuple[str, ...] = (
    "offers",
    "owns",
    "located_in",
    "works_at",
    "reviews",
    "related_to",
    "part_of",
    "created",
)


def _build_vocabulary() -> tuple[str, ...]:
    vocabulary = list(_CORE_PREDICATES)
    for suggestion in RELATION_SUGGESTIONS:
        if suggestion.predicate not in vocabulary:
            vocabulary.append(suggestion.predicate)
    return tuple(vocabulary)


SUGGESTED_PREDICATES: tuple[str, ...] = _build_vocabulary()


def normalize_predicate_label(value: str | None) -> str:
    """Normalize predicate labels to snake_case."""

    if not value:
        return ""
    cleaned = re.sub(r"\s+", " ", value).strip(" \t\r\n.,:;\"'")
    if not cleaned:
        return ""
    return re.sub(r"[^\w]+", "_", cleaned.lower()).strip("_")


def require_predicate(value: str | None) -> str:
    """Normalize a predicate or raise ValidationError when nothing is left."""

    normalized = normalize_predicate_label(value)
    if not normalized:
        raise ValidationError("Predicate is required.")
    return normalized


def suggest_predicates(subject_type: str | None = None, object_type: str | None = None) -> list[str]:
    """Predicates ranked for a subject/object type pair, vocabulary order after that."""

    ranked: list[str] = []
    for suggestion in RELATION_SUGGESTIONS:
        if subject_type is not None and suggestion.subject_type != subject_type:
            continue
        if object_type is not None and suggestion.object_type != object_type:
            continue
        if suggestion.predicate not in ranked:
            ranked.append(suggestion.predicate)
    if subject_type is None and object_type is None:
        ranked = []
    for predicate in SUGGESTED_PREDICATES:
        if predicate not in ranked:
            ranked.append(predicate)
    return ranked

"""Schema vocabulary: entity types, predicates, and the Schema.org hierarchy."""

from semgraph.schema.catalog import SCHEMA_CATALOG, get_schema_index
from semgraph.schema.entity_types import ENTITY_TYPE_VALUES, normalize_entity_type
from semgraph.schema.hierarchy import (
    SchemaHierarchyIndex,
    SchemaProperty,
    SchemaTypeNode,
    build_tree,
    property_completion,
)
from semgraph.schema.predicates import SUGGESTED_PREDICATES, normalize_predicate_label

__all__ = [
    "ENTITY_TYPE_VALUES",
    "SCHEMA_CATALOG",
    "SUGGESTED_PREDICATES",
    "SchemaHierarchyIndex",
    "SchemaProperty",
    "SchemaTypeNode",
    "build_tree",
    "get_schema_index",
    "normalize_entity_type",
    "normalize_predicate_label",
    "property_completion",
]

"""Schema.org catalog, entity type and predicate vocabulary routes."""

from fastapi import APIRouter, HTTPException, Query

from semgraph.schema.catalog import get_schema_index
from semgraph.schema.entity_types import (
    ENTITY_TYPE_SET,
    ENTITY_TYPE_VALUES,
    entity_presentation,
    relation_presentation,
    suggested_schema_types,
)
from semgraph.schema.hierarchy import SchemaHierarchyIndex, SchemaTypeNode
from semgraph.schema.predicates import suggest_predicates
from semgraph.schemas.common import ApiResponse
from semgraph.schemas.graph import JsonLdScript
from semgraph.schemas.schema_catalog import (
    EntityTypeRead,
    PredicateRead,
    SchemaPropertyRead,
    SchemaTypeDetail,
    SchemaTypeRead,
)
from semgraph.services.jsonld import template_json_ld

router = APIRouter(prefix="/schema")


def _type_read(index: SchemaHierarchyIndex, node: SchemaTypeNode) -> SchemaTypeRead:
    return SchemaTypeRead(
        name=node.name,
        parent=node.parent,
        description=node.description,
        category=node.category,
        search_feature=node.search_feature,
        child_names=[child.name for child in node.children],
        descendant_count=index.descendant_count(node.name),
    )


def _require_type(index: SchemaHierarchyIndex, name: str) -> SchemaTypeNode:
    node = index.find_by_name(name)
    if node is None:
        raise HTTPException(status_code=404, detail="Schema type not found")
    return node


@router.get("/types", response_model=ApiResponse[list[SchemaTypeRead]])
def list_schema_types(
    category: str | None = Query(default=None),
) -> ApiResponse[list[SchemaTypeRead]]:
    """List catalog types in preorder, optionally filtered by category."""

    index = get_schema_index()
    nodes = [node for node in index.walk() if category is None or node.category == category]
    return ApiResponse(data=[_type_read(index, node) for node in nodes])


@router.get("/types/search", response_model=ApiResponse[list[SchemaTypeRead]])
def search_schema_types(
    q: str = Query(default=""),
    limit: int = Query(default=50, ge=1, le=200),
) -> ApiResponse[list[SchemaTypeRead]]:
    index = get_schema_index()
    return ApiResponse(data=[_type_read(index, node) for node in index.search(q)[:limit]])


@router.get("/categories", response_model=ApiResponse[list[str]])
def list_categories() -> ApiResponse[list[str]]:
    return ApiResponse(data=get_schema_index().categories())


@router.get("/types/{name}", response_model=ApiResponse[SchemaTypeDetail])
def get_schema_type(name: str) -> ApiResponse[SchemaTypeDetail]:
    """Return one type with its ancestor chain and inherited properties."""

    index = get_schema_index()
    node = _require_type(index, name)
    chain = index.ancestors_of(name)

    defined_by: dict[str, str] = {}
    for ancestor in reversed(chain):
        for prop in ancestor.properties:
            defined_by[prop.name] = ancestor.name

    base = _type_read(index, node)
    detail = SchemaTypeDetail(
        **base.model_dump(),
        ancestors=[ancestor.name for ancestor in chain[1:]],
        properties=[
            SchemaPropertyRead(
                name=prop.name,
                required=prop.required,
                description=prop.description,
                example=prop.example,
                defined_by=defined_by.get(prop.name),
            )
            for prop in index.properties_of(name, include_inherited=True)
        ],
    )
    return ApiResponse(data=detail)


@router.get("/types/{name}/json-ld", response_model=ApiResponse[JsonLdScript])
def get_schema_type_example(name: str) -> ApiResponse[JsonLdScript]:
    """Return an example JSON-LD document for a catalog type."""

    index = get_schema_index()
    _require_type(index, name)
    return ApiResponse(data=template_json_ld(index, name))


@router.get("/entity-types", response_model=ApiResponse[list[EntityTypeRead]])
def list_entity_types() -> ApiResponse[list[EntityTypeRead]]:
    """List the controlled entity types with render hints."""

    items: list[EntityTypeRead] = []
    for value in ENTITY_TYPE_VALUES:
        presentation = entity_presentation(value)
        items.append(
            EntityTypeRead(
                value=value,
                label=presentation.label,
                icon=presentation.icon,
                color=presentation.color,
                suggested_schema_types=list(suggested_schema_types(value)),
            )
        )
    return ApiResponse(data=items)


@router.get("/predicates", response_model=ApiResponse[list[str]])
def list_predicates(
    subject_type: str | None = Query(default=None),
    object_type: str | None = Query(default=None),
) -> ApiResponse[list[str]]:
    """Suggest predicates, ranking the ones known for the given type pair first."""

    for value in (subject_type, object_type):
        if value is not None and value not in ENTITY_TYPE_SET:
            raise HTTPException(status_code=422, detail=f"Unknown entity type: {value}")
    return ApiResponse(data=suggest_predicates(subject_type, object_type))


@router.get("/predicates/presentation", response_model=ApiResponse[list[PredicateRead]])
def list_predicate_presentations(
    subject_type: str | None = Query(default=None),
    object_type: str | None = Query(default=None),
) -> ApiResponse[list[PredicateRead]]:
    """Suggested predicates with the label, icon and color their edges render with."""

    for value in (subject_type, object_type):
        if value is not None and value not in ENTITY_TYPE_SET:
            raise HTTPException(status_code=422, detail=f"Unknown entity type: {value}")
    items: list[PredicateRead] = []
    for predicate in suggest_predicates(subject_type, object_type):
        presentation = relation_presentation(predicate)
        items.append(
            PredicateRead(
                value=predicate,
                label=presentation.label,
                icon=presentation.icon,
                color=presentation.color,
            )
        )
    return ApiResponse(data=items)

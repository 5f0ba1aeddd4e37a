"""Project graph routes: entities, relations, triples and layout."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field

from semgraph.db.dependencies import get_graph_store
from semgraph.schemas.common import ApiResponse
from semgraph.schemas.entity import EntityDraft, EntityRead
from semgraph.schemas.graph import EntityNeighborhood, GraphSnapshot, JsonLdScript
from semgraph.schemas.mutations import DeleteResult, EntityUpdateRequest, PositionBatchRequest
from semgraph.schemas.relation import RelationDraft, RelationRead, TripleRead
from semgraph.services.background_jobs import flush_project, queue_positions as queue_project_positions
from semgraph.services.edge_creation import EdgeCreationFlow
from semgraph.services.graph_store import GraphStore
from semgraph.services.jsonld import graph_json_ld_scripts

router = APIRouter(prefix="/projects/{project_id}")


class CompanionRequest(BaseModel):
    """Entity dropped on empty canvas plus the predicate linking it to the source."""

    predicate: str = Field(min_length=1)
    entity: EntityDraft
    x: float
    y: float


class CompanionRead(BaseModel):
    entity: EntityRead
    relation: RelationRead


class PositionQueueResult(BaseModel):
    queued: int
    pending: int


@router.get("/graph", response_model=ApiResponse[GraphSnapshot])
def get_graph(store: GraphStore = Depends(get_graph_store)) -> ApiResponse[GraphSnapshot]:
    """Return every entity and relation of the project."""

    return ApiResponse(data=store.snapshot())


@router.get("/entities", response_model=ApiResponse[list[EntityRead]])
def list_entities(store: GraphStore = Depends(get_graph_store)) -> ApiResponse[list[EntityRead]]:
    return ApiResponse(data=store.list_entities())


@router.post("/entities", response_model=ApiResponse[EntityRead], status_code=201)
def create_entity(
    payload: EntityDraft,
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[EntityRead]:
    return ApiResponse(data=store.create_entity(payload))


@router.get("/entities/{entity_id}", response_model=ApiResponse[EntityNeighborhood])
def get_entity_neighborhood(
    entity_id: str = Path(..., min_length=1),
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[EntityNeighborhood]:
    """Return one entity with its incoming and outgoing triples."""

    if not store.has_entity(entity_id):
        raise HTTPException(status_code=404, detail="Entity not found")
    return ApiResponse(data=store.neighborhood(entity_id))


@router.patch("/entities/{entity_id}", response_model=ApiResponse[EntityRead])
def patch_entity(
    payload: EntityUpdateRequest,
    entity_id: str = Path(..., min_length=1),
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[EntityRead]:
    """Edit one entity."""

    if not store.has_entity(entity_id):
        raise HTTPException(status_code=404, detail="Entity not found")
    return ApiResponse(data=store.update_entity(entity_id, payload))


@router.delete("/entities/{entity_id}", response_model=ApiResponse[DeleteResult])
def remove_entity(
    entity_id: str = Path(..., min_length=1),
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[DeleteResult]:
    """Delete one entity and every relation touching it; unknown ids are a no-op."""

    deleted = store.delete_entity(entity_id)
    return ApiResponse(data=DeleteResult(id=entity_id, deleted=deleted))


@router.post(
    "/entities/{entity_id}/companion",
    response_model=ApiResponse[CompanionRead],
    status_code=201,
)
def create_companion(
    payload: CompanionRequest,
    entity_id: str = Path(..., min_length=1),
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[CompanionRead]:
    """Create a new entity where a connection was dropped and link the source to it."""

    flow = EdgeCreationFlow(store)
    flow.begin_drag(entity_id)
    flow.release_on_canvas(payload.x, payload.y)
    result = flow.confirm_companion(payload.predicate, payload.entity)
    return ApiResponse(data=CompanionRead(entity=result.entity, relation=result.relation))


@router.post("/positions", response_model=ApiResponse[PositionQueueResult], status_code=202)
def queue_positions(
    payload: PositionBatchRequest,
    project_id: str = Path(..., min_length=1, max_length=64),
) -> ApiResponse[PositionQueueResult]:
    """Queue node positions; they are written after the auto-save quiet period."""

    pending = queue_project_positions(
        project_id.strip(), [(item.entity_id, item.x, item.y) for item in payload.positions]
    )
    return ApiResponse(data=PositionQueueResult(queued=len(payload.positions), pending=pending))


@router.post("/positions/flush", response_model=ApiResponse[PositionQueueResult])
def flush_positions(
    project_id: str = Path(..., min_length=1, max_length=64),
) -> ApiResponse[PositionQueueResult]:
    """Write queued positions immediately."""

    written, pending = flush_project(project_id.strip())
    return ApiResponse(data=PositionQueueResult(queued=written, pending=pending))


@router.get("/relations", response_model=ApiResponse[list[RelationRead]])
def list_relations(store: GraphStore = Depends(get_graph_store)) -> ApiResponse[list[RelationRead]]:
    return ApiResponse(data=store.list_relations())


@router.post("/relations", response_model=ApiResponse[RelationRead], status_code=201)
def create_relation(
    payload: RelationDraft,
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[RelationRead]:
    return ApiResponse(
        data=store.create_relation(payload.subject_id, payload.object_id, payload.predicate, payload.confidence)
    )


@router.delete("/relations/{relation_id}", response_model=ApiResponse[DeleteResult])
def remove_relation(
    relation_id: str = Path(..., min_length=1),
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[DeleteResult]:
    deleted = store.delete_relation(relation_id)
    return ApiResponse(data=DeleteResult(id=relation_id, deleted=deleted))


@router.get("/triples", response_model=ApiResponse[list[TripleRead]])
def list_triples(
    q: str | None = Query(default=None),
    predicate: str | None = Query(default=None),
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[list[TripleRead]]:
    """Return triples filtered by free text and predicate."""

    return ApiResponse(data=store.list_triples(search=q, predicate=predicate))


@router.get("/json-ld", response_model=ApiResponse[list[JsonLdScript]])
def get_graph_json_ld(store: GraphStore = Depends(get_graph_store)) -> ApiResponse[list[JsonLdScript]]:
    """Return embeddable JSON-LD scripts for annotated entities."""

    return ApiResponse(data=graph_json_ld_scripts(store.list_entities()))

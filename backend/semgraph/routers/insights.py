"""Graph metrics and recommendation routes."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from semgraph.config import get_settings
from semgraph.db.dependencies import get_graph_store
from semgraph.schema.catalog import get_schema_index
from semgraph.schemas.common import ApiResponse
from semgraph.schemas.insights import GraphMetrics, Recommendation, RecommendationOutcome
from semgraph.services.analyzer import analyze
from semgraph.services.graph_store import GraphStore
from semgraph.services.notifications import UiEvent, UiEventBus
from semgraph.services.recommendations import apply_recommendation, recommend

router = APIRouter(prefix="/projects/{project_id}")


class AppliedRecommendation(BaseModel):
    outcome: RecommendationOutcome
    events: list[UiEvent]


@router.get("/metrics", response_model=ApiResponse[GraphMetrics])
def get_metrics(store: GraphStore = Depends(get_graph_store)) -> ApiResponse[GraphMetrics]:
    """Return connectivity, distributions and the authority score."""

    metrics = analyze(
        store.list_entities(),
        store.list_relations(),
        predicate_limit=get_settings().predicate_distribution_limit,
        schema_index=get_schema_index(),
    )
    return ApiResponse(data=metrics)


@router.get("/recommendations", response_model=ApiResponse[list[Recommendation]])
def get_recommendations(store: GraphStore = Depends(get_graph_store)) -> ApiResponse[list[Recommendation]]:
    return ApiResponse(data=recommend(store.list_entities(), store.list_relations(), get_schema_index()))


@router.post("/recommendations/apply", response_model=ApiResponse[AppliedRecommendation])
def apply_one_recommendation(
    payload: Recommendation,
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[AppliedRecommendation]:
    """Apply a recommendation and report the UI events it requested."""

    events = UiEventBus()
    outcome = apply_recommendation(store, payload, events)
    return ApiResponse(data=AppliedRecommendation(outcome=outcome, events=list(events.emitted)))

"""Niche template wizard routes."""

from fastapi import APIRouter, Depends

from semgraph.db.dependencies import get_graph_store
from semgraph.schemas.common import ApiResponse
from semgraph.schemas.templates import (
    GenerationResult,
    InstantiatedGraph,
    NicheTemplate,
    TemplateAnswers,
    TemplateSummary,
)
from semgraph.services.graph_store import GraphStore
from semgraph.services.templates import generate_from_template, instantiate, list_templates, require_template

router = APIRouter()


@router.get("/templates", response_model=ApiResponse[list[TemplateSummary]])
def get_templates() -> ApiResponse[list[TemplateSummary]]:
    return ApiResponse(data=list_templates())


@router.get("/templates/{key}", response_model=ApiResponse[NicheTemplate])
def get_template(key: str) -> ApiResponse[NicheTemplate]:
    """Return one template with its wizard questions."""

    return ApiResponse(data=require_template(key))


@router.post("/templates/{key}/preview", response_model=ApiResponse[InstantiatedGraph])
def preview_template(key: str, payload: TemplateAnswers) -> ApiResponse[InstantiatedGraph]:
    """Instantiate a template without persisting anything."""

    template = require_template(key)
    return ApiResponse(data=instantiate(template, payload.scope_answers, payload.data_answers))


@router.post(
    "/projects/{project_id}/templates/{key}/generate",
    response_model=ApiResponse[GenerationResult],
    status_code=201,
)
def generate_template(
    key: str,
    payload: TemplateAnswers,
    store: GraphStore = Depends(get_graph_store),
) -> ApiResponse[GenerationResult]:
    """Persist every entity of the instantiated template, then its relations."""

    template = require_template(key)
    result = generate_from_template(store, template, payload.scope_answers, payload.data_answers)
    store.notifier.success(
        "Template generated",
        f"{len(result.entities)} entities and {len(result.relations)} relations created.",
    )
    return ApiResponse(data=result)

"""FastAPI application entrypoint."""

import asyncio
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from semgraph.config import get_settings
from semgraph.errors import (
    HierarchyIntegrityError,
    InvalidTransition,
    NotFoundError,
    PartialFailure,
    PersistenceError,
    ValidationError,
)
from semgraph.routers import graph, insights, schema, templates
from semgraph.schema.catalog import get_schema_index
from semgraph.services.background_jobs import run_autosave_loop

logger = logging.getLogger(__name__)

settings = get_settings()


def _warm_schema_catalog() -> None:
    """Build the schema type index at process start so hierarchy defects surface immediately."""

    index = get_schema_index()
    logger.info("semgraph.startup schema_types=%d", len(index))


@asynccontextmanager
async def lifespan(_: FastAPI):
    _warm_schema_catalog()
    stop = asyncio.Event()
    autosave_task = asyncio.create_task(run_autosave_loop(stop))
    try:
        yield
    finally:
        stop.set()
        try:
            await autosave_task
        except Exception:
            logger.exception("Position auto-save loop failed during shutdown.")


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(graph.router, tags=["graph"])
app.include_router(insights.router, tags=["insights"])
app.include_router(templates.router, tags=["templates"])
app.include_router(schema.router, tags=["schema"])


@app.exception_handler(NotFoundError)
async def not_found_handler(_: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_handler(_: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(InvalidTransition)
async def invalid_transition_handler(_: Request, exc: InvalidTransition) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(PartialFailure)
async def partial_failure_handler(_: Request, exc: PartialFailure) -> JSONResponse:
    """Earlier steps were persisted; report what exists so the client can reconcile."""

    return JSONResponse(
        status_code=207,
        content={
            "detail": str(exc),
            "failed_step": exc.failed_step,
            "created_entity_ids": exc.created_entity_ids,
            "created_relation_ids": exc.created_relation_ids,
        },
    )


@app.exception_handler(PersistenceError)
async def persistence_handler(_: Request, exc: PersistenceError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc), "action": exc.action})


@app.exception_handler(HierarchyIntegrityError)
async def hierarchy_handler(_: Request, exc: HierarchyIntegrityError) -> JSONResponse:
    logger.error("semgraph.schema_hierarchy_invalid error=%s", exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
def health() -> dict[str, str]:
    """Simple health check endpoint."""

    return {"status": "ok"}

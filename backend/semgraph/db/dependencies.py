"""FastAPI database dependencies."""

from collections.abc import Iterator

from fastapi import Depends, Path
from sqlalchemy.orm import Session

from semgraph.db.session import SessionLocal
from semgraph.services.graph_store import GraphStore
from semgraph.services.notifications import LoggingNotificationSink
from semgraph.services.repository import SqlGraphRepository


def get_db() -> Iterator[Session]:
    """Yield a request-scoped session."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_graph_store(
    project_id: str = Path(..., min_length=1, max_length=64),
    db: Session = Depends(get_db),
) -> GraphStore:
    """Graph store for the project in the path, loaded from the database."""

    store = GraphStore(SqlGraphRepository(db), project_id.strip(), LoggingNotificationSink())
    store.load()
    return store

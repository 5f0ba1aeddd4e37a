"""Background jobs: per-project position auto-save."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterable
from functools import partial
from time import perf_counter

from semgraph.config import get_settings
from semgraph.db.session import SessionLocal
from semgraph.services.autosave import PositionAutosaver, PositionBatch
from semgraph.services.graph_store import GraphStore
from semgraph.services.repository import SqlGraphRepository

logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()
_autosavers: dict[str, PositionAutosaver] = {}


def save_positions_job(project_id: str, positions: PositionBatch) -> int:
    """Persist one coalesced position batch in a background-friendly DB session."""

    total_started = perf_counter()
    db = SessionLocal()
    try:
        store = GraphStore(SqlGraphRepository(db), project_id)
        store.load()
        touched = store.update_positions(positions)
        logger.info(
            "semgraph.autosave_timing project_id=%s entries=%d touched=%d total_ms=%.2f",
            project_id,
            len(positions),
            touched,
            (perf_counter() - total_started) * 1000.0,
        )
        return touched
    except Exception:
        logger.exception(
            "semgraph.autosave_job_failed project_id=%s elapsed_ms=%.2f",
            project_id,
            (perf_counter() - total_started) * 1000.0,
        )
        raise
    finally:
        db.close()


def _autosaver_for_locked(project_id: str) -> PositionAutosaver:
    autosaver = _autosavers.get(project_id)
    if autosaver is None:
        autosaver = PositionAutosaver(
            partial(save_positions_job, project_id),
            quiet_seconds=get_settings().autosave_quiet_seconds,
        )
        _autosavers[project_id] = autosaver
    return autosaver


def _release_if_idle(project_id: str, autosaver: PositionAutosaver) -> int:
    """Drop a project's autosaver once its queue is empty; returns the pending count."""

    with _registry_lock:
        pending = len(autosaver.pending)
        if pending == 0 and _autosavers.get(project_id) is autosaver:
            del _autosavers[project_id]
            logger.debug("semgraph.autosave_released project_id=%s", project_id)
        return pending


def queue_positions(project_id: str, positions: Iterable[tuple[str, float, float]]) -> int:
    """Queue `(entity_id, x, y)` updates for a project; returns how many are pending."""

    with _registry_lock:
        autosaver = _autosaver_for_locked(project_id)
        for entity_id, x, y in positions:
            autosaver.queue(entity_id, x, y)
        return len(autosaver.pending)


def flush_project(project_id: str) -> tuple[int, int]:
    """Write a project's queued positions now; returns (written, still pending)."""

    with _registry_lock:
        autosaver = _autosavers.get(project_id)
    if autosaver is None:
        return 0, 0
    written = autosaver.flush()
    return written, _release_if_idle(project_id, autosaver)


def flush_due_autosavers() -> int:
    """Flush every project whose quiet period elapsed; failed projects keep their queue."""

    with _registry_lock:
        items = list(_autosavers.items())
    written = 0
    for project_id, autosaver in items:
        try:
            written += autosaver.flush_due()
        except Exception:
            logger.exception("semgraph.autosave_flush_failed project_id=%s", project_id)
            continue
        _release_if_idle(project_id, autosaver)
    return written


def flush_all_autosavers() -> int:
    with _registry_lock:
        items = list(_autosavers.items())
    written = 0
    for project_id, autosaver in items:
        try:
            written += autosaver.flush()
        except Exception:
            logger.exception("semgraph.autosave_flush_failed project_id=%s", project_id)
            continue
        _release_if_idle(project_id, autosaver)
    return written


async def run_autosave_loop(stop: asyncio.Event, poll_seconds: float | None = None) -> None:
    """Poll the autosavers until `stop` is set, then flush whatever is left."""

    interval = poll_seconds if poll_seconds is not None else get_settings().autosave_poll_seconds
    while not stop.is_set():
        await asyncio.to_thread(flush_due_autosavers)
        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
        except asyncio.TimeoutError:
            continue
    await asyncio.to_thread(flush_all_autosavers)

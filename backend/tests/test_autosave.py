"""Unit tests for debounced position auto-save and its background loop."""

from __future__ import annotations

import asyncio
import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from semgraph.models.base import Base
from semgraph.schemas.entity import EntityDraft
from semgraph.services import background_jobs
from semgraph.services.autosave import PositionAutosaver
from semgraph.services.graph_store import GraphStore
from semgraph.services.repository import SqlGraphRepository


class _FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class PositionAutosaverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _FakeClock()
        self.batches: list[dict] = []
        self.autosaver = PositionAutosaver(self.batches.append, quiet_seconds=1.0, clock=self.clock)

    def test_updates_coalesce_and_wait_for_quiet_period(self) -> None:
        self.autosaver.queue("a", 1, 1)
        self.clock.now = 0.6
        self.autosaver.queue("a", 5, 6)
        self.autosaver.queue("b", 7, 8)

        self.clock.now = 1.2
        self.assertFalse(self.autosaver.is_due())
        self.assertEqual(self.autosaver.flush_due(), 0)

        self.clock.now = 1.7
        self.assertEqual(self.autosaver.flush_due(), 2)
        self.assertEqual(self.batches, [{"a": (5.0, 6.0), "b": (7.0, 8.0)}])
        self.assertEqual(self.autosaver.pending, {})
        self.assertEqual(self.autosaver.flush(), 0)

    def test_failed_write_requeues_without_clobbering_newer_positions(self) -> None:
        autosaver: PositionAutosaver

        def failing_write(batch) -> None:
            autosaver.queue("a", 99, 99)
            raise RuntimeError("database unavailable")

        autosaver = PositionAutosaver(failing_write, quiet_seconds=1.0, clock=self.clock)
        autosaver.queue("a", 1, 2)
        autosaver.queue("b", 3, 4)

        with self.assertLogs("semgraph.services.autosave", level="ERROR"):
            with self.assertRaises(RuntimeError):
                autosaver.flush()

        self.assertEqual(autosaver.pending, {"a": (99.0, 99.0), "b": (3.0, 4.0)})


class AutosaveLoopTests(unittest.TestCase):
    def test_loop_flushes_remaining_positions_on_stop(self) -> None:
        written: list[dict] = []
        autosaver = PositionAutosaver(written.append, quiet_seconds=60.0)
        autosaver.queue("a", 10, 20)

        async def run() -> None:
            stop = asyncio.Event()
            task = asyncio.create_task(background_jobs.run_autosave_loop(stop, poll_seconds=0.01))
            await asyncio.sleep(0.05)
            self.assertEqual(written, [])
            stop.set()
            await task

        with patch.dict(background_jobs._autosavers, {"project-001": autosaver}, clear=True):
            asyncio.run(run())
            self.assertEqual(background_jobs._autosavers, {})

        self.assertEqual(written, [{"a": (10.0, 20.0)}])

    def test_one_failing_project_does_not_stop_the_others(self) -> None:
        def broken(batch) -> None:
            raise RuntimeError("boom")

        written: list[dict] = []
        failing = PositionAutosaver(broken, quiet_seconds=0.0)
        healthy = PositionAutosaver(written.append, quiet_seconds=0.0)
        failing.queue("x", 1, 1)
        healthy.queue("y", 2, 2)

        with patch.dict(background_jobs._autosavers, {"p1": failing, "p2": healthy}, clear=True):
            with self.assertLogs("semgraph.services", level="ERROR"):
                self.assertEqual(background_jobs.flush_due_autosavers(), 1)
            self.assertEqual(list(background_jobs._autosavers), ["p1"])

        self.assertEqual(written, [{"y": (2.0, 2.0)}])
        self.assertEqual(failing.pending, {"x": (1.0, 1.0)})


class AutosaverRegistryTests(unittest.TestCase):
    def test_project_is_released_once_its_queue_is_written(self) -> None:
        with patch.dict(background_jobs._autosavers, {}, clear=True), patch.object(
            background_jobs, "save_positions_job"
        ) as save_job:
            pending = background_jobs.queue_positions("p1", [("a", 1, 2), ("a", 3, 4), ("b", 5, 6)])
            self.assertEqual(pending, 2)
            self.assertIn("p1", background_jobs._autosavers)

            self.assertEqual(background_jobs.flush_project("p1"), (2, 0))
            self.assertNotIn("p1", background_jobs._autosavers)

            self.assertEqual(background_jobs.flush_project("ghost"), (0, 0))
            self.assertEqual(background_jobs._autosavers, {})

        save_job.assert_called_once_with("p1", {"a": (3.0, 4.0), "b": (5.0, 6.0)})

    def test_failed_write_keeps_the_project_registered(self) -> None:
        with patch.dict(background_jobs._autosavers, {}, clear=True), patch.object(
            background_jobs, "save_positions_job", side_effect=RuntimeError("database unavailable")
        ):
            background_jobs.queue_positions("p1", [("a", 1, 2)])
            with self.assertLogs("semgraph.services.autosave", level="ERROR"):
                with self.assertRaises(RuntimeError):
                    background_jobs.flush_project("p1")
            self.assertEqual(background_jobs._autosavers["p1"].pending, {"a": (1.0, 2.0)})


class SavePositionsJobTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autoflush=False, autocommit=False, future=True)
        Base.metadata.create_all(cls.engine)

    @classmethod
    def tearDownClass(cls) -> None:
        Base.metadata.drop_all(cls.engine)
        cls.engine.dispose()

    def test_job_writes_positions_through_the_store(self) -> None:
        with self.SessionLocal() as db:
            store = GraphStore(SqlGraphRepository(db), "job-project")
            entity = store.create_entity(EntityDraft(name="Acme", entity_type="business"))

        with patch.object(background_jobs, "SessionLocal", self.SessionLocal):
            touched = background_jobs.save_positions_job(
                "job-project", {entity.id: (30.0, 40.0), "missing-id": (1.0, 1.0)}
            )

        self.assertEqual(touched, 1)
        with self.SessionLocal() as db:
            store = GraphStore(SqlGraphRepository(db), "job-project")
            store.load()
            moved = store.get_entity(entity.id)
        self.assertEqual((moved.position_x, moved.position_y), (30.0, 40.0))


if __name__ == "__main__":
    unittest.main()

"""Debounced position auto-save."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)

PositionBatch = Mapping[str, tuple[float, float]]


class PositionAutosaver:
    """Coalesces position updates per entity and writes them after a quiet period.

    Every `queue` call restarts the quiet timer; `flush_due` writes one batch
    once `quiet_seconds` passed without a new update.
    """

    def __init__(
        self,
        write_batch: Callable[[PositionBatch], object],
        *,
        quiet_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._write_batch = write_batch
        self.quiet_seconds = quiet_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._pending: dict[str, tuple[float, float]] = {}
        self._versions: dict[str, int] = {}
        self._last_queued_at: float | None = None

    @property
    def pending(self) -> dict[str, tuple[float, float]]:
        with self._lock:
            return dict(self._pending)

    def queue(self, entity_id: str, x: float, y: float) -> None:
        with self._lock:
            self._pending[entity_id] = (float(x), float(y))
            self._versions[entity_id] = self._versions.get(entity_id, 0) + 1
            self._last_queued_at = self._clock()

    def is_due(self) -> bool:
        with self._lock:
            return self._is_due_locked()

    def _is_due_locked(self) -> bool:
        if not self._pending or self._last_queued_at is None:
            return False
        return self._clock() - self._last_queued_at >= self.quiet_seconds

    def flush_due(self) -> int:
        """Write the pending batch when the quiet period elapsed; returns entries written."""

        with self._lock:
            if not self._is_due_locked():
                return 0
        return self.flush()

    def flush(self) -> int:
        """Write every pending entry now.

        On failure the entries come back into the queue unless a newer position
        was queued for the same entity meanwhile.
        """

        with self._lock:
            if not self._pending:
                return 0
            batch = dict(self._pending)
            versions = {entity_id: self._versions[entity_id] for entity_id in batch}
            self._pending.clear()

        try:
            self._write_batch(batch)
        except Exception:
            with self._lock:
                for entity_id, position in batch.items():
                    if self._versions.get(entity_id) == versions[entity_id]:
                        self._pending[entity_id] = position
            logger.exception("semgraph.autosave_failed entries=%d", len(batch))
            raise

        with self._lock:
            for entity_id, version in versions.items():
                if self._versions.get(entity_id) == version and entity_id not in self._pending:
                    del self._versions[entity_id]
        logger.debug("semgraph.autosave_flushed entries=%d", len(batch))
        return len(batch)

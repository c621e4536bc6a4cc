"""Time-boxed in-memory cache for derived listings and statistics."""

import logging
import threading
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 5000


class SessionCache:
    """Holds the project listing, keyed session listings and the stats snapshot.

    All slots share a single "last updated" watermark: a value is returned
    only while `now - watermark < ttl`. Writing any slot re-stamps the
    watermark. `invalidate()` drops the projects and stats slots
    unconditionally; keyed session listings are left to expire with the TTL.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_ms / 1000.0
        self._clock = clock
        self._lock = threading.Lock()
        self._projects: Any = None
        self._stats: Any = None
        self._sessions: dict[str, Any] = {}
        self._last_update: float | None = None
        self._generation = 0

    @staticmethod
    def sessions_key(project_id: str | None, limit: int) -> str:
        return f"{project_id or 'all'}:{limit}"

    @property
    def generation(self) -> int:
        """Bumped by every invalidation.

        Capture it before computing and pass it back to `set_projects` or
        `set_stats`; a snapshot whose computation straddled an invalidation
        is then returned to its caller but not stored.
        """
        return self._generation

    def get_projects(self) -> Any:
        with self._lock:
            return self._projects if self._is_fresh() else None

    def set_projects(self, projects: Any, generation: int | None = None):
        with self._lock:
            if self._superseded(generation):
                return
            self._projects = projects
            self._stamp()

    def get_stats(self) -> Any:
        with self._lock:
            return self._stats if self._is_fresh() else None

    def set_stats(self, stats: Any, generation: int | None = None):
        with self._lock:
            if self._superseded(generation):
                return
            self._stats = stats
            self._stamp()

    def get_sessions(self, key: str) -> Any:
        with self._lock:
            return self._sessions.get(key) if self._is_fresh() else None

    def set_sessions(self, key: str, sessions: Any):
        with self._lock:
            self._sessions[key] = sessions
            self._stamp()

    def invalidate(self, changed_path: str = ""):
        """Drop the projects and stats snapshots. Safe to call from any thread."""
        with self._lock:
            self._projects = None
            self._stats = None
            self._generation += 1
        logger.debug("Cache invalidated by %s", changed_path or "request")

    def clear(self):
        with self._lock:
            self._projects = None
            self._stats = None
            self._sessions.clear()
            self._last_update = None

    def _is_fresh(self) -> bool:
        if self._last_update is None:
            return False
        return self._clock() - self._last_update < self._ttl

    def _superseded(self, generation: int | None) -> bool:
        return generation is not None and generation != self._generation

    def _stamp(self):
        self._last_update = self._clock()

"""Central entry point tying the index, statistics, search and cache together."""

import logging
import time
from pathlib import Path
from typing import Callable

from PySide6.QtCore import QObject, Signal

from claude_session_index.services.config_manager import ConfigManager
from claude_session_index.services.file_watcher import FileWatcher
from claude_session_index.services.path_resolver import PathResolver
from claude_session_index.services.search_engine import SearchEngine
from claude_session_index.services.session_cache import SessionCache
from claude_session_index.services.session_index import SessionIndex
from claude_session_index.services.stats_aggregator import StatsAggregator
from claude_session_index.types import (
    Command,
    Project,
    SearchResult,
    SessionDetail,
    SessionSummary,
    Stats,
)

logger = logging.getLogger(__name__)


class SessionManager(QObject):
    """Query surface for callers (HTTP handlers, CLIs, TUIs).

    Every public method returns a value, possibly empty; faults are logged
    and never propagate. `get_session` returns None when the session does
    not exist, which callers should report as not found.
    """

    watcher_state_changed = Signal(bool)  # active

    def __init__(
        self,
        parent=None,
        config: ConfigManager | None = None,
        projects_root: str | Path | None = None,
        history_file: str | Path | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(parent)
        self._config = config if config is not None else ConfigManager(self)
        self._config.apply_logging()
        self._projects_root = Path(projects_root) if projects_root else self._config.projects_dir()
        self._history_file = Path(history_file) if history_file else self._config.history_file()

        self.cache = SessionCache(ttl_ms=self._config.cache_ttl_ms(), clock=clock)
        self.resolver = PathResolver(
            self._projects_root, max_entries=self._config.get_int("resolver/maxEntries")
        )
        self.index = SessionIndex(self._projects_root, self._history_file, self.cache, self.resolver)
        self.stats = StatsAggregator(self._projects_root, self.cache, self.resolver)
        self.search_engine = SearchEngine(
            self, projects_root=self._projects_root, history_file=self._history_file
        )

        self._watcher = FileWatcher(self, debounce_ms=self._config.get_int("watcher/debounceMs"))
        self._watcher.transcripts_changed.connect(self.cache.invalidate)
        self._watcher_attempted = False

    @property
    def projects_root(self) -> Path:
        return self._projects_root

    @property
    def config(self) -> ConfigManager:
        return self._config

    @property
    def watcher(self) -> FileWatcher:
        return self._watcher

    def ensure_watcher(self) -> bool:
        """Start the change watcher once. Failure only disables invalidation.

        A root that does not exist yet is retried on the next call; any
        other failure is final for the life of the manager.
        """
        if self._watcher_attempted:
            return self._watcher.is_active
        if not self._config.get_bool("watcher/enabled"):
            self._watcher_attempted = True
            logger.info("File watcher disabled by configuration")
            return False
        if not self._projects_root.is_dir():
            logger.debug("Projects root %s missing, deferring watcher start", self._projects_root)
            return False
        self._watcher_attempted = True
        try:
            started = self._watcher.start(self._projects_root)
        except Exception:
            logger.exception("Failed to initialize watcher")
            started = False
        self.watcher_state_changed.emit(started)
        return started

    def list_projects(self) -> list[Project]:
        self.ensure_watcher()
        try:
            return self.index.list_projects()
        except Exception:
            logger.exception("Failed to list projects")
            return []

    def list_sessions(self, project_id: str | None = None, limit: int = 50) -> list[SessionSummary]:
        self.ensure_watcher()
        try:
            return self.index.list_sessions(project_id, limit)
        except Exception:
            logger.exception("Failed to list sessions for %s", project_id or "all projects")
            return []

    def get_session(self, project: str, session_id: str) -> SessionDetail | None:
        try:
            return self.index.get_session(project, session_id)
        except Exception:
            logger.exception("Failed to load session %s/%s", project, session_id)
            return None

    def get_stats(self) -> Stats:
        self.ensure_watcher()
        try:
            return self.stats.compute_stats()
        except Exception:
            logger.exception("Failed to compute stats")
            return Stats()

    def get_history(self, limit: int = 100) -> list[Command]:
        try:
            return self.index.get_history(limit)
        except Exception:
            logger.exception("Failed to read command history")
            return []

    def search(self, query: str, limit: int = 20) -> list[SearchResult]:
        try:
            return self.search_engine.search_all(query, limit)
        except Exception:
            logger.exception("Search failed for %r", query)
            return []

    def cleanup(self):
        """Clean up resources."""
        self._watcher.stop()
        self.cache.clear()

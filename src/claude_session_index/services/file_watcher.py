"""File system watcher that turns transcript changes into cache invalidation signals."""

import logging
import os
from pathlib import Path
from typing import Callable

from PySide6.QtCore import QObject, Signal, QFileSystemWatcher, QTimer

from claude_session_index.utils.path_validation import TRANSCRIPT_SUFFIX

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 100


class FileWatcher(QObject):
    """Watches the projects root one level deep for transcript changes.

    The root, every project directory and every `*.jsonl` file inside them
    are watched. Adding, modifying or removing a transcript emits
    `transcripts_changed` with the affected path. Starting is idempotent;
    a failed start is logged and leaves the watcher inactive.
    """

    transcripts_changed = Signal(str)    # path

    def __init__(self, parent=None, debounce_ms: int = DEFAULT_DEBOUNCE_MS):
        super().__init__(parent)
        self._watcher = QFileSystemWatcher(self)
        self._debounce_ms = debounce_ms
        self._debounce_timers: dict[str, QTimer] = {}
        self._pending: dict[str, Callable[[], None]] = {}
        self._projects_root = ""
        self._started = False
        # project dir -> transcript names seen at the last scan
        self._transcripts: dict[str, set[str]] = {}

        self._watcher.fileChanged.connect(self._on_file_changed)
        self._watcher.directoryChanged.connect(self._on_directory_changed)

    @property
    def is_active(self) -> bool:
        return self._started

    def start(self, projects_root: str | Path) -> bool:
        """Start watching. Returns False if the watcher could not be started."""
        if self._started:
            return True

        root = str(projects_root)
        if not os.path.isdir(root):
            logger.warning("Cannot watch %s: directory does not exist", root)
            return False
        if not self._watcher.addPath(root):
            logger.warning("Failed to initialize watcher on %s", root)
            return False

        self._projects_root = root
        self._started = True
        self._sync_project_dirs()
        logger.info("File watcher initialized on %s", root)
        return True

    def stop(self):
        """Stop all file watching."""
        if self._watcher.files():
            self._watcher.removePaths(self._watcher.files())
        if self._watcher.directories():
            self._watcher.removePaths(self._watcher.directories())
        for key in list(self._debounce_timers):
            self._release_timer(key)
        self._transcripts.clear()
        self._projects_root = ""
        self._started = False

    def _sync_project_dirs(self):
        """Watch every project directory under the root, dropping vanished ones."""
        current = set()
        for name in _list_dir(self._projects_root):
            path = os.path.join(self._projects_root, name)
            if not name.startswith(".") and os.path.isdir(path):
                current.add(path)

        for gone in set(self._transcripts) - current:
            self._forget_dir(gone)

        for project_dir in current:
            if project_dir not in self._transcripts:
                self._watcher.addPath(project_dir)
                self._transcripts[project_dir] = set()
            self._sync_transcripts(project_dir)

    def _sync_transcripts(self, project_dir: str) -> bool:
        """Watch the transcripts of one project. Returns True if the set changed."""
        names = {
            name for name in _list_dir(project_dir)
            if name.endswith(TRANSCRIPT_SUFFIX) and not name.startswith(".")
        }
        previous = self._transcripts.get(project_dir, set())
        for name in names - previous:
            self._watcher.addPath(os.path.join(project_dir, name))
        for name in previous - names:
            self._unwatch(os.path.join(project_dir, name))
        self._transcripts[project_dir] = names
        return names != previous

    def _forget_dir(self, project_dir: str):
        for name in self._transcripts.pop(project_dir, set()):
            self._unwatch(os.path.join(project_dir, name))
        self._unwatch(project_dir)

    def _unwatch(self, path: str):
        """Stop watching a path and drop its debounce timer."""
        if path in self._watcher.files() or path in self._watcher.directories():
            self._watcher.removePath(path)
        self._release_timer(path)

    def _on_file_changed(self, path: str):
        """Handle file change with debounce."""
        self._debounce(path, lambda: self._emit_file_changed(path))

    def _on_directory_changed(self, path: str):
        """Handle directory change with debounce."""
        self._debounce(path, lambda: self._emit_dir_changed(path))

    def _debounce(self, key: str, callback):
        """Debounce a callback by the configured interval using the given key.

        Each key owns one single-shot timer, connected once; a later call
        replaces the pending callback and restarts the timer.
        """
        self._pending[key] = callback
        timer = self._debounce_timers.get(key)
        if timer is None:
            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.timeout.connect(lambda: self._fire(key))
            self._debounce_timers[key] = timer
        timer.start(self._debounce_ms)

    def _fire(self, key: str):
        callback = self._pending.pop(key, None)
        if callback is not None:
            callback()

    def _release_timer(self, key: str):
        self._pending.pop(key, None)
        timer = self._debounce_timers.pop(key, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    def _emit_file_changed(self, path: str):
        if not self._started or not path.endswith(TRANSCRIPT_SUFFIX):
            self._release_timer(path)
            return
        # Qt drops a file from the watch list when it is replaced or removed
        if os.path.exists(path):
            if path not in self._watcher.files():
                self._watcher.addPath(path)
        else:
            self._release_timer(path)
        self.transcripts_changed.emit(path)

    def _emit_dir_changed(self, path: str):
        if not self._started:
            self._release_timer(path)
            return
        if path == self._projects_root:
            before = set(self._transcripts)
            self._sync_project_dirs()
            # A project directory that appears or disappears with transcripts in it
            added = set(self._transcripts) - before
            if before - set(self._transcripts) or any(self._transcripts[d] for d in added):
                self.transcripts_changed.emit(path)
        elif path in self._transcripts:
            if not os.path.isdir(path):
                self._forget_dir(path)
                self.transcripts_changed.emit(path)
            elif self._sync_transcripts(path):
                self.transcripts_changed.emit(path)
        else:
            self._release_timer(path)


def _list_dir(path: str) -> list[str]:
    try:
        return os.listdir(path)
    except OSError:
        return []

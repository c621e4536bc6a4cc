"""Index configuration wrapping QSettings."""

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal, Slot, QSettings

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "claude_session_index"

# Default values
DEFAULTS = {
    "general/claudeDir": "~/.claude",
    "cache/ttlMs": 5000,
    "watcher/enabled": True,
    "watcher/debounceMs": 100,
    "resolver/maxEntries": 1024,
    "api/defaultSessionLimit": 50,
    "api/defaultHistoryLimit": 100,
    "api/defaultSearchLimit": 20,
    "api/minQueryLength": 2,
    "advanced/debugLogging": False,
}


class ConfigManager(QObject):
    """Centralized settings for the session index."""

    settings_changed = Signal(str)  # key

    def __init__(self, parent=None, settings: QSettings | None = None):
        super().__init__(parent)
        self._settings = settings if settings is not None else QSettings()

    @Slot(str, result=str)
    def get_string(self, key: str) -> str:
        return str(self._settings.value(key, DEFAULTS.get(key, "")))

    @Slot(str, result=int)
    def get_int(self, key: str) -> int:
        val = self._settings.value(key, DEFAULTS.get(key, 0))
        try:
            return int(val)
        except (ValueError, TypeError):
            return DEFAULTS.get(key, 0)

    @Slot(str, result=bool)
    def get_bool(self, key: str) -> bool:
        val = self._settings.value(key, DEFAULTS.get(key, False))
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    @Slot(str, str)
    def set_string(self, key: str, value: str):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    @Slot(str, int)
    def set_int(self, key: str, value: int):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    @Slot(str, bool)
    def set_bool(self, key: str, value: bool):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    def claude_dir(self) -> Path:
        return Path(self.get_string("general/claudeDir")).expanduser()

    def projects_dir(self) -> Path:
        return self.claude_dir() / "projects"

    def history_file(self) -> Path:
        return self.claude_dir() / "history.jsonl"

    def cache_ttl_ms(self) -> int:
        return max(self.get_int("cache/ttlMs"), 0)

    def apply_logging(self):
        """Set the package log level from advanced/debugLogging."""
        level = logging.DEBUG if self.get_bool("advanced/debugLogging") else logging.INFO
        logging.getLogger(PACKAGE_LOGGER).setLevel(level)

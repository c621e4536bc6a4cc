"""Services for Claude Session Index."""

from claude_session_index.services.session_manager import SessionManager
from claude_session_index.services.session_cache import SessionCache
from claude_session_index.services.file_watcher import FileWatcher
from claude_session_index.services.path_resolver import PathResolver
from claude_session_index.services.session_index import SessionIndex
from claude_session_index.services.stats_aggregator import StatsAggregator
from claude_session_index.services.search_engine import SearchEngine
from claude_session_index.services.config_manager import ConfigManager

__all__ = [
    "SessionManager",
    "SessionCache",
    "FileWatcher",
    "PathResolver",
    "SessionIndex",
    "StatsAggregator",
    "SearchEngine",
    "ConfigManager",
]

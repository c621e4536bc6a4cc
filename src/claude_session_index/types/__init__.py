"""Type definitions for Claude Session Index."""

from claude_session_index.types.sessions import (
    NO_PREVIEW,
    Command,
    Project,
    SessionDetail,
    SessionPreview,
    SessionSummary,
)
from claude_session_index.types.search import MatchType, SearchResult
from claude_session_index.types.stats import DayStats, GlobalStats, ProjectStats, Stats

__all__ = [
    "NO_PREVIEW",
    "Command",
    "Project",
    "SessionDetail",
    "SessionPreview",
    "SessionSummary",
    "MatchType",
    "SearchResult",
    "DayStats",
    "GlobalStats",
    "ProjectStats",
    "Stats",
]

"""Cross-session full-text search over transcripts and prompt history."""

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal, Slot

from claude_session_index.services.jsonl_parser import stream_jsonl
from claude_session_index.services.session_index import (
    list_project_dirs,
    list_transcripts,
    session_id_of,
)
from claude_session_index.types import MatchType, SearchResult
from claude_session_index.types.search import MAX_MATCHED_CONTENT
from claude_session_index.utils.content import message_content, searchable_text
from claude_session_index.utils.timestamps import to_iso

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class SearchEngine(QObject):
    """Case-insensitive substring search across session files and command history."""

    results_ready = Signal(list)  # list[SearchResult]

    def __init__(self, parent=None, projects_root: Path | None = None, history_file: Path | None = None):
        super().__init__(parent)
        self._projects_root: Path | None = Path(projects_root) if projects_root else None
        self._history_file: Path | None = Path(history_file) if history_file else None

    @Slot(str, int)
    def search(self, query: str, limit: int = 20):
        """Run search_all and emit the results."""
        self.results_ready.emit(self.search_all(query, limit))

    def search_all(self, query: str, limit: int = 20) -> list[SearchResult]:
        """Merge transcript and history matches, newest first.

        Each source is capped at `limit` on its own before merging.
        Results without a timestamp sort last.
        """
        if not query or len(query) < MIN_QUERY_LENGTH or limit <= 0:
            return []

        merged = self.search_sessions(query, limit) + self.search_commands(query, limit)
        merged.sort(key=lambda r: r.sort_key, reverse=True)
        return merged[:limit]

    def search_sessions(self, query: str, limit: int = 20) -> list[SearchResult]:
        """Scan every transcript record, stopping at `limit` matches."""
        results: list[SearchResult] = []
        if not query or limit <= 0 or self._projects_root is None:
            return results

        needle = query.lower()
        for project_dir in list_project_dirs(self._projects_root):
            for transcript in list_transcripts(project_dir):
                session_id = session_id_of(transcript)
                for record in stream_jsonl(transcript):
                    match = _extract_searchable(record)
                    if match is None:
                        continue
                    text, match_type = match
                    if needle not in text.lower():
                        continue

                    results.append(SearchResult(
                        session_id=session_id,
                        project=project_dir.name,
                        timestamp=_record_time(record),
                        matched_content=text[:MAX_MATCHED_CONTENT],
                        match_type=match_type,
                    ))
                    if len(results) >= limit:
                        return results
        return results

    def search_commands(self, query: str, limit: int = 20) -> list[SearchResult]:
        """Scan the prompt history file oldest-first, stopping at `limit` matches."""
        results: list[SearchResult] = []
        if not query or limit <= 0 or self._history_file is None:
            return results

        needle = query.lower()
        for record in stream_jsonl(self._history_file):
            display = record.get("display")
            if not isinstance(display, str) or needle not in display.lower():
                continue

            results.append(SearchResult(
                session_id=record.get("sessionId"),
                project=record.get("project"),
                timestamp=to_iso(record.get("timestamp"), epoch_ms=True),
                matched_content=display[:MAX_MATCHED_CONTENT],
                match_type=MatchType.COMMAND,
            ))
            if len(results) >= limit:
                break
        return results


def _extract_searchable(record: dict) -> tuple[str, MatchType] | None:
    """Searchable text and match type of a record, or None if it has none.

    Hook progress commands take precedence over message content.
    """
    data = record.get("data")
    if isinstance(data, dict) and data.get("type") == "hook_progress":
        command = data.get("command")
        if isinstance(command, str) and command:
            return command, MatchType.SYSTEM

    record_type = record.get("type")
    if record_type not in (MatchType.USER.value, MatchType.ASSISTANT.value):
        return None
    text = searchable_text(message_content(record))
    if not text:
        return None
    return text, MatchType(record_type)


def _record_time(record: dict) -> str | None:
    ts = record.get("timestamp")
    if isinstance(ts, str) and ts:
        return ts
    snapshot = record.get("snapshot")
    if isinstance(snapshot, dict):
        ts = snapshot.get("timestamp")
        if isinstance(ts, str) and ts:
            return ts
    return None

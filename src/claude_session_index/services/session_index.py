"""Project and session listings derived from transcript files."""

import logging
from collections import deque
from pathlib import Path

from claude_session_index.services.jsonl_parser import read_jsonl, read_last_record, stream_jsonl
from claude_session_index.services.path_resolver import PathResolver
from claude_session_index.services.session_cache import SessionCache
from claude_session_index.types import (
    Command,
    Project,
    SessionDetail,
    SessionPreview,
    SessionSummary,
)
from claude_session_index.utils.content import (
    format_preview,
    is_command_echo,
    is_conversation_message,
    is_meta,
    message_content,
    preview_text,
    record_timestamp,
    record_usage,
)
from claude_session_index.utils.path_codec import extract_project_name
from claude_session_index.utils.path_validation import (
    TRANSCRIPT_SUFFIX,
    resolve_project_dir,
    resolve_session_path,
)
from claude_session_index.utils.timestamps import to_iso

logger = logging.getLogger(__name__)

MAX_PROJECT_PREVIEWS = 10


def list_project_dirs(projects_dir: Path) -> list[Path]:
    """Project subdirectories of the logs root; a missing root is simply empty."""
    try:
        return sorted(entry for entry in projects_dir.iterdir() if entry.is_dir())
    except OSError:
        return []


def list_transcripts(project_dir: Path) -> list[Path]:
    """Transcript files directly inside a project directory, by name."""
    try:
        return sorted(
            entry for entry in project_dir.iterdir()
            if entry.name.endswith(TRANSCRIPT_SUFFIX) and entry.is_file()
        )
    except OSError:
        return []


def session_id_of(transcript: Path) -> str:
    return transcript.name[: -len(TRANSCRIPT_SUFFIX)]


class SessionIndex:
    """Builds project and session listings, consulting the cache first."""

    def __init__(
        self,
        projects_dir: str | Path,
        history_file: str | Path,
        cache: SessionCache,
        resolver: PathResolver,
    ):
        self._projects_dir = Path(projects_dir)
        self._history_file = Path(history_file)
        self._cache = cache
        self._resolver = resolver

    def list_projects(self) -> list[Project]:
        cached = self._cache.get_projects()
        if cached is not None:
            return cached

        generation = self._cache.generation
        projects = [self._build_project(d) for d in list_project_dirs(self._projects_dir)]
        self._cache.set_projects(projects, generation)
        return projects

    def _build_project(self, project_dir: Path) -> Project:
        previews = []
        for transcript in list_transcripts(project_dir):
            preview = _preview_for(transcript)
            if preview is not None:
                previews.append(preview)

        # Most recent activity first
        previews.sort(key=lambda p: p.last_message, reverse=True)
        return Project(
            name=project_dir.name,
            path=project_dir.name,
            display_name=extract_project_name(project_dir.name),
            session_count=len(previews),
            sessions=previews[:MAX_PROJECT_PREVIEWS],
        )

    def list_sessions(self, project_id: str | None = None, limit: int = 50) -> list[SessionSummary]:
        """Summaries of the newest sessions, for one project or all of them.

        Each project contributes at most `limit` transcripts (by file name)
        before the combined list is sorted by first timestamp, newest first,
        and cut to `limit`. Sessions without a timestamp sort last.
        """
        key = SessionCache.sessions_key(project_id, limit)
        cached = self._cache.get_sessions(key)
        if cached is not None:
            return cached

        if project_id:
            project_dir = resolve_project_dir(self._projects_dir, project_id)
            project_dirs = [project_dir] if project_dir is not None else []
        else:
            project_dirs = list_project_dirs(self._projects_dir)

        summaries = []
        for project_dir in project_dirs:
            if not project_dir.is_dir():
                continue
            for transcript in list_transcripts(project_dir)[:max(limit, 0)]:
                summary = self._summarize(project_dir.name, transcript)
                if summary is not None:
                    summaries.append(summary)

        summaries.sort(key=lambda s: s.timestamp or "", reverse=True)
        result = summaries[:max(limit, 0)]
        self._cache.set_sessions(key, result)
        return result

    def _summarize(self, project_id: str, transcript: Path) -> SessionSummary | None:
        records = read_jsonl(transcript)
        if not records:
            return None

        summary = SessionSummary(
            session_id=session_id_of(transcript),
            project_id=project_id,
            project_path=self._resolver.resolve_or_name(project_id),
            timestamp=record_timestamp(records[0]),
            last_message=record_timestamp(records[-1]),
        )
        for record in records:
            slug = record.get("slug")
            if summary.slug is None and isinstance(slug, str) and slug:
                summary.slug = slug

            if summary.preview is None and record.get("type") == "user" and not is_meta(record):
                text = preview_text(message_content(record))
                if text and not is_command_echo(text):
                    summary.preview = format_preview(text)

            if is_conversation_message(record):
                summary.message_count += 1

            usage = record_usage(record)
            if usage is not None:
                summary.total_input_tokens += usage[0]
                summary.total_output_tokens += usage[1]
        return summary

    def get_session(self, project: str, session_id: str) -> SessionDetail | None:
        """Full transcript of one session, or None if it does not exist."""
        path = resolve_session_path(self._projects_dir, project, session_id)
        if path is None or not path.is_file():
            return None
        return SessionDetail(project=project, session_id=session_id, messages=read_jsonl(path))

    def get_history(self, limit: int = 100) -> list[Command]:
        """The newest `limit` prompt history entries, newest first."""
        if limit <= 0:
            return []
        tail = deque(stream_jsonl(self._history_file), maxlen=limit)
        return [Command.from_record(record) for record in reversed(tail)]


def _preview_for(transcript: Path) -> SessionPreview | None:
    try:
        stat = transcript.stat()
    except OSError:
        return None

    last_modified = to_iso(stat.st_mtime, epoch_ms=False) or ""
    last_record = read_last_record(transcript)
    last_message = record_timestamp(last_record) if last_record else None
    session_id = session_id_of(transcript)
    return SessionPreview(
        id=session_id,
        name=session_id,
        file_size=stat.st_size,
        last_modified=last_modified,
        last_message=last_message or last_modified,
    )

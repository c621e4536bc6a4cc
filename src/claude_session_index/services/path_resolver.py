"""Resolve encoded project directory names to real working directories."""

import logging
import threading
from pathlib import Path

from claude_session_index.services.jsonl_parser import stream_jsonl
from claude_session_index.utils.path_validation import TRANSCRIPT_SUFFIX, resolve_project_dir

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1024


class PathResolver:
    """Maps `-home-wiz-my-app` style directory names to the cwd recorded in transcripts.

    Results are memoized for the life of the resolver. Entries are never
    overwritten and misses are never stored, so a project whose first
    transcript has no cwd yet is retried on the next call.
    """

    def __init__(self, projects_dir: str | Path, max_entries: int = DEFAULT_MAX_ENTRIES):
        self._projects_dir = Path(projects_dir)
        self._max_entries = max_entries
        self._mapping: dict[str, str] = {}
        self._lock = threading.Lock()
        self.scan_count = 0

    def resolve(self, encoded_dir: str) -> str | None:
        cached = self._mapping.get(encoded_dir)
        if cached is not None:
            return cached

        real_path = self._scan(encoded_dir)
        if real_path is None:
            return None

        with self._lock:
            existing = self._mapping.get(encoded_dir)
            if existing is not None:
                return existing
            if len(self._mapping) < self._max_entries:
                self._mapping[encoded_dir] = real_path
            else:
                logger.debug("Path mapping full, not memoizing %s", encoded_dir)
        return real_path

    def resolve_or_name(self, encoded_dir: str) -> str:
        return self.resolve(encoded_dir) or encoded_dir

    def __len__(self) -> int:
        return len(self._mapping)

    def _scan(self, encoded_dir: str) -> str | None:
        project_dir = resolve_project_dir(self._projects_dir, encoded_dir)
        if project_dir is None:
            return None

        self.scan_count += 1
        try:
            transcripts = sorted(
                entry.name for entry in project_dir.iterdir()
                if entry.name.endswith(TRANSCRIPT_SUFFIX)
            )
        except OSError:
            return None
        if not transcripts:
            return None

        for record in stream_jsonl(project_dir / transcripts[0]):
            cwd = _cwd_hint(record)
            if cwd:
                return cwd

        logger.debug("No cwd found in %s/%s", encoded_dir, transcripts[0])
        return None


def _cwd_hint(record: dict) -> str | None:
    if record.get("type") == "progress":
        data = record.get("data")
        if isinstance(data, dict):
            cwd = data.get("cwd")
            if isinstance(cwd, str) and cwd:
                return cwd
    cwd = record.get("cwd")
    if isinstance(cwd, str) and cwd:
        return cwd
    return None

"""Global, per-project and per-day token usage statistics."""

import logging
from pathlib import Path

from claude_session_index.services.jsonl_parser import stream_jsonl
from claude_session_index.services.path_resolver import PathResolver
from claude_session_index.services.session_cache import SessionCache
from claude_session_index.services.session_index import list_project_dirs, list_transcripts
from claude_session_index.types import DayStats, GlobalStats, ProjectStats, Stats
from claude_session_index.utils.content import record_timestamp, record_usage
from claude_session_index.utils.timestamps import day_key

logger = logging.getLogger(__name__)


class StatsAggregator:
    """Reads every transcript once and accumulates all counters in that pass."""

    def __init__(self, projects_dir: str | Path, cache: SessionCache, resolver: PathResolver):
        self._projects_dir = Path(projects_dir)
        self._cache = cache
        self._resolver = resolver

    def compute_stats(self) -> Stats:
        cached = self._cache.get_stats()
        if cached is not None:
            return cached

        generation = self._cache.generation
        stats = Stats()
        by_day: dict[str, DayStats] = {}

        for project_dir in list_project_dirs(self._projects_dir):
            transcripts = list_transcripts(project_dir)
            project = ProjectStats(
                project=project_dir.name,
                project_path=self._resolver.resolve_or_name(project_dir.name),
                sessions=len(transcripts),
            )
            for transcript in transcripts:
                stats.global_stats.total_sessions += 1
                self._accumulate(transcript, project, by_day)

            stats.global_stats.total_input_tokens += project.input_tokens
            stats.global_stats.total_output_tokens += project.output_tokens
            stats.by_project.append(project)

        stats.global_stats.total_projects = len(stats.by_project)
        stats.by_day = sorted(by_day.values(), key=lambda d: d.date, reverse=True)

        self._cache.set_stats(stats, generation)
        return stats

    @staticmethod
    def _accumulate(transcript: Path, project: ProjectStats, by_day: dict[str, DayStats]):
        session_days: set[str] = set()

        for record in stream_jsonl(transcript):
            timestamp = record_timestamp(record)
            day = day_key(timestamp) if timestamp else None
            if day:
                session_days.add(day)

            usage = record_usage(record)
            if usage is None:
                continue
            input_tokens, output_tokens = usage
            project.input_tokens += input_tokens
            project.output_tokens += output_tokens

            if day:
                bucket = by_day.get(day)
                if bucket is None:
                    bucket = by_day[day] = DayStats(date=day)
                bucket.input_tokens += input_tokens
                bucket.output_tokens += output_tokens

        # One session per distinct day touched
        for day in session_days:
            bucket = by_day.get(day)
            if bucket is None:
                bucket = by_day[day] = DayStats(date=day)
            bucket.sessions += 1

"""Aggregated token usage statistics."""

from dataclasses import dataclass, field


@dataclass
class GlobalStats:
    total_sessions: int = 0
    total_projects: int = 0
    total_input_tokens: int = 0
    total_output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.total_input_tokens + self.total_output_tokens

    def to_dict(self) -> dict:
        return {
            "totalTokens": self.total_tokens,
            "totalSessions": self.total_sessions,
            "totalProjects": self.total_projects,
            "totalInputTokens": self.total_input_tokens,
            "totalOutputTokens": self.total_output_tokens,
        }


@dataclass
class ProjectStats:
    project: str          # Encoded directory name
    project_path: str     # Resolved real path, or the encoded name
    sessions: int = 0
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "projectPath": self.project_path,
            "tokens": self.tokens,
            "sessions": self.sessions,
            "inputTokens": self.input_tokens,
            "outputTokens": self.output_tokens,
        }


@dataclass
class DayStats:
    date: str             # YYYY-MM-DD
    sessions: int = 0
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "tokens": self.tokens,
            "sessions": self.sessions,
            "inputTokens": self.input_tokens,
            "outputTokens": self.output_tokens,
        }


@dataclass
class Stats:
    global_stats: GlobalStats = field(default_factory=GlobalStats)
    by_project: list[ProjectStats] = field(default_factory=list)
    by_day: list[DayStats] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "global": self.global_stats.to_dict(),
            "byProject": [p.to_dict() for p in self.by_project],
            "byDay": [d.to_dict() for d in self.by_day],
        }

"""Project, session and command history types."""

from dataclasses import dataclass, field
from typing import Any, Optional

NO_PREVIEW = "(no user messages)"


@dataclass
class SessionPreview:
    """Lightweight session entry shown inside a project listing."""

    id: str
    name: str
    file_size: int
    last_modified: str    # ISO mtime
    last_message: str     # Reference record timestamp, or last_modified

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "fileSize": self.file_size,
            "lastModified": self.last_modified,
            "lastMessage": self.last_message,
        }


@dataclass
class Project:
    name: str          # Encoded directory name
    path: str          # Same as name; the real path comes from PathResolver
    display_name: str = ""
    session_count: int = 0
    sessions: list[SessionPreview] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "displayName": self.display_name,
            "sessionCount": self.session_count,
            "sessions": [s.to_dict() for s in self.sessions],
        }


@dataclass
class SessionSummary:
    session_id: str
    project_id: str
    project_path: str
    timestamp: Optional[str] = None
    last_message: Optional[str] = None
    preview: Optional[str] = None
    slug: Optional[str] = None
    message_count: int = 0
    total_input_tokens: int = 0
    total_output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.total_input_tokens + self.total_output_tokens

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "projectId": self.project_id,
            "projectPath": self.project_path,
            "timestamp": self.timestamp,
            "lastMessage": self.last_message,
            "preview": self.preview or NO_PREVIEW,
            "slug": self.slug,
            "messageCount": self.message_count,
            "totalInputTokens": self.total_input_tokens,
            "totalOutputTokens": self.total_output_tokens,
            "totalTokens": self.total_tokens,
        }


@dataclass
class SessionDetail:
    """A full transcript. An empty `messages` list still means the file exists."""

    project: str
    session_id: str
    messages: list[dict] = field(default_factory=list)

    @property
    def message_count(self) -> int:
        return len(self.messages)

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "sessionId": self.session_id,
            "messageCount": self.message_count,
            "messages": self.messages,
        }


@dataclass
class Command:
    """One line of the global prompt history file."""

    display: str = ""
    session_id: Optional[str] = None
    project: Optional[str] = None
    timestamp: Any = None       # Epoch ms as written by Claude Code, kept raw
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: dict) -> "Command":
        display = record.get("display", "")
        return cls(
            display=display if isinstance(display, str) else "",
            session_id=record.get("sessionId"),
            project=record.get("project"),
            timestamp=record.get("timestamp"),
            raw=record,
        )

    def to_dict(self) -> dict:
        return self.raw or {
            "display": self.display,
            "sessionId": self.session_id,
            "project": self.project,
            "timestamp": self.timestamp,
        }

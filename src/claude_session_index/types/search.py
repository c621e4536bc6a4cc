"""Search result types."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

MAX_MATCHED_CONTENT = 200


class MatchType(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    COMMAND = "command"


@dataclass
class SearchResult:
    session_id: Optional[str]
    project: Optional[str]
    timestamp: Optional[str]
    matched_content: str
    match_type: MatchType

    @property
    def sort_key(self) -> str:
        return self.timestamp or ""

    def to_dict(self) -> dict:
        return {
            "sessionId": self.session_id,
            "project": self.project,
            "timestamp": self.timestamp,
            "matchedContent": self.matched_content,
            "matchType": self.match_type.value,
        }

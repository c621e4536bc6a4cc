"""Transport-agnostic request handlers returning success/error envelopes.

An HTTP layer maps each handler to a route and writes `response.body()`
with `response.status`; nothing here knows about sockets or frameworks.
"""

from dataclasses import dataclass
from typing import Any

import orjson

from claude_session_index.services.config_manager import ConfigManager
from claude_session_index.services.session_manager import SessionManager


@dataclass
class ApiResponse:
    payload: dict
    status: int = 200

    def body(self) -> bytes:
        return encode(self.payload)


def ok(data: Any) -> ApiResponse:
    return ApiResponse({"success": True, "data": data})


def error(message: str, status: int) -> ApiResponse:
    return ApiResponse({"success": False, "error": message}, status=status)


def encode(payload: dict) -> bytes:
    return orjson.dumps(payload)


def parse_limit(value: Any, default: int) -> int:
    """Lenient limit parsing: missing, invalid or non-positive values use the default."""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    return limit if limit > 0 else default


class ApiHandlers:
    """One method per endpoint of the session browser API."""

    def __init__(self, manager: SessionManager, config: ConfigManager | None = None):
        self._manager = manager
        self._config = config if config is not None else manager.config

    def projects(self) -> ApiResponse:
        return ok([p.to_dict() for p in self._manager.list_projects()])

    def sessions(self, project: str | None = None, limit: Any = None) -> ApiResponse:
        limit = parse_limit(limit, self._config.get_int("api/defaultSessionLimit"))
        sessions = self._manager.list_sessions(project or None, limit)
        return ok([s.to_dict() for s in sessions])

    def session(self, project: str, session_id: str) -> ApiResponse:
        detail = self._manager.get_session(project, session_id)
        if detail is None:
            return error("Session not found", 404)
        return ok(detail.to_dict())

    def stats(self) -> ApiResponse:
        return ok(self._manager.get_stats().to_dict())

    def history(self, limit: Any = None) -> ApiResponse:
        limit = parse_limit(limit, self._config.get_int("api/defaultHistoryLimit"))
        return ok([c.to_dict() for c in self._manager.get_history(limit)])

    def search(self, q: str | None = None, limit: Any = None) -> ApiResponse:
        query = q or ""
        if len(query) < self._config.get_int("api/minQueryLength"):
            return ok({"results": [], "total": 0})
        limit = parse_limit(limit, self._config.get_int("api/defaultSearchLimit"))
        results = [r.to_dict() for r in self._manager.search(query, limit)]
        return ok({"results": results, "total": len(results)})

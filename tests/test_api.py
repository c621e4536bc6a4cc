"""Tests for claude_session_index.api."""

import orjson
import pytest

from claude_session_index.api import ApiHandlers, parse_limit
from claude_session_index.services.session_manager import SessionManager
from helpers import assistant, user


@pytest.fixture
def manager(qapp, config, fake_clock):
    config.set_bool("watcher/enabled", False)
    m = SessionManager(config=config, clock=fake_clock)
    yield m
    m.cleanup()


@pytest.fixture
def api(manager, config):
    return ApiHandlers(manager, config)


@pytest.fixture
def populated(claude_tree):
    claude_tree.session("proj-a", "s1", [
        user("deploy service", timestamp="2024-01-01T00:00:00Z", cwd="/srv/a"),
        assistant("ok", input_tokens=3, output_tokens=4),
    ])
    claude_tree.history([{"display": f"cmd {i}", "timestamp": 1704067200000 + i} for i in range(150)])


@pytest.mark.parametrize("value,expected", [
    (None, 50), ("", 50), ("abc", 50), ("0", 50), (-3, 50), ("10", 10), (7, 7),
])
def test_parse_limit(value, expected):
    assert parse_limit(value, 50) == expected


def test_projects(api, populated):
    response = api.projects()
    assert response.status == 200
    assert response.payload["success"] is True
    [project] = response.payload["data"]
    assert project["name"] == "proj-a"
    assert project["sessionCount"] == 1


def test_sessions(api, populated):
    data = api.sessions(project="proj-a", limit="x").payload["data"]
    assert data[0]["sessionId"] == "s1"
    assert data[0]["projectPath"] == "/srv/a"
    assert data[0]["totalTokens"] == 7


def test_session_found(api, populated):
    data = api.session("proj-a", "s1").payload["data"]
    assert data["messageCount"] == 2
    assert data["messages"][0]["type"] == "user"


def test_session_not_found(api, populated):
    response = api.session("proj-a", "missing")
    assert response.status == 404
    assert response.payload == {"success": False, "error": "Session not found"}


def test_session_traversal_not_found(api, populated):
    assert api.session("proj-a", "../../etc/passwd").status == 404


def test_stats(api, populated):
    data = api.stats().payload["data"]
    assert data["global"]["totalTokens"] == 7
    assert data["byProject"][0]["projectPath"] == "/srv/a"


def test_history_default_limit(api, populated):
    data = api.history().payload["data"]
    assert len(data) == 100
    assert data[0]["display"] == "cmd 149"


def test_search(api, populated):
    data = api.search(q="deploy").payload["data"]
    assert data["total"] == 1
    assert data["results"][0]["matchType"] == "user"


@pytest.mark.parametrize("q", [None, "", "d"])
def test_search_short_query(api, populated, q):
    assert api.search(q=q).payload == {"success": True, "data": {"results": [], "total": 0}}


def test_body_is_json(api, populated):
    body = api.search(q="deploy", limit="5").body()
    assert orjson.loads(body)["data"]["results"][0]["matchedContent"] == "deploy service"


def test_defaults_come_from_manager_config(manager, config, populated):
    config.set_int("api/defaultHistoryLimit", 5)
    config.set_int("api/minQueryLength", 7)
    handlers = ApiHandlers(manager)
    assert len(handlers.history().payload["data"]) == 5
    assert handlers.search(q="deploy").payload["data"]["total"] == 0

"""Tests for claude_session_index.services.path_resolver."""

import pytest

from claude_session_index.services.path_resolver import PathResolver
from helpers import user


@pytest.fixture
def resolver(claude_tree):
    return PathResolver(claude_tree.projects_dir)


def test_progress_record_cwd(claude_tree, resolver):
    claude_tree.session("-home-wiz-app", "s1", [
        {"type": "file-history-snapshot", "snapshot": {}},
        {"type": "progress", "data": {"type": "hook_progress", "cwd": "/home/wiz/app"}},
        user("hi", cwd="/somewhere/else"),
    ])
    assert resolver.resolve("-home-wiz-app") == "/home/wiz/app"


def test_top_level_cwd(claude_tree, resolver):
    claude_tree.session("-home-wiz-my-app", "s1", [
        {"type": "summary", "summary": "x"},
        user("hi", cwd="/home/wiz/my-app"),
    ])
    assert resolver.resolve("-home-wiz-my-app") == "/home/wiz/my-app"


def test_first_file_by_name_wins(claude_tree, resolver):
    claude_tree.session("proj", "b-session", [user("hi", cwd="/from/b")])
    claude_tree.session("proj", "a-session", [user("hi", cwd="/from/a")])
    assert resolver.resolve("proj") == "/from/a"


def test_memoized_and_scanned_once(claude_tree, resolver):
    claude_tree.session("proj", "s1", [user("hi", cwd="/real/path")])

    first = resolver.resolve("proj")
    second = resolver.resolve("proj")

    assert first == second == "/real/path"
    assert resolver.scan_count == 1


def test_existing_mapping_never_overwritten(claude_tree, resolver):
    path = claude_tree.session("proj", "s1", [user("hi", cwd="/original")])
    assert resolver.resolve("proj") == "/original"

    claude_tree.session("proj", "s1", [user("hi", cwd="/changed")])
    assert path.exists()
    assert resolver.resolve("proj") == "/original"


def test_no_hint_not_memoized(claude_tree, resolver):
    claude_tree.session("proj", "s1", [user("hi")])
    assert resolver.resolve("proj") is None

    claude_tree.session("proj", "s1", [user("hi"), user("again", cwd="/later")])
    assert resolver.resolve("proj") == "/later"
    assert resolver.scan_count == 2


def test_no_transcripts(claude_tree, resolver):
    (claude_tree.projects_dir / "empty").mkdir()
    assert resolver.resolve("empty") is None
    assert len(resolver) == 0


def test_missing_project(resolver):
    assert resolver.resolve("does-not-exist") is None
    assert resolver.resolve_or_name("does-not-exist") == "does-not-exist"


def test_traversal_rejected(claude_tree, resolver):
    assert resolver.resolve("..") is None
    assert resolver.scan_count == 0


def test_max_entries_bounds_memo(claude_tree):
    resolver = PathResolver(claude_tree.projects_dir, max_entries=1)
    claude_tree.session("p1", "s", [user("hi", cwd="/one")])
    claude_tree.session("p2", "s", [user("hi", cwd="/two")])

    assert resolver.resolve("p1") == "/one"
    assert resolver.resolve("p2") == "/two"
    assert len(resolver) == 1

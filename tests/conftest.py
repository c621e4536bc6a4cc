"""Shared test fixtures for Claude Session Index."""

import os
import sys
from pathlib import Path

import pytest

from helpers import ClaudeTree


@pytest.fixture(scope="session")
def qapp():
    """Create a QCoreApplication for tests that need the Qt event loop."""
    os.environ["QT_QPA_PLATFORM"] = "offscreen"
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv or ["test"])
    yield app


@pytest.fixture
def claude_tree(tmp_path) -> ClaudeTree:
    """A temporary ~/.claude directory with an empty projects root."""
    tree = ClaudeTree(tmp_path / ".claude")
    tree.projects_dir.mkdir(parents=True)
    return tree


@pytest.fixture
def config(qapp, tmp_path, claude_tree):
    """A ConfigManager backed by an isolated INI file pointing at claude_tree."""
    from PySide6.QtCore import QSettings

    from claude_session_index.services.config_manager import ConfigManager

    settings = QSettings(str(tmp_path / "config.ini"), QSettings.IniFormat)
    cfg = ConfigManager(settings=settings)
    cfg.set_string("general/claudeDir", str(claude_tree.root))
    return cfg


@pytest.fixture
def fake_clock():
    return FakeClock()


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds

"""Shared test helpers."""

import json
from pathlib import Path

from PySide6.QtCore import QCoreApplication


def user(content, timestamp="2024-01-01T00:00:00Z", **extra) -> dict:
    record = {"type": "user", "message": {"role": "user", "content": content}, "timestamp": timestamp}
    record.update(extra)
    return record


def assistant(content, timestamp="2024-01-01T00:00:05Z", input_tokens=None, output_tokens=None, **extra) -> dict:
    message = {"role": "assistant", "content": content}
    if input_tokens is not None or output_tokens is not None:
        message["usage"] = {"input_tokens": input_tokens or 0, "output_tokens": output_tokens or 0}
    record = {"type": "assistant", "message": message, "timestamp": timestamp}
    record.update(extra)
    return record


def write_jsonl(path: Path, records: list, raw_lines: dict[int, str] | None = None) -> Path:
    """Write records as JSONL. `raw_lines` inserts literal lines at given positions."""
    lines = [json.dumps(r) for r in records]
    for position, line in sorted((raw_lines or {}).items()):
        lines.insert(position, line)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n")
    return path


class ClaudeTree:
    """Builder for a fake ~/.claude directory."""

    def __init__(self, root: Path):
        self.root = root
        self.projects_dir = root / "projects"
        self.history_file = root / "history.jsonl"

    def session(self, project: str, session_id: str, records: list, **kwargs) -> Path:
        return write_jsonl(self.projects_dir / project / f"{session_id}.jsonl", records, **kwargs)

    def history(self, entries: list, **kwargs) -> Path:
        return write_jsonl(self.history_file, entries, **kwargs)


def process_events(qapp, rounds: int = 20, delay: float = 0.05):
    """Pump the Qt event loop so watcher and timer callbacks run."""
    import time

    for _ in range(rounds):
        qapp.processEvents()
        time.sleep(delay)
    QCoreApplication.processEvents()

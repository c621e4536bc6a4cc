"""In-memory index, search and token statistics over Claude Code session logs."""

__version__ = "0.1.0"

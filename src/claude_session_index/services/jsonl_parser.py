"""Tolerant JSONL readers for Claude Code transcript and history files."""

import logging
import os
from itertools import islice
from pathlib import Path
from typing import Any, Iterator

import orjson

logger = logging.getLogger(__name__)

# Max size for a single JSONL line (10MB)
MAX_LINE_SIZE = 10 * 1024 * 1024

# Initial window for reading the tail of a file
TAIL_CHUNK = 64 * 1024


def read_jsonl(file_path: str | Path, limit: int | None = None) -> list[dict]:
    """Read a JSONL file into a list of records.

    With `limit`, at most that many records are returned, counted from the
    start of the file. Malformed lines are skipped; an unreadable file
    yields an empty list.
    """
    records = stream_jsonl(file_path)
    if limit is not None:
        return list(islice(records, max(limit, 0)))
    return list(records)


def stream_jsonl(file_path: str | Path) -> Iterator[dict]:
    """Stream-decode a JSONL file, yielding one dict per valid line.

    Malformed lines, non-object values and lines exceeding MAX_LINE_SIZE are
    skipped. I/O errors end the stream silently.
    """
    path = Path(file_path)
    line_num = 0
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                line_num += 1
                record = _decode_line(line, line_num, path)
                if record is not None:
                    yield record
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)


def read_last_record(file_path: str | Path) -> dict | None:
    """Return the last decodable record of a JSONL file without reading all of it.

    Reads a window from the end of the file, growing it until a complete
    valid line is found or the whole file has been covered.
    """
    path = Path(file_path)
    try:
        with open(path, "rb") as f:
            f.seek(0, os.SEEK_END)
            end = f.tell()
            window = TAIL_CHUNK
            while True:
                start = max(0, end - window)
                f.seek(start)
                lines = f.read(end - start).splitlines()
                if start > 0 and lines:
                    # First line of the window may be cut in half
                    lines = lines[1:]
                for line in reversed(lines):
                    record = _decode_line(line, 0, path)
                    if record is not None:
                        return record
                if start == 0 or window >= MAX_LINE_SIZE:
                    return None
                window *= 4
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None


def read_json(file_path: str | Path) -> Any | None:
    """Read a whole file as a single JSON document. Returns None on any error."""
    path = Path(file_path)
    try:
        return orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as e:
        logger.debug("Cannot load JSON document %s: %s", path, e)
        return None


def _decode_line(line: str | bytes, line_num: int, path: Path) -> dict | None:
    line = line.strip()
    if not line:
        return None

    if len(line) > MAX_LINE_SIZE:
        logger.warning(
            "Line %d in %s exceeds %dMB, skipping",
            line_num, path.name, MAX_LINE_SIZE // (1024 * 1024),
        )
        return None

    try:
        raw = orjson.loads(line)
    except orjson.JSONDecodeError as e:
        logger.debug("Malformed JSON at line %d in %s: %s", line_num, path.name, e)
        return None

    if not isinstance(raw, dict):
        return None
    return raw

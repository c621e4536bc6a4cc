"""Timestamp normalization for transcript and history records."""

from datetime import datetime, timezone
from typing import Any


def to_iso(value: Any, epoch_ms: bool | None = None) -> str | None:
    """Normalize an epoch or ISO value to ISO-8601 UTC.

    Numeric values are read as milliseconds when `epoch_ms` is True and as
    seconds when it is False. Left as None, magnitudes above 1e12 are
    milliseconds and anything smaller is seconds, so callers that know
    their unit should say so.

    1700000000000 -> 2023-11-14T22:13:20.000Z
    Returns None when the value cannot be interpreted.
    """
    dt = _parse(value, epoch_ms)
    if dt is None:
        return None
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def day_key(timestamp: str) -> str:
    """Calendar date of an ISO timestamp string: its first 10 characters."""
    return timestamp[:10]


def _parse(value: Any, epoch_ms: bool | None) -> datetime | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_epoch(value, epoch_ms)
    if isinstance(value, str) and value:
        try:
            return _from_epoch(float(value), epoch_ms)
        except ValueError:
            pass
        try:
            # ISO 8601 format: "2026-02-13T12:00:00.000Z"
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
    return None


def _from_epoch(value: float, epoch_ms: bool | None) -> datetime | None:
    if epoch_ms is None:
        epoch_ms = abs(value) > 1e12
    seconds = value / 1000 if epoch_ms else value
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None

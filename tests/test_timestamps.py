"""Tests for claude_session_index.utils.timestamps."""

import pytest

from claude_session_index.utils.timestamps import day_key, to_iso


class TestToIso:
    def test_epoch_milliseconds(self):
        assert to_iso(1700000000000) == "2023-11-14T22:13:20.000Z"

    def test_epoch_seconds(self):
        assert to_iso(1700000000) == "2023-11-14T22:13:20.000Z"

    def test_millisecond_precision_kept(self):
        assert to_iso(1700000000123) == "2023-11-14T22:13:20.123Z"

    def test_explicit_milliseconds_below_heuristic_threshold(self):
        # 999999999000 ms is 2001-09-09, which the magnitude rule would read as seconds
        assert to_iso(999999999000, epoch_ms=True) == "2001-09-09T01:46:39.000Z"
        assert to_iso(1000, epoch_ms=True) == "1970-01-01T00:00:01.000Z"

    def test_explicit_seconds(self):
        assert to_iso(1700000000.5, epoch_ms=False) == "2023-11-14T22:13:20.500Z"

    def test_numeric_string(self):
        assert to_iso("1700000000000") == "2023-11-14T22:13:20.000Z"

    def test_iso_string_normalized_to_utc(self):
        assert to_iso("2024-01-01T02:00:00+02:00") == "2024-01-01T00:00:00.000Z"
        assert to_iso("2024-01-01T00:00:00.250Z") == "2024-01-01T00:00:00.250Z"

    @pytest.mark.parametrize("value", [None, "", "yesterday", True, {}, [], float("inf")])
    def test_unparsable(self, value):
        assert to_iso(value) is None


def test_day_key():
    assert day_key("2024-03-05T23:59:59.999Z") == "2024-03-05"

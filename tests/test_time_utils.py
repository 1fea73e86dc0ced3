"""Tests for tradescope.time_utils – centralised timestamp handling."""

from datetime import datetime, timezone

import pytest

from tradescope.time_utils import now_utc, parse_timestamp, to_iso, to_ms


# ---------------------------------------------------------------------------
# parse_timestamp
# ---------------------------------------------------------------------------

class TestParseTimestamp:

    def test_iso_string_with_z(self):
        dt = parse_timestamp("2025-01-15T12:30:00Z")
        assert dt == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)

    def test_iso_string_with_offset(self):
        dt = parse_timestamp("2025-01-15T12:30:00+00:00")
        assert dt == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)

    def test_iso_string_space_separator(self):
        dt = parse_timestamp("2025-01-15 12:30:00+00:00")
        assert dt == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)

    def test_slash_date_format(self):
        dt = parse_timestamp("2025/01/15T12:30:00Z")
        assert dt == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)

    def test_date_only(self):
        dt = parse_timestamp("2025-01-15")
        assert dt == datetime(2025, 1, 15, tzinfo=timezone.utc)

    def test_integer_milliseconds(self):
        # 2025-01-15T00:00:00Z = 1736899200000 ms
        dt = parse_timestamp(1736899200000)
        assert dt == datetime(2025, 1, 15, tzinfo=timezone.utc)

    def test_float_milliseconds(self):
        dt = parse_timestamp(1736899200000.0)
        assert dt == datetime(2025, 1, 15, tzinfo=timezone.utc)

    def test_numeric_string(self):
        dt = parse_timestamp("1736899200000")
        assert dt == datetime(2025, 1, 15, tzinfo=timezone.utc)

    def test_naive_iso_gets_utc(self):
        dt = parse_timestamp("2025-01-15T12:30:00")
        assert dt.tzinfo == timezone.utc
        assert dt.hour == 12

    def test_naive_datetime_gets_utc(self):
        dt = parse_timestamp(datetime(2025, 1, 15, 12, 30))
        assert dt == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)

    def test_aware_datetime_passes_through(self):
        src = datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)
        assert parse_timestamp(src) is src

    def test_negative_numeric_string(self):
        dt = parse_timestamp("-1000")
        assert dt.tzinfo == timezone.utc
        assert dt.year == 1969

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_string_raises(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_timestamp("not a timestamp")


# ---------------------------------------------------------------------------
# to_ms / to_iso / now_utc
# ---------------------------------------------------------------------------

class TestConversions:

    def test_to_ms(self):
        assert to_ms(datetime(2025, 1, 15, tzinfo=timezone.utc)) == 1736899200000

    def test_to_ms_round_trip(self):
        ms = to_ms(parse_timestamp("2025-01-15T12:30:00Z"))
        assert parse_timestamp(ms) == datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc)

    def test_to_iso_uses_space_separator(self):
        result = to_iso(datetime(2025, 1, 15, 12, 30, tzinfo=timezone.utc))
        assert result == "2025-01-15 12:30:00+00:00"

    def test_now_utc_is_aware(self):
        dt = now_utc()
        assert dt.tzinfo is not None
        assert abs((datetime.now(timezone.utc) - dt).total_seconds()) < 2.0

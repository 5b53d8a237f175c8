"""Tests for timestamp helpers."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from ingest_admin.utils.time import format_timestamp, parse_timestamp, utc_now


class TestUtcNow:

    def test_is_aware_utc(self):
        now = utc_now()
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)


class TestFormatTimestamp:

    def test_formats_aware_datetime(self):
        ts = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert format_timestamp(ts) == "2024-01-02T03:04:05+00:00"

    def test_converts_other_offsets_to_utc(self):
        ts = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(ts) == "2024-01-02T03:04:05+00:00"

    def test_naive_is_treated_as_utc(self):
        assert format_timestamp(datetime(2024, 1, 2)) == "2024-01-02T00:00:00+00:00"

    def test_defaults_to_now(self):
        with patch('ingest_admin.utils.time.datetime') as mock_datetime:
            mock_datetime.now.return_value = datetime(2023, 1, 1, 12, 0, tzinfo=timezone.utc)

            assert format_timestamp() == "2023-01-01T12:00:00+00:00"
            mock_datetime.now.assert_called_once_with(timezone.utc)


class TestParseTimestamp:

    def test_none_and_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_parses_iso(self):
        assert parse_timestamp("2024-01-02T03:04:05+00:00") == datetime(
            2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc
        )

    def test_naive_string_gets_utc(self):
        assert parse_timestamp("2024-01-02T03:04:05").tzinfo == timezone.utc

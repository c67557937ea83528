"""Tests for date and timezone helpers."""

from datetime import datetime, timezone

from kahunas_cli.dates import (
    format_human_timestamp,
    format_relative,
    is_iso_after_now,
    resolve_timezone,
)

NOW = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)


class TestFormatting:
    def test_relative(self):
        assert format_relative(datetime(2025, 1, 7, 12, 0, tzinfo=timezone.utc), NOW) == "3 days ago"
        assert format_relative(datetime(2025, 1, 10, 14, 0, tzinfo=timezone.utc), NOW) == "in 2 hours"
        assert format_relative(datetime(2025, 1, 10, 11, 59, tzinfo=timezone.utc), NOW) == "1 minute ago"
        assert format_relative(NOW, NOW) == "just now"

    def test_human_timestamp(self):
        assert format_human_timestamp("2025-01-07T12:00:00+00:00", NOW) == "2025-01-07 12:00:00 (3 days ago)"

    def test_unparseable_is_returned_raw(self):
        assert format_human_timestamp("soon", NOW) == "soon"


class TestIsIsoAfterNow:
    def test_compares_with_now(self):
        assert is_iso_after_now("2025-02-01T00:00:00Z", NOW)
        assert not is_iso_after_now("2025-01-01T00:00:00Z", NOW)
        assert not is_iso_after_now("garbage", NOW)


class TestResolveTimezone:
    def test_explicit_value_wins(self, monkeypatch):
        monkeypatch.setenv("KAHUNAS_TIMEZONE", "Asia/Tokyo")

        assert resolve_timezone("America/New_York") == "America/New_York"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("KAHUNAS_TIMEZONE", "Asia/Tokyo")

        assert resolve_timezone() == "Asia/Tokyo"

    def test_tz_variable(self, monkeypatch):
        monkeypatch.delenv("KAHUNAS_TIMEZONE", raising=False)
        monkeypatch.setenv("TZ", "Europe/Madrid")

        assert resolve_timezone() == "Europe/Madrid"

    def test_local_zone_name(self, monkeypatch):
        monkeypatch.delenv("KAHUNAS_TIMEZONE", raising=False)
        monkeypatch.delenv("TZ", raising=False)
        monkeypatch.setattr("kahunas_cli.dates.get_localzone_name", lambda: "America/Chicago")

        assert resolve_timezone() == "America/Chicago"

    def test_unknown_local_zone_falls_back(self, monkeypatch):
        monkeypatch.delenv("KAHUNAS_TIMEZONE", raising=False)
        monkeypatch.delenv("TZ", raising=False)
        monkeypatch.setattr("kahunas_cli.dates.get_localzone_name", lambda: None)

        assert resolve_timezone() == "Europe/London"

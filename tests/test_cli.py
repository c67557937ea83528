"""Tests for the command-line interface."""

import json

import pytest

from kahunas_cli.cache import write_calendar_cache, write_program_cache
from kahunas_cli.cli import build_parser, output_json, program_ids_of, to_jsonable
from kahunas_cli.config import read_config
from kahunas_cli.models import ProgramSummary, WorkoutEventInfo, WorkoutEventSummary


def run(argv: list[str]):
    args = build_parser().parse_args(argv)
    args.func(args)


class TestParser:
    """Test argument parsing."""

    def test_events_options(self):
        args = build_parser().parse_args(["workout", "events", "--limit", "0", "--cached", "-o", "json"])

        assert args.limit == 0
        assert args.cached is True
        assert args.output == "json"
        assert args.minimal is False

    def test_events_defaults(self):
        args = build_parser().parse_args(["workout", "events"])

        assert args.limit == 1
        assert args.time_zone is None
        assert args.output == "summary"

    def test_minimal_and_full_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["workout", "events", "--minimal", "--full"])

    def test_negative_limit_is_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["workout", "events", "--limit", "-1"])

    def test_token_defaults_to_help(self):
        args = build_parser().parse_args(["token"])

        assert args.func.__name__ == "cmd_token_help"

    def test_common_flags(self):
        args = build_parser().parse_args(["checkins", "list", "-t", "tok", "-u", "u-1", "--page", "3"])

        assert (args.token, args.user_uuid, args.page, args.rpp) == ("tok", "u-1", 3, 12)


class TestJsonOutput:
    def test_models_drop_unset_fields(self):
        summary = WorkoutEventSummary(event=WorkoutEventInfo(id=1), program=ProgramSummary(uuid="p1"))

        assert to_jsonable([summary]) == [{"event": {"id": 1}, "program": {"uuid": "p1"}}]

    def test_output_to_file(self, tmp_path):
        path = tmp_path / "out.json"

        output_json({"events": []}, str(path))

        assert json.loads(path.read_text()) == {"events": []}

    def test_program_ids_are_unique(self):
        events = [{"program": "a"}, {"program": "b"}, {"program": "a"}, {"program": ""}, {}]

        assert program_ids_of(events) == ["a", "b"]


class TestTokenCommands:
    """Test saving credentials."""

    def test_set_writes_config(self, config_dir, capsys):
        run(["token", "set", "plain-token", "--csrf", "csrf", "--cookie", "a=1", "-u", "u-1", "--time-zone", "UTC"])

        config = read_config()
        assert config.token == "plain-token"
        assert config.csrf_token == "csrf"
        assert config.auth_cookie == "a=1"
        assert config.user_uuid == "u-1"
        assert config.timezone == "UTC"
        assert config.token_updated_at is not None
        assert config.token_expires_at is None

    def test_show_lists_login(self, config_dir, capsys):
        (config_dir / "auth.json").write_text(json.dumps({"email": "me@example.com", "password": "secret"}))
        run(["token", "set", "plain-token"])
        capsys.readouterr()

        run(["token", "show"])

        assert "me@example.com" in capsys.readouterr().out

    def test_show_rejects_incomplete_auth(self, config_dir, capsys):
        (config_dir / "auth.json").write_text(json.dumps({"email": "me@example.com"}))

        with pytest.raises(SystemExit):
            run(["token", "show"])

        assert "Missing" in capsys.readouterr().out

    def test_set_keeps_existing_values(self, config_dir, capsys):
        run(["token", "set", "first", "-u", "u-1"])
        run(["token", "set", "second"])

        config = read_config()
        assert config.token == "second"
        assert config.user_uuid == "u-1"


class TestCachedEvents:
    """Test 'workout events --cached' against the local cache."""

    @pytest.fixture
    def cached_calendar(self, config_dir, posterior_program):
        events = [
            {"id": 1, "program": "p1", "title": "Day 1: Anterior", "start": "2025-01-01 09:00:00"},
            {"id": 2, "program": "p1", "title": "Day 2: Posterior", "start": "2025-01-02 09:00:00"},
            {"id": 3, "program": "p9", "title": "Other", "start": "2024-12-30 09:00:00"},
        ]
        write_calendar_cache(events, "Europe/London", "u-1")
        write_program_cache("p1", posterior_program)
        return events

    def test_latest_event_as_json(self, cached_calendar, capsys):
        run(["workout", "events", "--cached", "-o", "json"])

        output = json.loads(capsys.readouterr().out)
        assert output["timezone"] == "Europe/London"
        assert [entry["event"]["id"] for entry in output["events"]] == [2]
        day = output["events"][0]["workout_day"]
        assert day["sections"][0]["groups"][0]["exercises"][0]["name"] == "Deadlift"

    def test_all_events_of_program(self, cached_calendar, capsys):
        run(["workout", "events", "--cached", "--limit", "0", "--program", "p1", "-o", "json"])

        output = json.loads(capsys.readouterr().out)
        assert output["filters"] == {"program": "p1", "workout": None}
        assert [entry["event"]["id"] for entry in output["events"]] == [1, 2]

    def test_minimal_prints_raw_events(self, cached_calendar, capsys):
        run(["workout", "events", "--cached", "--limit", "2", "--minimal"])

        assert [event["id"] for event in json.loads(capsys.readouterr().out)] == [1, 2]

    def test_missing_cache_exits(self, config_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            run(["workout", "events", "--cached"])

        assert exc.value.code == 1
        assert "No cached calendar" in capsys.readouterr().out


class TestConfigErrors:
    """Test the error boundary around config loading."""

    def test_corrupt_config_exits(self, config_dir, capsys):
        (config_dir / "config.json").write_text("{not json")

        with pytest.raises(SystemExit) as exc:
            run(["workout", "events", "--cached"])

        assert exc.value.code == 1
        assert "Invalid JSON" in capsys.readouterr().out

    def test_token_show_reports_corrupt_config(self, config_dir, capsys):
        (config_dir / "config.json").write_text("[]")

        with pytest.raises(SystemExit) as exc:
            run(["token", "show"])

        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().out
